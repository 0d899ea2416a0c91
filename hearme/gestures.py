"""
Gesture recognition: per-frame landmark classification and temporal stabilization.
"""
import math
from typing import Callable, List, Optional, Tuple

from .config import StabilizerConfig
from .types import (
    FingerState, GestureEvent, GestureLabel, HandFrame, StabilizerState,
    THUMBS_UP, OPEN_PALM, FIST, NUM_LANDMARKS,
    THUMB_MCP, THUMB_TIP, INDEX_PIP, INDEX_TIP, MIDDLE_PIP, MIDDLE_TIP,
    RING_PIP, RING_TIP, PINKY_PIP, PINKY_TIP,
)


def _y(frame: HandFrame, idx: int) -> float:
    y = float(frame[idx].y)
    if not math.isfinite(y):
        raise ValueError(f"landmark {idx} has non-finite y")
    return y


def finger_extended(frame: HandFrame, tip_idx: int, pip_idx: int) -> bool:
    """A finger is extended when its tip sits above (smaller y than) its PIP joint."""
    return _y(frame, tip_idx) < _y(frame, pip_idx)


def thumb_up(frame: HandFrame) -> bool:
    """Thumb tip above the thumb base joint."""
    return _y(frame, THUMB_TIP) < _y(frame, THUMB_MCP)


def finger_state(frame: HandFrame) -> FingerState:
    """
    Summarize finger flexion for one frame.

    Raises on malformed landmarks; use classify() for the tolerant path.
    """
    return FingerState(
        index_extended=finger_extended(frame, INDEX_TIP, INDEX_PIP),
        middle_extended=finger_extended(frame, MIDDLE_TIP, MIDDLE_PIP),
        ring_extended=finger_extended(frame, RING_TIP, RING_PIP),
        pinky_extended=finger_extended(frame, PINKY_TIP, PINKY_PIP),
        thumb_up=thumb_up(frame),
    )


# Evaluated top to bottom, first match wins. The fist rule excludes a raised
# thumb so it can never overlap thumbs_up.
GESTURE_RULES: List[Tuple[GestureLabel, Callable[[FingerState], bool]]] = [
    (THUMBS_UP, lambda f: f.thumb_up and f.all_folded),
    (OPEN_PALM, lambda f: f.extended_count >= 3),
    (FIST, lambda f: f.all_folded and not f.thumb_up),
]


def classify(frame: Optional[HandFrame]) -> Optional[GestureLabel]:
    """
    Map one hand frame to a gesture label.

    Uses only the y ordering of fingertips against their PIP joints, so it is
    independent of horizontal hand position but sensitive to camera roll.

    Args:
        frame: 21 landmarks, or None if no hand is visible

    Returns:
        "thumbs_up", "open_palm", "fist", or None when nothing matches or the
        frame is invalid
    """
    if frame is None:
        return None

    try:
        if len(frame) < NUM_LANDMARKS:
            return None
        fingers = finger_state(frame)
    except (AttributeError, TypeError, ValueError, IndexError):
        return None

    for label, rule in GESTURE_RULES:
        if rule(fingers):
            return label
    return None


class GestureStabilizer:
    """
    Turns the noisy per-frame label stream into sparse confirmed events.

    A label has to be the raw classification for `stability_threshold`
    consecutive frames, and confirmed events are spaced by more than
    `debounce_interval_ms` regardless of label.
    """

    def __init__(self, cfg: Optional[StabilizerConfig] = None):
        self.cfg = cfg or StabilizerConfig()
        self.debounce_s = self.cfg.debounce_interval_ms / 1000.0
        self.state = StabilizerState()

    def observe(self, raw_label: Optional[GestureLabel], now: float) -> Optional[GestureEvent]:
        """
        Feed one frame's raw label.

        Args:
            raw_label: Classifier output for this frame (None for no/invalid hand)
            now: Frame timestamp in seconds

        Returns:
            GestureEvent if the label is confirmed on this frame, None otherwise
        """
        state = self.state

        if raw_label is not None and raw_label == state.last_raw_label:
            state.consecutive_count += 1
        else:
            state.last_raw_label = raw_label
            state.consecutive_count = 1 if raw_label is not None else 0

        if raw_label is None or state.consecutive_count < self.cfg.stability_threshold:
            return None

        if state.last_emitted_at is not None and now - state.last_emitted_at <= self.debounce_s:
            return None

        state.last_emitted_at = now
        return GestureEvent(label=raw_label, timestamp=now)

    def hand_lost(self) -> None:
        """Called when the frame source reports no hand."""
        if self.cfg.reset_debounce_on_hand_lost:
            self.state.last_emitted_at = None

    def reset(self) -> None:
        """Discard all session state."""
        self.state = StabilizerState()


class GestureProcessor:
    """
    Runs classification and stabilization for each incoming frame.
    """

    def __init__(self, cfg: Optional[StabilizerConfig] = None):
        self.stabilizer = GestureStabilizer(cfg)
        self.last_label: Optional[GestureLabel] = None

    def process_frame(self, landmarks: Optional[HandFrame],
                      t_now: float) -> Tuple[Optional[GestureLabel], Optional[GestureEvent]]:
        """
        Process a frame.

        Args:
            landmarks: Hand landmarks (None if no hand detected)
            t_now: Current timestamp in seconds

        Returns:
            Tuple of (raw_label, confirmed_event)
        """
        if landmarks is None:
            self.stabilizer.hand_lost()

        label = classify(landmarks)
        self.last_label = label
        event = self.stabilizer.observe(label, t_now)
        return label, event

    def reset(self) -> None:
        self.stabilizer.reset()
        self.last_label = None
