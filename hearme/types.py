"""
Type definitions for the gesture recognition core.
"""
from dataclasses import dataclass
from typing import Any, Literal, NamedTuple, Optional, Protocol, Sequence, Tuple, runtime_checkable


class Landmark(NamedTuple):
    """Normalized hand landmark. x, y in [0..1], z is relative depth."""
    x: float
    y: float
    z: float = 0.0


# 21 landmarks in MediaPipe hand topology
HandFrame = Sequence[Landmark]

GestureLabel = Literal["thumbs_up", "open_palm", "fist"]

THUMBS_UP: GestureLabel = "thumbs_up"
OPEN_PALM: GestureLabel = "open_palm"
FIST: GestureLabel = "fist"

# Landmark indices
NUM_LANDMARKS = 21
THUMB_MCP = 2
THUMB_TIP = 4
INDEX_PIP, INDEX_TIP = 6, 8
MIDDLE_PIP, MIDDLE_TIP = 10, 12
RING_PIP, RING_TIP = 14, 16
PINKY_PIP, PINKY_TIP = 18, 20

FINGER_TIPS = (THUMB_TIP, INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)

# Skeleton edges (thumb, index, middle, ring, pinky)
HAND_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (17, 18), (18, 19), (19, 20),
)


@dataclass
class FingerState:
    """Per-frame finger flexion summary used by the classifier rules."""
    index_extended: bool
    middle_extended: bool
    ring_extended: bool
    pinky_extended: bool
    thumb_up: bool

    @property
    def extended_count(self) -> int:
        return sum((self.index_extended, self.middle_extended,
                    self.ring_extended, self.pinky_extended))

    @property
    def all_folded(self) -> bool:
        return self.extended_count == 0


@dataclass(frozen=True)
class GestureEvent:
    """Confirmed gesture emitted by the stabilizer."""
    label: GestureLabel
    timestamp: float  # seconds


@dataclass
class StabilizerState:
    """Mutable state of one detection session."""
    last_raw_label: Optional[GestureLabel] = None
    consecutive_count: int = 0
    last_emitted_at: Optional[float] = None  # None until the first event


@runtime_checkable
class GestureSinkProto(Protocol):
    """Consumer of confirmed gesture events."""

    def notify(self, event: GestureEvent) -> None:
        """Receive a confirmed gesture. Must not block frame processing."""
        ...


@runtime_checkable
class LogClientProto(Protocol):
    """Anything that can store a log record in the backend."""

    async def submit_log(self, log_type: str, data: dict) -> Any:
        ...
