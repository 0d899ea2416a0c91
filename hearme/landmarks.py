"""
Hand landmark detection using MediaPipe.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, List

from .config import MediaPipeConfig
from .types import Landmark


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, model_complexity: int = 0,
                 min_detection_conf: float = 0.78, min_tracking_conf: float = 0.7):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            model_complexity: 0 (fast) or 1 (accurate)
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    @classmethod
    def from_config(cls, cfg: MediaPipeConfig) -> "HandsTracker":
        return cls(
            max_num_hands=cfg.max_num_hands,
            model_complexity=cfg.model_complexity,
            min_detection_conf=cfg.min_detection_confidence,
            min_tracking_conf=cfg.min_tracking_confidence
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Landmark]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 Landmarks with x, y in [0..1], or None if no hand detected
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # Only the first hand is tracked
            hand_landmarks = results.multi_hand_landmarks[0]
            return [Landmark(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]

        return None

    def close(self) -> None:
        self.hands.close()
