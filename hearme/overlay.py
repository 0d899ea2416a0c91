"""
Skeleton overlay rendering for the camera preview.
"""
import cv2
import numpy as np
from typing import Optional

from .types import FINGER_TIPS, HAND_CONNECTIONS, GestureLabel, HandFrame

# BGR
EDGE_COLOR = (255, 114, 11)
JOINT_COLOR = (58, 20, 12)
TIP_COLOR = (136, 150, 0)
LABEL_COLOR = (0, 255, 0)


def format_label(label: GestureLabel) -> str:
    return label.replace('_', ' ')


def draw_hand_overlay(frame: np.ndarray, landmarks: Optional[HandFrame],
                      label: Optional[GestureLabel] = None) -> np.ndarray:
    """
    Draw the hand skeleton and the last confirmed gesture on the frame.

    Args:
        frame: BGR image, drawn on in place
        landmarks: 21 normalized landmarks, or None to skip the skeleton
        label: Last confirmed gesture label to print, if any

    Returns:
        The same frame
    """
    height, width = frame.shape[:2]

    if landmarks is not None:
        points = [(int(lm.x * width), int(lm.y * height)) for lm in landmarks]

        for a, b in HAND_CONNECTIONS:
            if a < len(points) and b < len(points):
                cv2.line(frame, points[a], points[b], EDGE_COLOR, 2)

        for i, (px, py) in enumerate(points):
            color = TIP_COLOR if i in FINGER_TIPS else JOINT_COLOR
            cv2.circle(frame, (px, py), 4, color, -1)

    if label is not None:
        cv2.putText(frame, f"Detected gesture: {format_label(label)}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, LABEL_COLOR, 2)

    return frame
