"""
HearMe - assistive communication toolkit

Hand gesture recognition from MediaPipe landmarks, plus a small backend for
speech, gesture, translation and SOS logs.
"""

__version__ = "1.0.0"
__author__ = "HearMe Team"

from .types import GestureEvent, Landmark, StabilizerState, GestureSinkProto
from .config import load_config, Cfg, STABILITY_THRESHOLD, DEBOUNCE_INTERVAL_MS, MAX_HANDS
from .gestures import classify, GestureStabilizer, GestureProcessor, GESTURE_RULES
from .sink import GestureSink
from .sink_mock import MockGestureSink

__all__ = [
    "GestureEvent",
    "Landmark",
    "StabilizerState",
    "GestureSinkProto",
    "load_config",
    "Cfg",
    "STABILITY_THRESHOLD",
    "DEBOUNCE_INTERVAL_MS",
    "MAX_HANDS",
    "classify",
    "GestureStabilizer",
    "GestureProcessor",
    "GESTURE_RULES",
    "GestureSink",
    "MockGestureSink",
]
