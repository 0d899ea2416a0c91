"""
Mock sink for running and testing the gesture core without a backend.
"""
from typing import List, Optional

from .types import GestureEvent, GestureLabel


class MockGestureSink:
    """Mock sink that prints confirmed gestures instead of submitting them."""

    def __init__(self, verbose: bool = True):
        """Initialize the mock sink."""
        self.verbose = verbose
        self.events: List[GestureEvent] = []

    @property
    def current_label(self) -> Optional[GestureLabel]:
        return self.events[-1].label if self.events else None

    def notify(self, event: GestureEvent) -> None:
        """Print the gesture instead of logging it to the backend."""
        self.events.append(event)
        if self.verbose:
            print(f"[MockGestureSink] Gesture: {event.label} t={event.timestamp:.3f} (call #{len(self.events)})")

    async def aclose(self) -> None:
        pass

    def reset_counters(self) -> None:
        """Forget recorded events."""
        self.events.clear()
