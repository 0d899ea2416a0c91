"""
Consumer side of the gesture core: UI state plus fire-and-forget log submission.
"""
import asyncio
import logging
from typing import Optional, Set

from .types import GestureEvent, GestureLabel, LogClientProto

logger = logging.getLogger(__name__)


class GestureSink:
    """
    Receives confirmed gestures and forwards them to the backend log.

    notify() never blocks and never raises: submissions run as background
    tasks on the current event loop and their failures are only logged.
    """

    def __init__(self, client: LogClientProto):
        self.client = client
        self.last_event: Optional[GestureEvent] = None
        self.submitted = 0
        self.failed = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def current_label(self) -> Optional[GestureLabel]:
        return self.last_event.label if self.last_event else None

    def notify(self, event: GestureEvent) -> None:
        """Record the event for the UI and schedule its log submission."""
        self.last_event = event
        logger.info(f"✋ Gesture confirmed: {event.label} at {event.timestamp:.3f}")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, gesture log not submitted")
            return

        task = loop.create_task(self._submit(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _submit(self, event: GestureEvent) -> None:
        try:
            await self.client.submit_log("gesture", {"label": event.label})
            self.submitted += 1
        except Exception as e:
            self.failed += 1
            logger.error(f"❌ Failed to save gesture log: {e}")

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for in-flight submissions."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Finish in-flight submissions and release the client."""
        await self.drain()
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()
