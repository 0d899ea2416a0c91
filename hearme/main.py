"""
Main application for camera-based gesture recognition.
"""
import argparse
import asyncio
import logging
import time
from typing import Optional

import cv2
from dotenv import load_dotenv

from .client import BackendClient
from .config import load_config
from .gestures import GestureProcessor
from .landmarks import HandsTracker
from .overlay import draw_hand_overlay
from .sink import GestureSink
from .sink_mock import MockGestureSink

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Camera loop: landmarks -> classifier -> stabilizer -> sink."""

    def __init__(self, config_path: Optional[str] = None, offline: bool = False):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker.from_config(self.config.mediapipe)

        if offline:
            self.sink = MockGestureSink()
            logger.info("📴 Offline mode - gestures are printed, not logged")
        else:
            self.sink = GestureSink(BackendClient.from_config(self.config.backend))

        self.gesture_processor = GestureProcessor(self.config.gestures.stabilizer)

        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        print(f"Starting {self.config.display.window_name}")
        print("🎯 Gestures: thumbs up, open palm, fist")
        print("Press 'q' to quit")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                landmarks = self.tracker.process(frame)
                raw_label, event = self.gesture_processor.process_frame(
                    landmarks=landmarks,
                    t_now=time.monotonic()
                )

                if event:
                    self.sink.notify(event)

                display = self.config.display
                draw_hand_overlay(
                    frame,
                    landmarks if display.show_landmarks else None,
                    self.sink.current_label if display.show_label else None
                )

                status_text = f"Raw: {raw_label or '-'}" if landmarks else "No hand detected"
                cv2.putText(frame, status_text, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
                cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

                cv2.imshow(display.window_name, frame)

                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break

                # let pending log submissions progress
                await asyncio.sleep(0)
        finally:
            self.gesture_processor.reset()
            await self.sink.aclose()
            self.tracker.close()
            self.cap.release()
            cv2.destroyAllWindows()

    def __del__(self):
        """Cleanup resources."""
        if hasattr(self, 'cap') and self.cap.isOpened():
            self.cap.release()


async def main(config_path: Optional[str] = None, offline: bool = False):
    """Entry point for the application."""
    try:
        app = GestureRecognitionApp(config_path=config_path, offline=offline)
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    except (RuntimeError, FileNotFoundError) as e:
        logger.error(f"❌ {e}")


def cli():
    parser = argparse.ArgumentParser(description="HearMe camera gesture recognition")
    parser.add_argument("--config", help="Path to YAML config (defaults to the packaged one)")
    parser.add_argument("--offline", action="store_true", help="Print gestures instead of logging them")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(config_path=args.config, offline=args.offline))


if __name__ == "__main__":
    cli()
