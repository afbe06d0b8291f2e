"""Main entry point for Dual-Zone Clock."""

import argparse
import datetime
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

from PIL import Image

from .config import Config, load_config
from .display import Display
from .errors import ConfigurationError
from .face import DialRenderer, FrameContext, PillowSurface
from .face.colors import BLACK
from .face.font_manager import get_font_manager
from .face.zones import resolve_zone
from .http_server import create_server, start_server_thread

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)

logger = logging.getLogger(__name__)


class DualZoneClock:
    """Host application: ticks, renders the face and pushes it to the display."""

    def __init__(self, config: Config):
        """
        Initialize the clock.

        Args:
            config: Application configuration

        Raises:
            ConfigurationError: If a zone or interval is invalid.
        """
        self.config = config
        self.running = False
        self._last_frame: Optional[Image.Image] = None
        self._stop_event = threading.Event()
        # Renders come from the main loop and the HTTP thread
        self._render_lock = threading.Lock()

        self.primary = config.primary.to_timezone_config()
        self.secondary = config.secondary.to_timezone_config()
        self.device_zone = (
            resolve_zone(config.device.timezone) if config.device.timezone else None
        )

        self.renderer = DialRenderer(
            self.primary,
            self.secondary,
            base_inset=config.face.base_inset,
            ring_spacing=config.face.ring_spacing,
        )

        self.display = Display(config.display)
        self.http_server = create_server(config.http_server, self)
        self.http_thread = None

    def capture_frame(
        self, instant: Optional[datetime.datetime] = None
    ) -> FrameContext:
        return FrameContext.capture(
            self.primary, self.secondary, instant=instant, device_zone=self.device_zone
        )

    def render_frame(
        self, instant: Optional[datetime.datetime] = None
    ) -> Image.Image:
        """
        Render the face at ``instant`` (default: now).

        Re-layouts the dial when the display size differs from the cached
        layout. The result is kept as the last frame.

        Args:
            instant: Moment to render

        Returns:
            Rendered RGB image at the display size
        """
        size = (self.config.display.width, self.config.display.height)
        with self._render_lock:
            image = Image.new("RGB", size, BLACK)
            surface = PillowSurface(image)
            self.renderer.bounds_changed(surface.bounds)
            self.renderer.render(self.capture_frame(instant), surface)
            self._last_frame = image
        return image

    def get_last_frame(self) -> Optional[Image.Image]:
        """Get the last rendered frame (for HTTP screenshots)."""
        return self._last_frame

    def zone_status(self, instant: Optional[datetime.datetime] = None) -> dict:
        """
        Current device and ring times for the /zones endpoint.

        Returns:
            Dictionary keyed by "device", "primary" and "secondary"
        """
        frame = self.capture_frame(instant)
        return {
            "instant": frame.instant.isoformat(),
            "device": {
                "timezone": self.config.device.timezone or "local",
                "time": frame.device_time.strftime("%H:%M:%S"),
                "offset_seconds": frame.device_offset_seconds,
            },
            "primary": {
                "timezone": self.primary.timezone,
                "time": frame.primary_time.strftime("%H:%M:%S"),
                "offset_seconds": frame.primary_offset_seconds,
                "rotation_seconds": frame.primary_rotation,
            },
            "secondary": {
                "timezone": self.secondary.timezone,
                "time": frame.secondary_time.strftime("%H:%M:%S"),
                "offset_seconds": frame.secondary_offset_seconds,
                "rotation_seconds": frame.secondary_rotation,
            },
        }

    def tick(self) -> bool:
        """
        Render one frame and write it to the display.

        A failing frame is logged and skipped; the next tick starts clean.

        Returns:
            True if the frame reached the display
        """
        try:
            frame = self.render_frame()
        except Exception as e:
            logger.error(f"Error rendering frame: {e}", exc_info=True)
            return False
        return self.display.write_frame(frame)

    def run(self) -> None:
        """Run the main application loop."""
        logger.info("Starting Dual-Zone Clock...")

        if not self.display.open():
            logger.error("Failed to open display")
            return

        get_font_manager().preload()

        if self.http_server:
            self.http_thread = start_server_thread(self.http_server)
            logger.info(f"HTTP server running on port {self.config.http_server.port}")

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        self.running = True
        logger.info(
            f"Showing {self.primary.timezone} and {self.secondary.timezone}. "
            "Press Ctrl+C to stop."
        )

        try:
            while self.running:
                self.tick()
                self._stop_event.wait(timeout=self.config.face.update_interval_seconds)
        finally:
            self._cleanup()

    def _signal_handler(self, signum, frame) -> None:
        """Handle shutdown signals."""
        logger.info(f"Received signal {signum}, shutting down...")
        self.running = False
        self._stop_event.set()

    def _cleanup(self) -> None:
        """Clean up resources on shutdown."""
        logger.info("Cleaning up...")

        if self.http_server:
            self.http_server.shutdown()

        # Leave a blank panel rather than a frozen face
        self.display.clear()
        self.display.close()

        logger.info("Cleanup complete")


def _parse_instant(value: str) -> datetime.datetime:
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO timestamp: {value}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Dual-Zone Clock - 24-hour dual timezone watch face"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.json file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--bind-all",
        action="store_true",
        help="Bind HTTP server to all interfaces (0.0.0.0) instead of localhost",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        metavar="PNG",
        help="Render a single frame to this file and exit",
    )
    parser.add_argument(
        "--at",
        type=_parse_instant,
        metavar="ISO",
        help="Instant to render with --snapshot (naive times are UTC)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        return 1
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.snapshot:
        # One-shot rendering never needs the framebuffer or server
        config.http_server.enabled = False
    elif args.bind_all:
        config.http_server.bind_address = "0.0.0.0"
        logger.warning("HTTP server will bind to all interfaces (0.0.0.0)")

    try:
        clock = DualZoneClock(config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.snapshot:
        image = clock.render_frame(args.at)
        image.save(args.snapshot, format="PNG")
        logger.info(f"Saved snapshot to {args.snapshot}")
        return 0

    clock.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
