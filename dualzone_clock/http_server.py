"""HTTP server for face screenshots and zone status."""

import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from io import BytesIO
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from .config import HttpServerConfig

logger = logging.getLogger(__name__)


class FaceRequestHandler(BaseHTTPRequestHandler):
    """Serves /health, /screenshot and /zones."""

    # Set by create_server
    clock_instance = None

    def log_message(self, format: str, *args) -> None:
        """Route request logs through logging."""
        logger.debug(f"{self.client_address[0]} - {format % args}")

    def _send_body(self, status: int, content_type: str, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        self.wfile.write(body)

    def _send_text(self, status: int, text: str) -> None:
        self._send_body(status, "text/plain", text.encode("utf-8"))

    def _send_json(self, status: int, payload: dict) -> None:
        self._send_body(
            status, "application/json", json.dumps(payload).encode("utf-8")
        )

    def do_GET(self) -> None:
        """Handle GET requests."""
        path = urlsplit(self.path).path.lower().rstrip("/") or "/"

        if path == "/health":
            self._send_text(200, "OK")
            return

        if path not in ("/screenshot", "/zones"):
            self._send_text(404, "Not Found")
            return

        if self.clock_instance is None:
            self._send_text(503, "Clock not initialized")
            return

        if path == "/screenshot":
            self._handle_screenshot()
        else:
            self._handle_zones()

    def _handle_screenshot(self) -> None:
        try:
            frame = self.clock_instance.render_frame()
        except Exception as e:
            logger.error(f"Screenshot render error: {e}", exc_info=True)
            frame = self.clock_instance.get_last_frame()
            if frame is None:
                self._send_text(500, f"Error: {e}")
                return
            logger.info("Serving last rendered frame")

        buffer = BytesIO()
        frame.save(buffer, format="PNG")
        self._send_body(200, "image/png", buffer.getvalue())

    def _handle_zones(self) -> None:
        try:
            self._send_json(200, self.clock_instance.zone_status())
        except Exception as e:
            logger.error(f"Zone status error: {e}", exc_info=True)
            self._send_text(500, f"Error: {e}")


def create_server(config: "HttpServerConfig", clock_instance) -> Optional[HTTPServer]:
    """
    Create and configure the HTTP server.

    Args:
        config: HTTP server configuration
        clock_instance: Clock exposing render_frame, get_last_frame, zone_status

    Returns:
        Configured HTTPServer, or None if disabled
    """
    if not config.enabled:
        logger.info("HTTP server disabled in config")
        return None

    FaceRequestHandler.clock_instance = clock_instance
    server = HTTPServer((config.bind_address, config.port), FaceRequestHandler)
    logger.info(f"HTTP server configured on {config.bind_address}:{config.port}")

    if config.bind_address == "0.0.0.0":
        logger.warning(
            "HTTP server bound to all interfaces (0.0.0.0). "
            "Consider using 127.0.0.1 for local-only access."
        )

    return server


def start_server_thread(server: HTTPServer) -> threading.Thread:
    """Run the HTTP server in a daemon thread."""
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info("HTTP server thread started")
    return thread
