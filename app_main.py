"""Application entry point for the trivia presentation host."""

from __future__ import annotations

import socket
import sys

from PySide6.QtCore import QCoreApplication

from trivia_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from trivia_app.core.presentation_controller import PresentationController
from trivia_app.server.api_server import start_api_server
from trivia_app.ui.presentation_bridge import PresentationBridge
from trivia_app.utils.logging_config import configure_logging


def _determine_display_url(port: int) -> str:
    """Best-effort determination of the local IP for the display-facing URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/presentation"


def main() -> None:
    """Initialize logging, start the API server, and run the Qt event loop."""
    logger = configure_logging()
    logger.info("Starting trivia presentation host…")

    app = QCoreApplication(sys.argv)
    controller = PresentationController()
    bridge = PresentationBridge(controller)
    bridge.slides_rebuilt.connect(lambda count: logger.info("Presentation now has %s slides", count))
    bridge.slide_changed.connect(lambda index: logger.info("Display moved to slide %s", index))

    start_api_server(controller=controller, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Presentation state available at %s", _determine_display_url(DEFAULT_PORT))
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
