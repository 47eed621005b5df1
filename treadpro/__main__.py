"""Allow running TreadPro as a module: python -m treadpro."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .app import TreadProApp


def setup_logging() -> None:
    """Configure logging to stderr; level from ``TREADPRO_LOG_LEVEL``."""
    level = os.environ.get("TREADPRO_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    setup_logging()
    logging.info("TreadPro starting")

    app = QApplication(sys.argv)
    app.setApplicationName("TreadPro")
    app.setOrganizationName("TreadPro")

    window = TreadProApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
