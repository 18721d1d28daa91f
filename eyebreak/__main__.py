"""Allow running EyeBreak as a module: python -m eyebreak."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import EyeBreakApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("EyeBreak")
    app.setOrganizationName("EyeBreak")

    window = EyeBreakApp()
    window.show()
    logging.getLogger(__name__).info("EyeBreak ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
