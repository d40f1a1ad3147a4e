"""
Main entry point for the validation fields demo application.
"""

import sys

from PySide6.QtWidgets import QApplication

from core.error_handler import init_logging, setup_error_handling
from gui.main_window import MainWindow


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)

    init_logging()
    setup_error_handling()

    # Create and show the main window
    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
