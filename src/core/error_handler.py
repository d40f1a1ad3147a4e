"""
Centralized error reporting and logging setup.

This module provides a singleton ErrorHandler that captures exceptions that
cannot propagate to a caller (for example a validation started by a focus
change), logs them with structured fields and re-emits them as a Qt signal.
"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from typing import Any, ClassVar

from PySide6.QtCore import QObject, Signal

from .errors import BaseAppError, from_exception

ERROR_LOGGER_NAME = "validation_fields.errors"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ErrorHandler(QObject):
    """
    Centralized error handler with logging and signal emission.

    Signals:
        errorOccurred(object): The normalized BaseAppError
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the error handler (called only once due to singleton)."""
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook

        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception into a BaseAppError.

        Args:
            exception: The exception to capture
            context: Optional context information

        Returns:
            BaseAppError with normalized metadata
        """
        app_error = from_exception(exception, self._sanitize_context(context or {}))

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            tb_lines = traceback.format_exception(type(exception), exception, exception.__traceback__)
            app_error.context["traceback"] = "".join(tb_lines)

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an exception.

        Args:
            exception: The exception to handle
            context: Optional context information

        Returns:
            BaseAppError for further processing
        """
        app_error = self.capture(exception, context)

        if self._logger:
            self._logger.error(
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={
                    "app_code": app_error.code.value,
                    "error_type": app_error.type.value,
                    "severity": app_error.severity.value,
                },
                exc_info=exception,
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def _setup_logging(self) -> None:
        """Set up the dedicated error logger with a console handler."""
        ErrorHandler._logger = logging.getLogger(ERROR_LOGGER_NAME)
        ErrorHandler._logger.setLevel(logging.DEBUG)
        ErrorHandler._logger.propagate = False

        # Avoid duplicate handlers
        if not ErrorHandler._logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s",
                    datefmt=LOG_DATE_FORMAT,
                )
            )
            console_handler.setLevel(logging.WARNING)
            ErrorHandler._logger.addHandler(console_handler)

    def _sanitize_context(self, context: dict[str, Any]) -> dict[str, Any]:
        """
        Keep context values short and printable.

        Field text can be arbitrarily long, so values are truncated.
        """
        safe_context: dict[str, Any] = {}
        for key, value in context.items():
            if isinstance(value, str):
                safe_context[key] = value if len(value) <= 200 else value[:200] + "..."
            else:
                safe_context[key] = repr(value)[:200]
        return safe_context

    def install_hooks(self) -> None:
        """Route unhandled exceptions of the main and worker threads here."""
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if isinstance(exc_value, Exception):
                self.handle(exc_value, {"source": "sys.excepthook"})
            else:
                self._original_excepthook(exc_type, exc_value, exc_traceback)

        def threading_exception_hook(args: threading.ExceptHookArgs) -> None:
            if isinstance(args.exc_value, Exception):
                self.handle(
                    args.exc_value,
                    {
                        "source": "threading.excepthook",
                        "thread": args.thread.name if args.thread else "unknown",
                    },
                )
            else:
                self._original_threading_excepthook(args)

        sys.excepthook = exception_hook
        threading.excepthook = threading_exception_hook

    def restore_hooks(self) -> None:
        """Restore original exception hooks."""
        sys.excepthook = self._original_excepthook
        threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """
    Get the global ErrorHandler instance.

    Returns:
        The singleton ErrorHandler instance
    """
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling for the application.

    Returns:
        The configured ErrorHandler instance
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: int = logging.INFO) -> None:
    """
    Initialize logging configuration.

    Call early in application startup.
    """
    get_error_handler()

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
