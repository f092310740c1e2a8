"""
Error Handler Utility
=====================

This module provides centralized error handling for the memory timeline engine:
the exception hierarchy raised by the layout and viewport code, a precondition
helper for caller-contract checks, and an ErrorHandler that logs errors and
broadcasts them to the presentation layer through a Qt signal.

Author: Memory Timeline Development Team
Version: 1.0
"""

import logging
import traceback
from datetime import datetime
from typing import Optional, Callable, Any

from PyQt5.QtCore import QObject, pyqtSignal

# Configure logger
logger = logging.getLogger(__name__)


class ErrorSeverity:
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TimelineError(Exception):
    """Base exception for timeline-related errors."""

    def __init__(self, message: str, details: Optional[str] = None,
                 severity: str = ErrorSeverity.ERROR):
        """
        Initialize timeline error.

        Args:
            message: Short error message
            details: Technical details for logging
            severity: Error severity level
        """
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.severity = severity


class ContractViolationError(TimelineError):
    """
    Raised when a caller breaks a documented precondition.

    Examples are an undefined zoom level, a viewport with a non-positive width,
    or a pixel scale of zero. These are programming errors, not conditions to
    recover from.
    """

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, details, ErrorSeverity.CRITICAL)


class LayoutError(TimelineError):
    """Exception for failures while computing an event layout."""
    pass


class EventSourceError(TimelineError):
    """Exception for failures in the external event supply."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        """
        Initialize event source error.

        Args:
            message: Short error message
            operation: Description of the query that failed
            original_error: Original exception that was caught
        """
        details = f"{message}\n"
        if operation:
            details += f"Operation: {operation}\n"
        if original_error:
            details += f"Original error: {str(original_error)}\n"

        super().__init__(message, details, ErrorSeverity.ERROR)
        self.operation = operation
        self.original_error = original_error


class ConfigError(TimelineError):
    """Exception for invalid timeline configuration values."""

    def __init__(self, message: str, key: Optional[str] = None):
        details = f"{message} (key: {key})" if key else message
        super().__init__(message, details, ErrorSeverity.WARNING)
        self.key = key


def require(condition: bool, message: str, details: Optional[str] = None):
    """
    Check a caller-contract precondition.

    The check runs only when assertions are enabled (``__debug__``), so it
    fails fast during development and costs nothing under ``python -O``.

    Args:
        condition: Precondition that must hold
        message: Error message used when the precondition fails
        details: Optional technical details

    Raises:
        ContractViolationError: If the precondition does not hold
    """
    if __debug__ and not condition:
        raise ContractViolationError(message, details)


class ErrorHandler(QObject):
    """
    Centralized error handler for the timeline engine.

    Logs errors at the level matching their severity, keeps a short history
    and emits a signal so a view can surface the problem however it likes.

    Signals:
        error_occurred: Emitted when an error is handled (severity, message, details)
    """

    error_occurred = pyqtSignal(str, str, str)  # severity, message, details

    def __init__(self, parent=None, max_stored_errors: int = 10):
        """
        Initialize error handler.

        Args:
            parent: Parent QObject
            max_stored_errors: Number of recent errors kept in history
        """
        super().__init__(parent)
        self._error_count = 0
        self._last_errors = []
        self._max_stored_errors = max_stored_errors

    def handle_error(self, error: Exception, context: str = "") -> str:
        """
        Handle an error with logging and signal emission.

        Args:
            error: The exception that occurred
            context: Context description (e.g., "calculating layout")

        Returns:
            str: The severity the error was handled with
        """
        self._error_count += 1

        if isinstance(error, TimelineError):
            message = error.message
            details = error.details
            severity = error.severity
        else:
            message = f"An unexpected error occurred while {context}" if context else "An unexpected error occurred"
            error_traceback = traceback.format_exc()
            details = f"Context: {context}\n{type(error).__name__}: {str(error)}\n{error_traceback}"
            severity = ErrorSeverity.ERROR

        log_message = f"Error in {context}: {details}" if context else f"Error: {details}"

        if severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
        elif severity == ErrorSeverity.ERROR:
            logger.error(log_message)
        elif severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

        self._store_error(severity, message, details)
        self.error_occurred.emit(severity, message, details)

        return severity

    def _store_error(self, severity: str, message: str, details: str):
        """
        Store error in history for later retrieval.

        Args:
            severity: Error severity
            message: Error message
            details: Error details
        """
        error_record = {
            'timestamp': datetime.now(),
            'severity': severity,
            'message': message,
            'details': details
        }

        self._last_errors.append(error_record)

        # Keep only last N errors
        if len(self._last_errors) > self._max_stored_errors:
            self._last_errors = self._last_errors[-self._max_stored_errors:]

    def get_error_history(self) -> list:
        """
        Get recent error history.

        Returns:
            list: List of error records, oldest first
        """
        return self._last_errors.copy()

    def get_error_count(self) -> int:
        """
        Get total error count.

        Returns:
            int: Number of errors handled
        """
        return self._error_count

    def clear_error_history(self):
        """Clear error history and reset count."""
        self._last_errors.clear()
        self._error_count = 0

    @staticmethod
    def safe_execute(func: Callable, *args, default_return: Any = None,
                     error_handler: Optional['ErrorHandler'] = None,
                     context: str = "", **kwargs) -> Any:
        """
        Execute a function, reporting any exception instead of raising it.

        Intended for presentation-layer callbacks. Contract violations are
        programming errors and are always re-raised.

        Args:
            func: Function to execute
            *args: Positional arguments for function
            default_return: Value to return if function fails
            error_handler: ErrorHandler instance to report to
            context: Context description for error messages
            **kwargs: Keyword arguments for function

        Returns:
            Function return value, or default_return if an error occurred
        """
        try:
            return func(*args, **kwargs)
        except ContractViolationError:
            raise
        except Exception as e:
            if error_handler:
                error_handler.handle_error(e, context)
            else:
                logger.error(f"Error in {context}: {e}")
            return default_return
