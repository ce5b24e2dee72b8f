"""
Error utilities - Error-status tracker backed by the context store
The status code is last-write-wins; messages accumulate per error id.
"""

import numbers
from typing import Any, Dict, List, Optional

from .context import context
from .logging_utils import log


SUCCESS = 0
FRAMEWORK_ERROR = 1
APPLICATION_ERROR = 255

ERROR_CODE_KEY = 'ERROR_CODE'
ERROR_LOG_KEY = 'ERROR_LOG'

DEFAULT_ERROR_ID = 'FRAMEWORK_ERROR'


def _normalize_error_id(error: Any) -> str:
    if isinstance(error, str):
        return error
    # Numeric codes and non-string objects (e.g. exceptions) share one bucket
    return DEFAULT_ERROR_ID


def set_error(error: Any, message: Optional[str] = None, output_label: str = "") -> bool:
    """
    Record an error and mark the run as failed.

    Args:
        error: Error id (e.g. 'FILE_NOT_FOUND'); numbers and objects map to FRAMEWORK_ERROR
        message: Human readable message (default: the error id)
        output_label: Prefix for the logged message

    Returns:
        Always False, so callers can `return set_error(...)`
    """
    if message is None and not isinstance(error, str) and not isinstance(error, numbers.Number):
        message = str(error) or None

    error_id = _normalize_error_id(error)
    message = message if message else error_id

    with context.lock:
        context.set(ERROR_CODE_KEY, FRAMEWORK_ERROR)
        error_log = context.get(ERROR_LOG_KEY, {})
        error_log.setdefault(error_id, []).append(message)

    log(f"{output_label}{message}", 'error', error_id)
    return False


def get_error() -> int:
    """Current status code (SUCCESS when no error is set)."""
    return context.get(ERROR_CODE_KEY, SUCCESS)


def get_error_log() -> Dict[str, List[str]]:
    return {error_id: list(messages) for error_id, messages in context.get(ERROR_LOG_KEY, {}).items()}


def get_error_messages(error: Optional[Any] = None) -> List[str]:
    """Messages for one error id, or every message in recording order per id."""
    error_log = get_error_log()
    if error is not None:
        return error_log.get(_normalize_error_id(error), [])
    return [message for messages in error_log.values() for message in messages]


def cmp_error(error: Any) -> bool:
    """Check whether an error id has been recorded."""
    return _normalize_error_id(error) in context.get(ERROR_LOG_KEY, {})


def clear_error():
    """Reset the status code. The error log is kept."""
    context.set(ERROR_CODE_KEY, SUCCESS)


class CommandError(Exception):
    """Failure raised inside a command and turned into a recorded error at the CLI boundary."""

    def __init__(self, error: str, message: Optional[str] = None):
        self.error = _normalize_error_id(error)
        self.message = message or self.error
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error}] {self.message}"

    def record(self, output_label: str = "") -> bool:
        return set_error(self.error, self.message, output_label)
