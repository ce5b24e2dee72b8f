"""
File utilities - Independent functions for size formatting and process memory
No dependencies on other project modules.
"""

import os
from typing import Optional, Union

import psutil


KILOBYTE = 1024

_UNITS = ['KB', 'MB', 'GB', 'TB', 'PB', 'EB', 'ZB', 'YB']


def _format_number(value: float) -> str:
    """Round to two places and drop trailing zeros (1.50 -> 1.5, 2.00 -> 2)."""
    text = f"{round(value, 2):.2f}"
    return text.rstrip('0').rstrip('.')


def format_size(size: Union[int, float]) -> str:
    """
    Format a byte count in human-readable format.

    Args:
        size: Size in bytes

    Returns:
        Formatted string (e.g., "512 bytes", "1 KB", "1.5 MB")
    """
    if size < KILOBYTE:
        return f"{_format_number(size)} byte" if size == 1 else f"{_format_number(size)} bytes"

    size = size / KILOBYTE
    unit = _UNITS[0]
    for unit in _UNITS:
        if round(size, 2) >= KILOBYTE and unit != _UNITS[-1]:
            size = size / KILOBYTE
        else:
            break
    return f"{_format_number(size)} {unit}"


def memory_usage(pid: Optional[int] = None) -> int:
    """
    Resident memory of a process in bytes.

    Args:
        pid: Process id (default: current process)

    Returns:
        RSS in bytes, 0 if the process cannot be inspected
    """
    try:
        return psutil.Process(pid or os.getpid()).memory_info().rss
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        return 0
