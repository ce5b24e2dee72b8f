"""
Logging utilities - Log facade with pluggable sink and action recorder
Entries are kept in the context store; the sink decides what reaches the terminal.
"""

import json
import logging
import sys
import textwrap
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from .context import RequestTimer, context
from .file_utils import format_size, memory_usage

logger = logging.getLogger(__name__)


LOG_KEY = 'LOG'
LOG_CALLBACK_KEY = 'LOG_CALLBACK'

ERROR_LEVELS = ('error', 'failed', 'critical')
WARNING_LEVELS = ('warning', 'cancel')
SUCCESS_LEVELS = ('ok', 'success', 'completed', 'status')
NOTICE_LEVELS = ('notice', 'message', 'info')

LABEL_WIDTH = 11

RED = "\033[31;40m\033[1m[%s]\033[0m"
YELLOW = "\033[1;33;40m\033[1m[%s]\033[0m"
GREEN = "\033[1;32;40m\033[1m[%s]\033[0m"

_STDLIB_LEVELS = {
    'error': logging.ERROR,
    'failed': logging.ERROR,
    'critical': logging.CRITICAL,
    'warning': logging.WARNING,
    'cancel': logging.WARNING,
    'ok': logging.INFO,
    'success': logging.INFO,
    'completed': logging.INFO,
    'status': logging.INFO,
    'notice': logging.INFO,
    'message': logging.INFO,
    'info': logging.INFO,
}


@dataclass(frozen=True)
class LogEntry:
    level: str
    message: str
    timestamp: float
    memory_usage: int
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.error is None:
            data.pop('error')
        return data


LogCallback = Callable[[LogEntry], Any]


# ============================================================================
# Sinks
# ============================================================================

def print_log_entry(entry: LogEntry, stream=None) -> bool:
    """
    Default sink: print an entry to stderr, filtered by the verbosity flags.

    Args:
        entry: Entry to print
        stream: Output stream (default: sys.stderr)

    Returns:
        False for error-class entries, True otherwise
    """
    verbose = context.get('VERBOSE', False)
    debug = context.get('DEBUG', False)
    nocolor = context.get('NOCOLOR', False)

    red, yellow, green = ("[%s]",) * 3 if nocolor else (RED, YELLOW, GREEN)
    result = True

    if entry.level in WARNING_LEVELS:
        label = yellow % entry.level
    elif entry.level in ERROR_LEVELS:
        label = red % entry.level
        result = False
    elif entry.level in SUCCESS_LEVELS:
        if context.get('QUIET', False):
            return True
        label = green % entry.level
    elif entry.level in NOTICE_LEVELS:
        if not verbose:
            return True
        label = "[%s]" % entry.level
    else:
        if not debug:
            return True
        label = "[%s]" % entry.level

    message = entry.message
    if debug:
        elapsed = round(entry.timestamp - RequestTimer.started_at(), 2)
        message = f"[{elapsed} sec, {format_size(entry.memory_usage)}] {message}"

    columns = int(context.get('COLUMNS', 80) or 80)
    width = max(columns - LABEL_WIDTH - 1, 20)
    lines = []
    for paragraph in message.splitlines() or ['']:
        lines.extend(textwrap.wrap(paragraph, width, break_long_words=False,
                                   break_on_hyphens=False) or [''])

    # Right-align the label against the visible (uncoloured) label width
    visible = len("[%s]" % entry.level)
    padding = max(LABEL_WIDTH - visible, 0)

    out = stream or sys.stderr
    for index, line in enumerate(lines):
        suffix = (' ' * padding + label) if index == 0 else ''
        out.write(f"{line:<{width}} {suffix}".rstrip() + "\n")
    return result


def logger_callback(target: logging.Logger) -> LogCallback:
    """
    Build a sink that forwards entries to a stdlib logger.

    Args:
        target: Logger to forward to

    Returns:
        Callback returning False for error-class entries
    """
    def _forward(entry: LogEntry) -> bool:
        level = _STDLIB_LEVELS.get(entry.level, logging.DEBUG)
        extra = {'cmdkit_level': entry.level, 'cmdkit_error': entry.error}
        target.log(level, entry.message, extra=extra)
        return entry.level not in ERROR_LEVELS

    return _forward


def set_log_callback(callback: Optional[LogCallback]):
    """Install a sink. None restores the default printer."""
    if callback is None:
        context.clear(LOG_CALLBACK_KEY)
    else:
        context.set(LOG_CALLBACK_KEY, callback)


def get_log_callback() -> LogCallback:
    return context.get(LOG_CALLBACK_KEY) or print_log_entry


# ============================================================================
# Facade
# ============================================================================

def log(message: str, level: str = 'notice', error: Optional[str] = None) -> Any:
    """
    Record a log entry and dispatch it to the active sink.

    Args:
        message: Message text
        level: Entry level (notice, warning, error, ok, debug, ...)
        error: Optional error id the entry belongs to

    Returns:
        Whatever the sink returns (the default sink: False for errors)
    """
    entry = LogEntry(
        level=level,
        message=str(message),
        timestamp=time.time(),
        memory_usage=memory_usage(),
        error=error,
    )
    context.append(LOG_KEY, entry)
    recorder.record_entry(entry)
    return get_log_callback()(entry)


def get_log() -> List[LogEntry]:
    return list(context.get(LOG_KEY, []))


def get_log_entries(levels: Iterable[str]) -> List[LogEntry]:
    wanted = set(levels)
    return [entry for entry in get_log() if entry.level in wanted]


def log_has_errors(levels: Iterable[str] = ERROR_LEVELS) -> bool:
    """Check whether any logged entry has one of the given levels."""
    return bool(get_log_entries(levels))


def clear_log():
    context.clear(LOG_KEY)


# ============================================================================
# Action recorder
# ============================================================================

class ActionRecorder:
    """
    Writes log entries to a file as they are recorded.
    Thread-safe singleton for global access.
    """
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(ActionRecorder, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.enabled = False
        self.log_file: Optional[Path] = None
        self.file_lock = threading.Lock()
        self._initialized = True

    def start_recording(self, log_filename: Optional[str] = None,
                        log_dir: Optional[Path] = None) -> Path:
        """
        Start recording entries to a log file.

        Args:
            log_filename: Optional custom log filename
            log_dir: Directory for the file (default: "logs")

        Returns:
            Path to log file
        """
        if not log_filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_filename = f"cmdkit_log_{timestamp}.txt"

        directory = Path(log_dir) if log_dir else Path("logs")
        directory.mkdir(parents=True, exist_ok=True)
        self.log_file = directory / log_filename

        with open(self.log_file, 'w', encoding='utf-8') as f:
            f.write("=" * 80 + "\n")
            f.write(f"CMDKIT LOG - Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
            f.write("=" * 80 + "\n\n")

        self.enabled = True
        return self.log_file

    def stop_recording(self):
        self.enabled = False

    def record_entry(self, entry: LogEntry):
        if not self.enabled or not self.log_file:
            return

        stamp = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        line = f"[{stamp}] [{entry.level.upper()}] {entry.message}"
        if entry.error:
            line += f"\n  Details: {json.dumps({'error': entry.error, 'memory': entry.memory_usage})}"
        line += "\n" + "-" * 80 + "\n"

        with self.file_lock:
            try:
                with open(self.log_file, 'a', encoding='utf-8') as f:
                    f.write(line)
                    f.flush()
            except OSError as e:
                logger.warning(f"Could not write to log file {self.log_file}: {e}")


# Global singleton instance
recorder = ActionRecorder()


def start_log_recording(log_filename: Optional[str] = None,
                        log_dir: Optional[Path] = None) -> Path:
    return recorder.start_recording(log_filename, log_dir)


def stop_log_recording():
    recorder.stop_recording()


def is_recording_enabled() -> bool:
    return recorder.enabled and recorder.log_file is not None


def get_log_file_path() -> Optional[Path]:
    return recorder.log_file
