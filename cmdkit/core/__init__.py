"""
Core utilities module - Common toolkit for shared functions
Context store, logging facade, error tracking, call wrappers, MIME sniffing
and small formatting helpers.
"""

# Safe imports with error handling
try:
    from .context import (
        ContextStore,
        RequestTimer,
        context,
        get_context,
        set_context,
        clear_context,
        get_option,
        set_option,
        set_options,
        unset_option,
        get_option_list
    )
except ImportError as e:
    raise ImportError(f"Failed to import from context: {e}")

try:
    from .file_utils import (
        format_size,
        memory_usage
    )
except ImportError as e:
    raise ImportError(f"Failed to import from file_utils: {e}")

try:
    from .logging_utils import (
        LogEntry,
        log,
        get_log,
        get_log_entries,
        log_has_errors,
        clear_log,
        set_log_callback,
        logger_callback,
        print_log_entry,
        start_log_recording,
        stop_log_recording,
        is_recording_enabled,
        get_log_file_path
    )
except ImportError as e:
    raise ImportError(f"Failed to import from logging_utils: {e}")

try:
    from .error_utils import (
        SUCCESS,
        FRAMEWORK_ERROR,
        APPLICATION_ERROR,
        CommandError,
        set_error,
        get_error,
        get_error_log,
        get_error_messages,
        cmp_error,
        clear_error
    )
except ImportError as e:
    raise ImportError(f"Failed to import from error_utils: {e}")

try:
    from .op_utils import (
        describe_call,
        op,
        op_system,
        timed_op
    )
except ImportError as e:
    raise ImportError(f"Failed to import from op_utils: {e}")

try:
    from .mime_utils import (
        sniff_content_type,
        mime_content_type,
        file_is_tarball,
        archive_extension
    )
except ImportError as e:
    raise ImportError(f"Failed to import from mime_utils: {e}")

try:
    from .array_utils import (
        flatten,
        map_assoc,
        merge_recursive_distinct
    )
except ImportError as e:
    raise ImportError(f"Failed to import from array_utils: {e}")

__all__ = [
    # Context
    'ContextStore',
    'RequestTimer',
    'context',
    'get_context',
    'set_context',
    'clear_context',
    'get_option',
    'set_option',
    'set_options',
    'unset_option',
    'get_option_list',
    # File utilities
    'format_size',
    'memory_usage',
    # Logging
    'LogEntry',
    'log',
    'get_log',
    'get_log_entries',
    'log_has_errors',
    'clear_log',
    'set_log_callback',
    'logger_callback',
    'print_log_entry',
    'start_log_recording',
    'stop_log_recording',
    'is_recording_enabled',
    'get_log_file_path',
    # Errors
    'SUCCESS',
    'FRAMEWORK_ERROR',
    'APPLICATION_ERROR',
    'CommandError',
    'set_error',
    'get_error',
    'get_error_log',
    'get_error_messages',
    'cmp_error',
    'clear_error',
    # Operations
    'describe_call',
    'op',
    'op_system',
    'timed_op',
    # MIME
    'sniff_content_type',
    'mime_content_type',
    'file_is_tarball',
    'archive_extension',
    # Arrays
    'flatten',
    'map_assoc',
    'merge_recursive_distinct',
]
