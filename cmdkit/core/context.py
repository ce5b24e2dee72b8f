"""
Context utilities - Process-scoped key/value store and layered option lookup
No dependencies on other project modules.
"""

import threading
import time
from typing import Any, Dict, List, Optional


# Option contexts, searched in this order by get_option()
OPTION_CONTEXTS = (
    'process',
    'cli',
    'stdin',
    'specific',
    'alias',
    'custom',
    'site',
    'user',
    'home',
    'system',
    'default',
)

_OPTIONS_KEY = 'OPTIONS'
_REQUEST_TIME_KEY = 'REQUEST_TIME'


class ContextStore:
    """
    Thread-safe key/value store living for the whole process.
    Reading a missing key with a default stores the default, so mutable
    defaults (lists, dicts) can be updated in place by the caller.
    """

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._values:
                self._values[key] = default
            return self._values[key]

    def set(self, key: str, value: Any) -> Any:
        with self._lock:
            self._values[key] = value
            return value

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def clear(self, key: str):
        with self._lock:
            self._values.pop(key, None)

    def clear_all(self):
        with self._lock:
            self._values.clear()

    def append(self, key: str, value: Any) -> List[Any]:
        """Append to the list stored under key, creating it when missing."""
        with self._lock:
            items = self._values.get(key)
            if items is None:
                items = []
                self._values[key] = items
            items.append(value)
            return items

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)


# Global store
context = ContextStore()


def get_context(key: str, default: Any = None) -> Any:
    return context.get(key, default)


def set_context(key: str, value: Any) -> Any:
    return context.set(key, value)


def clear_context(key: str):
    context.clear(key)


# ============================================================================
# Layered options
# ============================================================================

def _check_context_name(name: str):
    if name not in OPTION_CONTEXTS:
        raise ValueError(f"Unknown option context: {name}")


def _option_layers() -> Dict[str, Dict[str, Any]]:
    return context.get(_OPTIONS_KEY, {})


def get_option(name: str, default: Any = None, context_name: Optional[str] = None) -> Any:
    """
    Look up an option value.

    Args:
        name: Option name (long form)
        default: Value returned when no context defines the option
        context_name: Restrict the lookup to a single context

    Returns:
        The first value found, in OPTION_CONTEXTS order
    """
    layers = _option_layers()
    if context_name is not None:
        _check_context_name(context_name)
        return layers.get(context_name, {}).get(name, default)

    for layer_name in OPTION_CONTEXTS:
        layer = layers.get(layer_name)
        if layer and name in layer:
            return layer[name]
    return default


def set_option(name: str, value: Any, context_name: str = 'process') -> Any:
    """Set an option in one context. Returns the value."""
    _check_context_name(context_name)
    with context.lock:
        layers = _option_layers()
        layers.setdefault(context_name, {})[name] = value
    return value


def unset_option(name: str, context_name: Optional[str] = None):
    """Remove an option from one context, or from every context."""
    names = [context_name] if context_name else list(OPTION_CONTEXTS)
    with context.lock:
        layers = _option_layers()
        for layer_name in names:
            _check_context_name(layer_name)
            layers.get(layer_name, {}).pop(name, None)


def get_option_list(name: str, default: Optional[List[str]] = None) -> List[str]:
    """Return an option as a list, splitting comma separated strings."""
    value = get_option(name)
    if value is None:
        return list(default) if default else []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(',') if part.strip()]


def set_options(values: Dict[str, Any], context_name: str = 'process'):
    for name, value in values.items():
        set_option(name, value, context_name)


# ============================================================================
# Request timer
# ============================================================================

class RequestTimer:
    """Start time of the current request, used for elapsed time in debug output."""

    @staticmethod
    def start() -> float:
        return context.set(_REQUEST_TIME_KEY, time.time())

    @staticmethod
    def started_at() -> float:
        if not context.has(_REQUEST_TIME_KEY):
            return RequestTimer.start()
        return context.get(_REQUEST_TIME_KEY)

    @staticmethod
    def elapsed(at: Optional[float] = None) -> float:
        now = time.time() if at is None else at
        return now - RequestTimer.started_at()
