"""
Operation utilities - Call wrappers that honour simulate and verbose modes
"""

import inspect
import subprocess
import time
from typing import Any, Callable, Sequence

from .context import context
from .logging_utils import log


def _describe_arg(arg: Any) -> str:
    if arg is None or isinstance(arg, (str, int, float, bool)):
        return str(arg)
    if isinstance(arg, (list, tuple, dict, set)):
        return 'Array'
    return 'Object'


def _callable_name(func: Callable) -> str:
    if inspect.ismethod(func):
        owner = func.__self__
        owner_name = owner.__name__ if inspect.isclass(owner) else type(owner).__name__
        return f"{owner_name}.{func.__name__}"
    return getattr(func, '__name__', None) or type(func).__name__


def describe_call(func: Callable, args: Sequence[Any] = ()) -> str:
    """
    Render a call as `name(arg1, arg2)` for log output.
    Containers are shown as Array, other objects as Object.
    """
    printed = ", ".join(_describe_arg(arg) for arg in args)
    return f"{_callable_name(func)}({printed})"


def is_simulated() -> bool:
    return bool(context.get('SIMULATE', False))


def op(func: Callable, *args, **kwargs) -> Any:
    """
    Call a function unless running in simulate mode.

    Args:
        func: Callable to run
        *args: Positional arguments for the callable
        **kwargs: Keyword arguments for the callable

    Returns:
        The call's result, or True when simulated
    """
    simulate = is_simulated()
    if context.get('VERBOSE', False) or simulate:
        log(f"Calling {describe_call(func, args)}", 'debug')
    if simulate:
        return True
    return func(*args, **kwargs)


def op_system(command: str) -> bool:
    """
    Run a shell command unless running in simulate mode.

    Returns:
        True when the command exits with status 0 (or when simulated)
    """
    simulate = is_simulated()
    if context.get('VERBOSE', False) or simulate:
        log(f"Calling system({command})", 'debug')
    if simulate:
        return True

    completed = subprocess.run(command, shell=True)
    if completed.returncode != 0:
        log(f"Command exited with status {completed.returncode}: {command}", 'debug')
    return completed.returncode == 0


def timed_op(description: str, func: Callable, *args, **kwargs) -> Any:
    """
    Run a function through op() and log its execution time.

    Args:
        description: Description of the task
        func: Function to execute

    Returns:
        Result from op()
    """
    start_time = time.perf_counter()
    try:
        return op(func, *args, **kwargs)
    finally:
        elapsed = time.perf_counter() - start_time

        # Choose unit based on elapsed time
        if elapsed < 1e-3:
            time_str = f"{elapsed * 1e6:.2f} microseconds"
        elif elapsed < 1:
            time_str = f"{elapsed * 1e3:.2f} milliseconds"
        else:
            time_str = f"{elapsed:.2f} seconds"

        log(f"Task completed: {description} ({time_str})", 'debug')
