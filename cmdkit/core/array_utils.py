"""
Array utilities - Small helpers for lists and dictionaries
No dependencies on other project modules.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional


def flatten(items: Iterable[Any]) -> List[Any]:
    """
    Flatten nested lists, tuples and dict values into one list.

    Args:
        items: Possibly nested iterable

    Returns:
        Flat list in depth-first order. Strings and bytes are kept whole.
    """
    result = []
    if isinstance(items, dict):
        items = items.values()
    for item in items:
        if isinstance(item, (list, tuple, dict)):
            result.extend(flatten(item))
        else:
            result.append(item)
    return result


def map_assoc(items: Iterable[Any], func: Optional[Callable[[Any], Any]] = None) -> Dict[Any, Any]:
    """
    Build a dict keyed by each item.

    Args:
        items: Hashable items
        func: Optional function applied to produce each value

    Returns:
        {item: item} or {item: func(item)}; empty input gives {}
    """
    if func is None:
        return {item: item for item in items}
    return {item: func(item) for item in items}


def merge_recursive_distinct(first: Dict[Any, Any], second: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Merge two dicts. Nested dicts are merged, any other value in second wins.
    Neither argument is modified.
    """
    merged = dict(first)
    for key, value in second.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_recursive_distinct(merged[key], value)
        else:
            merged[key] = value
    return merged
