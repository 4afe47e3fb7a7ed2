"""
Aggregate operations over matched values.

Every operation takes the ordered list of matched values and returns a single
value (or a reordered list for unique/sort/reverse). Inputs are never mutated.

Empty input:
    - max, min, first, last -> None
    - sum, count            -> 0
    - avg                   -> nan
    - unique, sort, reverse -> []

max, min, sum and avg skip null values; a list of only nulls counts as empty.
"""
import json
import math
import numbers
from typing import Any, Callable

import numpy as np


def natural_key(value: Any) -> tuple:
    """
    Sort key giving a total order over JSON values.

    Numbers sort before strings, strings before everything else
    (null, objects, arrays), which compare by their JSON text.
    """
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            return (1, 0, '')
        return (0, value, '')
    if isinstance(value, str):
        return (2, 0, value)
    return (3, 0, json.dumps(value, sort_keys=True, default=str))


def _present(values: list) -> list:
    """Values with JSON nulls dropped."""
    return [v for v in values if v is not None]


def _max(values: list) -> Any:
    values = _present(values)
    if not values:
        return None
    return max(values, key=natural_key)


def _min(values: list) -> Any:
    values = _present(values)
    if not values:
        return None
    return min(values, key=natural_key)


def _sum(values: list) -> Any:
    total = 0
    for value in _present(values):
        total += value
    return total


def _avg(values: list) -> float:
    values = _present(values)
    if not values:
        return math.nan
    return float(np.mean(np.asarray(values, dtype=float)))


def _unique(values: list) -> list:
    """Drop later duplicates, keeping first-seen order."""
    seen_hashable = set()
    seen_other = []
    result = []
    for value in values:
        try:
            key = (type(value), value)
            if key in seen_hashable:
                continue
            seen_hashable.add(key)
        except TypeError:
            # dicts and lists
            if value in seen_other:
                continue
            seen_other.append(value)
        result.append(value)
    return result


AGGREGATE_OPS: dict[str, Callable[[list], Any]] = {
    'max': _max,
    'min': _min,
    'sum': _sum,
    'avg': _avg,
    'count': len,
    'first': lambda values: values[0] if values else None,
    'last': lambda values: values[-1] if values else None,
    'unique': _unique,
    'sort': lambda values: sorted(values, key=natural_key),
    'reverse': lambda values: list(reversed(values)),
}


def is_aggregate(name: Any) -> bool:
    """True if `name` is one of the known aggregate operations."""
    return isinstance(name, str) and name in AGGREGATE_OPS


def reduce_values(values: list, operation: str) -> Any:
    """
    Apply an aggregate operation to matched values.

    Args:
        values: Ordered matched values.
        operation: Name of the aggregate operation.

    Returns:
        The reduced value.

    Raises:
        ValueError: If the operation is unknown. Callers should check with
                    is_aggregate() first.
    """
    if not is_aggregate(operation):
        raise ValueError(f"Unknown aggregate operation: {operation!r}")
    return AGGREGATE_OPS[operation](list(values))
