"""
Location writer.

Writes values into a copy of an accumulator document at the location named
by a target path. Targets may contain one [*] segment, which is expanded
positionally against a list of values.
"""
import copy
import logging
from typing import Any, Union

from common.paths import Index, ParsedPath, ParseError, PathParser, Wildcard

logger = logging.getLogger(__name__)


def _as_parsed(target: Union[str, ParsedPath]) -> ParsedPath:
    if isinstance(target, ParsedPath):
        return target
    return PathParser().parse(target)


def _new_container(segment) -> Union[dict, list]:
    return [] if isinstance(segment, Index) else {}


def _fits(container: Any, segment) -> bool:
    if isinstance(segment, Index):
        return isinstance(container, list)
    return isinstance(container, dict)


def _assign(container: Union[dict, list], segment, value: Any) -> None:
    if isinstance(segment, Index):
        if segment.index >= len(container):
            container.extend([None] * (segment.index + 1 - len(container)))
        container[segment.index] = value
    else:
        container[segment.name] = value


def _lookup(container: Union[dict, list], segment) -> Any:
    if isinstance(segment, Index):
        return container[segment.index] if segment.index < len(container) else None
    return container.get(segment.name)


def _warn_replaced(existing: Any, where, segment) -> None:
    if existing is None or (isinstance(existing, (dict, list)) and not existing):
        return
    logger.warning(
        f"Replacing {type(existing).__name__} at {where} with a new "
        f"{'list' if isinstance(segment, Index) else 'object'}"
    )


def _place(document: Any, segments: tuple, value: Any) -> Any:
    """Write value into document (already a private copy) in place."""
    if not segments:
        return value

    root = document
    if not _fits(root, segments[0]):
        _warn_replaced(root, "$", segments[0])
        root = _new_container(segments[0])
    current = root

    for segment, next_segment in zip(segments, segments[1:]):
        child = _lookup(current, segment)
        if not _fits(child, next_segment):
            _warn_replaced(child, segment, next_segment)
            child = _new_container(next_segment)
            _assign(current, segment, child)
        current = child

    _assign(current, segments[-1], value)
    return root


def set_value_at_path(document: Any, target: Union[str, ParsedPath], value: Any) -> Any:
    """
    Set a value at a concrete (wildcard-free) target path.

    Intermediate objects and lists are created as needed. Lists are padded
    with None up to the written index. The input document is not modified.

    Args:
        document: Accumulator document.
        target: Target path expression or ParsedPath.
        value: Value to place.

    Returns:
        New document with the value set.

    Raises:
        ParseError: If the target is malformed or contains a wildcard.
    """
    parsed = _as_parsed(target)
    if parsed.wildcard_count:
        raise ParseError(f"Cannot set a value at wildcard path {str(parsed)!r}")

    logger.debug(f"Writing {type(value).__name__} at {parsed}")
    return _place(copy.deepcopy(document), parsed.segments, copy.deepcopy(value))


def write_at(document: Any, target: Union[str, ParsedPath], value: Any) -> Any:
    """
    Write a value (or a list of values) at a target path.

    With one [*] in the target, value[i] is written with the wildcard replaced
    by index i. An empty list writes [] at the part of the path before the
    wildcard, so the key exists. A non-list value is treated as a
    one-element list.

    Args:
        document: Accumulator document (not modified).
        target: Target path expression or ParsedPath.
        value: Value or list of values.

    Returns:
        New document containing the write(s).

    Raises:
        ParseError: If the target is malformed or has more than one [*].
    """
    parsed = _as_parsed(target)
    wildcards = [i for i, s in enumerate(parsed.segments) if isinstance(s, Wildcard)]

    if not wildcards:
        return set_value_at_path(document, parsed, value)

    if len(wildcards) > 1:
        raise ParseError(f"Target {str(parsed)!r} has more than one [*] segment")

    position = wildcards[0]
    prefix = parsed.segments[:position]
    suffix = parsed.segments[position + 1:]

    if not isinstance(value, (list, tuple)):
        logger.debug(f"Wrapping single value for wildcard target {parsed}")
        value = [value]

    result = copy.deepcopy(document)
    if not value:
        return _place(result, prefix, [])

    for i, item in enumerate(value):
        result = _place(result, prefix + (Index(i),) + suffix, copy.deepcopy(item))
    return result
