"""Common utilities shared across treeshift modules."""
from .paths import (
    AGGREGATE_NAMES,
    Index,
    ParsedPath,
    ParseError,
    PathParser,
    Property,
    Segment,
    Wildcard,
    format_location,
    parse_path,
)

__all__ = [
    'AGGREGATE_NAMES',
    'Index',
    'ParsedPath',
    'ParseError',
    'PathParser',
    'Property',
    'Segment',
    'Wildcard',
    'format_location',
    'parse_path',
]
