"""
Path expression parsing for JSON documents.

Converts textual path expressions into typed segments that the tree automaton
walks and the location writer follows. Used by both automaton (for matching)
and remap (for target locations).

Supported grammar:
    - "$"                   - the document root
    - "$.store.bicycle"     - property access
    - "$.store.book[0]"     - array index
    - "$.store.book[*]"     - array wildcard
    - "$['odd.key']"        - quoted property (may contain dots/brackets;
                              backslash escapes quotes and backslashes)
    - "$.book[*].price.max()" - trailing aggregate suffix
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)

AGGREGATE_NAMES = frozenset([
    'max', 'min', 'sum', 'avg', 'count',
    'first', 'last', 'unique', 'sort', 'reverse',
])

_AGGREGATE_RE = re.compile(r'\.([A-Za-z_]\w*)\(\)$')
_INDEX_RE = re.compile(r'\d+')


class ParseError(ValueError):
    """Raised for malformed path expressions."""

    def __init__(self, message: str, expression: str = '', position: Optional[int] = None):
        self.expression = expression
        self.position = position
        if expression:
            where = f" at position {position}" if position is not None else ""
            message = f"{message}{where} in {expression!r}"
        super().__init__(message)


@dataclass(frozen=True)
class Property:
    """Match an object field by exact key."""
    name: str

    def __str__(self) -> str:
        if re.fullmatch(r'[A-Za-z_$][\w$-]*', self.name):
            return f".{self.name}"
        escaped = self.name.replace("\\", "\\\\").replace("'", "\\'")
        return f"['{escaped}']"


@dataclass(frozen=True)
class Index:
    """Match an array element by exact position."""
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class Wildcard:
    """Match every element of an array."""

    def __str__(self) -> str:
        return "[*]"


Segment = Union[Property, Index, Wildcard]


@dataclass(frozen=True)
class ParsedPath:
    """Result of parsing a path expression."""

    segments: tuple
    """Ordered segments, root first."""

    aggregate: Optional[str] = None
    """Aggregate operation name, or None when absent."""

    @property
    def wildcard_count(self) -> int:
        return sum(1 for s in self.segments if isinstance(s, Wildcard))

    def __str__(self) -> str:
        path = "$" + "".join(str(s) for s in self.segments)
        if self.aggregate:
            path += f".{self.aggregate}()"
        return path


class PathParser:
    """
    Parses path expressions into segments plus an optional aggregate name.

    Example:
        >>> parser = PathParser()
        >>> parsed = parser.parse("$.store.book[*].price.max()")
        >>> parsed.segments
        (Property(name='store'), Property(name='book'), Wildcard(), Property(name='price'))
        >>> parsed.aggregate
        'max'
    """

    def __init__(self, strict: bool = False):
        """
        Initialize PathParser.

        Args:
            strict: If True, an aggregate suffix outside the known set raises
                   ParseError. If False (default), it is logged and ignored.
        """
        self.strict = strict

    def parse(self, expression: str) -> ParsedPath:
        """
        Parse a full path expression.

        Args:
            expression: Path expression such as "$.store.book[*].price.sum()".

        Returns:
            ParsedPath with segments and aggregate name.

        Raises:
            ParseError: If the expression is malformed.
        """
        path, aggregate = self.split_aggregate(expression)
        segments = self.parse_segments(path)
        return ParsedPath(segments=segments, aggregate=aggregate)

    def split_aggregate(self, expression: str) -> tuple[str, Optional[str]]:
        """
        Strip a trailing ".name()" suffix from an expression.

        Returns:
            Tuple of (path without suffix, aggregate name or None).
        """
        if not isinstance(expression, str):
            raise ParseError(f"Path expression must be a string, got {type(expression).__name__}")

        expression = expression.strip()
        match = _AGGREGATE_RE.search(expression)
        if not match:
            return expression, None

        name = match.group(1)
        path = expression[:match.start()]
        if name in AGGREGATE_NAMES:
            return path, name

        if self.strict:
            raise ParseError(f"Unknown aggregate operation '{name}()'", expression, match.start())

        logger.warning(f"Unknown aggregate operation '{name}()' in {expression!r} - ignoring it")
        return path, None

    def parse_segments(self, path: str) -> tuple:
        """
        Parse a path without aggregate suffix into segments.

        Raises:
            ParseError: On missing root, empty names, unterminated or
                        unsupported bracket groups.
        """
        if not path.startswith('$'):
            raise ParseError("Path must start with '$'", path, 0)

        segments: list[Segment] = []
        pos = 1
        length = len(path)

        while pos < length:
            char = path[pos]

            if char == '.':
                start = pos + 1
                end = start
                while end < length and path[end] not in '.[]':
                    end += 1
                name = path[start:end]
                if not name:
                    raise ParseError("Empty property name", path, pos)
                segments.append(Property(name))
                pos = end

            elif char == '[':
                segment, pos = self._parse_bracket(path, pos)
                segments.append(segment)

            elif char == ']':
                raise ParseError("Unexpected ']'", path, pos)

            else:
                raise ParseError(f"Unexpected character {char!r}", path, pos)

        return tuple(segments)

    def _parse_bracket(self, path: str, pos: int) -> tuple[Segment, int]:
        """Parse a bracket group starting at path[pos] == '['."""
        start = pos + 1
        if start < len(path) and path[start] in '\'"':
            return self._parse_quoted(path, start)

        close = path.find(']', start)
        if close == -1:
            raise ParseError("Unterminated '['", path, pos)

        content = path[start:close].strip()
        if content == '*':
            return Wildcard(), close + 1
        if _INDEX_RE.fullmatch(content):
            return Index(int(content)), close + 1

        raise ParseError(f"Unsupported bracket content [{content}]", path, pos)

    def _parse_quoted(self, path: str, start: int) -> tuple[Segment, int]:
        """Parse a quoted key starting at path[start]; backslash escapes the next character."""
        quote = path[start]
        chars = []
        pos = start + 1
        while pos < len(path):
            char = path[pos]
            if char == '\\':
                if pos + 1 >= len(path):
                    break
                chars.append(path[pos + 1])
                pos += 2
                continue
            if char == quote:
                if pos + 1 >= len(path) or path[pos + 1] != ']':
                    raise ParseError("Expected ']' after quoted key", path, pos + 1)
                return Property(''.join(chars)), pos + 2
            chars.append(char)
            pos += 1

        raise ParseError("Unterminated quoted key", path, start)


def parse_path(expression: str, strict: bool = False) -> ParsedPath:
    """
    Convenience function to parse a path expression.

    Args:
        expression: Path expression.
        strict: Reject unknown aggregate suffixes instead of ignoring them.

    Returns:
        ParsedPath with segments and aggregate name.
    """
    return PathParser(strict=strict).parse(expression)


def format_location(location) -> str:
    """Render a concrete location (keys/indices) back into a path expression."""
    parts = []
    for step in location:
        if isinstance(step, int):
            parts.append(str(Index(step)))
        else:
            parts.append(str(Property(step)))
    return "$" + "".join(parts)
