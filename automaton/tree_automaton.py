"""
Tree automaton for path matching.

Each search state records how many segments have been consumed, the subtree
reached so far, and the location (keys and indices) taken to get there.
Wildcards fan out into one state per array element; failed lookups prune
the branch. The document is only ever read.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from common.paths import Index, ParsedPath, PathParser, Property, Wildcard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    """One live branch of the search."""

    consumed: int
    """Number of segments consumed so far."""

    value: Any = field(compare=False)
    """Subtree reached so far (a reference into the source document)."""

    location: tuple = ()
    """Keys and indices taken from the root to reach `value`."""


@dataclass(frozen=True)
class Match:
    """A value found by fully consuming the path, with its location."""

    value: Any
    location: tuple

    @property
    def path(self) -> list:
        """Location as a list, e.g. ['store', 'book', 0, 'price']."""
        return list(self.location)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class TreeAutomaton:
    """
    Matches a segment sequence against JSON documents.

    States advance level by level. As soon as a level produces any state that
    has consumed every segment, those states are returned as matches.

    Example:
        >>> automaton = TreeAutomaton("$.categories[*].items[*].name")
        >>> [m.location for m in automaton.process(doc)]
        [('categories', 0, 'items', 0, 'name'), ('categories', 0, 'items', 1, 'name'), ...]
    """

    def __init__(self, path: Union[str, ParsedPath, tuple, list]):
        """
        Initialize TreeAutomaton.

        Args:
            path: Path expression, ParsedPath, or a sequence of segments.
                  An aggregate suffix on a path expression is ignored here;
                  reduction happens in the aggregate module.
        """
        if isinstance(path, str):
            path = PathParser().parse(path)
        if isinstance(path, ParsedPath):
            self.segments = path.segments
        else:
            self.segments = tuple(path)

    def is_accepting(self, state: SearchState) -> bool:
        """True once the state has consumed every segment."""
        return state.consumed >= len(self.segments)

    def transition(self, state: SearchState) -> list[SearchState]:
        """
        Apply the next unconsumed segment to a state.

        Returns:
            Zero or more successor states. An accepting state is returned unchanged.
        """
        if self.is_accepting(state):
            return [state]

        segment = self.segments[state.consumed]
        current = state.value

        if isinstance(segment, Property):
            if isinstance(current, Mapping) and segment.name in current:
                return [self._advance(state, current[segment.name], segment.name)]
            return []

        if isinstance(segment, Index):
            if _is_sequence(current) and segment.index < len(current):
                return [self._advance(state, current[segment.index], segment.index)]
            return []

        if isinstance(segment, Wildcard):
            if _is_sequence(current):
                return [
                    self._advance(state, item, i)
                    for i, item in enumerate(current)
                ]
            return []

        raise TypeError(f"Unknown segment type: {segment!r}")

    @staticmethod
    def _advance(state: SearchState, value: Any, step: Union[str, int]) -> SearchState:
        return SearchState(
            consumed=state.consumed + 1,
            value=value,
            location=state.location + (step,),
        )

    def process(self, document: Any) -> list[Match]:
        """
        Run the automaton over a document.

        Args:
            document: Parsed JSON document.

        Returns:
            Matches in generation order (outer wildcard first, then inner).
            An empty list means nothing matched.
        """
        initial = SearchState(consumed=0, value=document)
        if self.is_accepting(initial):
            return [Match(value=document, location=())]

        states = [initial]
        level = 0

        while states:
            next_states = []
            for state in states:
                next_states.extend(self.transition(state))
            level += 1

            accepting = [s for s in next_states if self.is_accepting(s)]
            if accepting:
                logger.debug(f"Level {level}: {len(accepting)} matches")
                return [Match(value=s.value, location=s.location) for s in accepting]

            states = next_states
            logger.debug(f"Level {level}: {len(states)} live states")

        return []


def create_automaton(path: Union[str, ParsedPath]) -> TreeAutomaton:
    """Factory for TreeAutomaton."""
    return TreeAutomaton(path)


def match(document: Any, segments) -> list[Match]:
    """
    Match a segment sequence (or path expression) against a document.

    Args:
        document: Parsed JSON document.
        segments: Segment sequence, ParsedPath, or path expression string.

    Returns:
        List of Match in deterministic left-to-right, outer-to-inner order.
    """
    return TreeAutomaton(segments).process(document)
