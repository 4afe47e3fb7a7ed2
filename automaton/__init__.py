"""
Treeshift Automaton - non-deterministic path matching over JSON documents.

Walks a parsed path against a document breadth-first, one segment per
level, and reports every matching value with its concrete location.

Example:
    >>> from automaton import create_automaton
    >>>
    >>> automaton = create_automaton("$.store.book[*].price")
    >>> [m.value for m in automaton.process(document)]
    [8.95, 12.99, 8.99]
"""
from .tree_automaton import (
    Match,
    SearchState,
    TreeAutomaton,
    create_automaton,
    match,
)

__all__ = [
    'Match',
    'SearchState',
    'TreeAutomaton',
    'create_automaton',
    'match',
]
