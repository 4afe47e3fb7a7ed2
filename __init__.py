"""
Treeshift - Relocate values inside JSON documents with path rules.

Subpackages:
    - treeshift.common: Path expression parsing
    - treeshift.automaton: Tree automaton matching paths against documents
    - treeshift.aggregate: Aggregate operations (max, sum, unique, ...)
    - treeshift.validation: Rule-set validation
    - treeshift.remap: Location writer and mapping driver

Example:
    >>> from treeshift.common import parse_path
    >>> from treeshift.automaton import create_automaton
    >>> from treeshift.remap import transform, Transformer
    >>> from treeshift.validation import RuleValidator
"""
__version__ = "0.1.0"
