"""
Mapping driver.

Applies an ordered list of {source, target} rules to a source document,
extracting with the tree automaton (plus optional aggregate) and folding
each result into an accumulating output document.
"""
import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Iterable, Optional

import pandas as pd

from aggregate import is_aggregate, reduce_values
from automaton import TreeAutomaton
from common.paths import ParsedPath, PathParser
from validation import RuleValidator

from .writer import write_at

logger = logging.getLogger(__name__)


def _extract(document: Any, parsed: ParsedPath, keep_list: bool) -> Any:
    matches = TreeAutomaton(parsed).process(document)
    values = [m.value for m in matches]

    if parsed.aggregate and is_aggregate(parsed.aggregate):
        return reduce_values(values, parsed.aggregate)

    if len(values) == 1 and not keep_list:
        return values[0]
    return values


def extract_values(
    document: Any,
    source: str,
    keep_list: bool = False,
    strict: bool = False,
) -> Any:
    """
    Extract value(s) from a document.

    Args:
        document: Source JSON document.
        source: Source path, optionally with an aggregate suffix.
        keep_list: Always return a list of matches, even for a single match.
        strict: Reject unknown aggregate suffixes.

    Returns:
        The aggregate result if the path has one; otherwise the single
        matched value, or the list of matched values ([] for no match).
    """
    parsed = PathParser(strict=strict).parse(source)
    return _extract(document, parsed, keep_list)


@dataclass(frozen=True)
class CompiledRule:
    """A rule with both paths parsed."""
    source: str
    target: str
    source_path: ParsedPath
    target_path: ParsedPath

    @property
    def rule(self) -> dict:
        return {'source': self.source, 'target': self.target}

    def apply(self, document: Any, accumulator: Any) -> tuple[Any, Any]:
        """Return (extracted value, new accumulator)."""
        extracted = _extract(
            document,
            self.source_path,
            keep_list=self.target_path.wildcard_count > 0,
        )
        return extracted, write_at(accumulator, self.target_path, extracted)


def _compile(rule: dict, parser: PathParser) -> CompiledRule:
    return CompiledRule(
        source=rule['source'],
        target=rule['target'],
        source_path=parser.parse(rule['source']),
        target_path=parser.parse(rule['target']),
    )


def transform_single_rule(document: Any, rule: dict, accumulator: Optional[Any] = None) -> Any:
    """
    Apply one {source, target} rule.

    Args:
        document: Source JSON document.
        rule: Mapping with 'source' and 'target' path expressions.
        accumulator: Output built so far (not modified). Defaults to {}.

    Returns:
        New accumulator with the rule's value written.
    """
    if accumulator is None:
        accumulator = {}
    _, result = _compile(rule, PathParser()).apply(document, accumulator)
    return result


@dataclass
class TransformStep:
    """One rule application recorded by a trace."""
    rule: dict
    extracted_value: Any
    previous_result: Any
    new_result: Any


@dataclass
class TransformTrace:
    """Final result plus each intermediate step of a transformation."""
    final_result: Any
    steps: list[TransformStep] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        """One row per rule: source, target, and the value extracted."""
        rows = [
            {
                'step': i + 1,
                'source': step.rule['source'],
                'target': step.rule['target'],
                'extracted_value': step.extracted_value,
                'matched': step.extracted_value != [],
            }
            for i, step in enumerate(self.steps)
        ]
        return pd.DataFrame(rows, columns=['step', 'source', 'target', 'extracted_value', 'matched'])


class Transformer:
    """
    Reusable transformation built from a rule set.

    The rule set is validated and every path parsed up front, so a bad rule
    set fails before any document is touched.

    Example:
        >>> transformer = Transformer({"pathMappings": [
        ...     {"source": "$.store.book[*].price.max()", "target": "$.summary.maxPrice"},
        ... ]})
        >>> transformer.transform(store)
        {'summary': {'maxPrice': 12.99}}
    """

    def __init__(self, rules: Any, strict: bool = False):
        """
        Initialize Transformer.

        Args:
            rules: Rule set with a 'pathMappings' list.
            strict: If True, unknown aggregate suffixes are rejected instead
                   of being ignored.

        Raises:
            ValidationError: If the rule set is malformed.
            ParseError: If a path cannot be parsed.
        """
        self.strict = strict
        RuleValidator(strict=strict).check(rules)
        parser = PathParser(strict=strict)
        self.rules = [_compile(rule, parser) for rule in rules['pathMappings']]

    def transform(self, document: Any) -> Any:
        """Apply all rules to a document, starting from an empty object."""
        accumulator: Any = {}
        for compiled in self.rules:
            try:
                _, accumulator = compiled.apply(document, accumulator)
            except Exception as e:
                logger.error(f"Error applying rule {compiled.source} -> {compiled.target}: {e}")
                raise
        return accumulator

    __call__ = transform

    def transform_many(self, documents: Iterable[Any]) -> list:
        """Transform each document independently."""
        return [self.transform(doc) for doc in documents]

    def trace(self, document: Any) -> TransformTrace:
        """Transform a document, recording every step."""
        trace = TransformTrace(final_result={})
        accumulator: Any = {}
        for compiled in self.rules:
            try:
                extracted, new_accumulator = compiled.apply(document, accumulator)
            except Exception as e:
                logger.error(f"Error applying rule {compiled.source} -> {compiled.target}: {e}")
                raise
            trace.steps.append(TransformStep(
                rule=compiled.rule,
                extracted_value=extracted,
                previous_result=accumulator,
                new_result=new_accumulator,
            ))
            accumulator = new_accumulator
        trace.final_result = accumulator
        return trace


def transform(document: Any, rules: Any, strict: bool = False) -> Any:
    """
    Transform a document with a rule set.

    Raises:
        ValidationError: If the rule set is malformed (before any write).
    """
    return Transformer(rules, strict=strict).transform(document)


def create_transformer(rules: Any, strict: bool = False) -> Callable[[Any], Any]:
    """Build a reusable function applying a rule set."""
    return Transformer(rules, strict=strict)


def compose_transformations(*functions: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Compose transformations right to left.

    compose_transformations(f, g)(data) == f(g(data))
    """
    def composed(data: Any) -> Any:
        return reduce(lambda result, fn: fn(result), reversed(functions), data)
    return composed


def debug_transform(document: Any, rules: Any) -> TransformTrace:
    """Transform a document and return the step-by-step trace."""
    return Transformer(rules).trace(document)
