"""
Rule-set validation.

Checks the shape of a transformation rule set before any extraction or
write happens, collecting every problem into a single ValidationResult.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from common.paths import ParseError, PathParser

logger = logging.getLogger(__name__)

RULES_KEY = 'pathMappings'
RULE_FIELDS = ('source', 'target')


@dataclass
class ValidationResult:
    """Result of validating a rule set."""
    success: bool
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)
        self.success = False

    def __bool__(self) -> bool:
        return self.success


class ValidationError(ValueError):
    """Raised when a rule set fails validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(result.errors)
        super().__init__(f"Invalid transformation rules: {details}")


class RuleValidator:
    """
    Validates transformation rule sets.

    Expected shape:
        {
            "pathMappings": [
                {"source": "$.store.book[*].price", "target": "$.novel[*].cost"},
                ...
            ]
        }

    Example:
        >>> validator = RuleValidator()
        >>> result = validator.validate({"pathMappings": [{"source": "$.a"}]})
        >>> result.errors
        ["pathMappings[0]: 'target' must be a string"]
    """

    def __init__(self, strict: bool = False):
        """
        Initialize the validator.

        Args:
            strict: If True, unknown aggregate suffixes are reported as errors
                   instead of being ignored.
        """
        self.strict = strict
        self._parser = PathParser(strict=strict)

    def validate(self, rules: Any) -> ValidationResult:
        """
        Validate a rule set.

        Args:
            rules: Rule set to check.

        Returns:
            ValidationResult listing every problem found.
        """
        result = ValidationResult(success=True)

        if not isinstance(rules, Mapping):
            result.add_error(f"Rules must be an object, got {type(rules).__name__}")
            return result

        mappings = rules.get(RULES_KEY)
        if not isinstance(mappings, list):
            result.add_error(f"{RULES_KEY} must be an array")
            return result

        for key in rules:
            if key != RULES_KEY:
                result.add_warning(f"Ignoring unknown key '{key}'")

        for i, rule in enumerate(mappings):
            self._validate_rule(rule, f"{RULES_KEY}[{i}]", result)

        return result

    def _validate_rule(self, rule: Any, label: str, result: ValidationResult) -> None:
        if not isinstance(rule, Mapping):
            result.add_error(f"{label}: rule must be an object")
            return

        for name in RULE_FIELDS:
            if not isinstance(rule.get(name), str):
                result.add_error(f"{label}: '{name}' must be a string")

        for key in rule:
            if key not in RULE_FIELDS:
                result.add_warning(f"{label}: ignoring unknown key '{key}'")

        source = rule.get('source')
        if isinstance(source, str):
            try:
                self._parser.parse(source)
            except ParseError as e:
                result.add_error(f"{label}: invalid source: {e}")

        target = rule.get('target')
        if isinstance(target, str):
            try:
                parsed = self._parser.parse(target)
            except ParseError as e:
                result.add_error(f"{label}: invalid target: {e}")
                return
            if parsed.aggregate:
                result.add_error(f"{label}: target cannot have an aggregate suffix")
            if parsed.wildcard_count > 1:
                result.add_error(f"{label}: target supports at most one [*] segment")

    def check(self, rules: Any) -> ValidationResult:
        """
        Validate a rule set and raise if it is invalid.

        Raises:
            ValidationError: If any error was found.
        """
        result = self.validate(rules)
        for warn in result.warnings:
            logger.warning(warn)
        if not result.success:
            raise ValidationError(result)
        return result


def validate_rules(rules: Any) -> bool:
    """Return True if the rule set is valid."""
    return RuleValidator().validate(rules).success
