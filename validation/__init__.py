"""
Treeshift Validation - rule-set validation.

Checks transformation rule sets before any extraction or write happens.
"""
from .validator import RuleValidator, ValidationError, ValidationResult, validate_rules

__all__ = ['RuleValidator', 'ValidationError', 'ValidationResult', 'validate_rules']
