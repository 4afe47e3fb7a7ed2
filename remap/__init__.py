"""
Treeshift Remap - relocate values between JSON documents.

Applies {source, target} path rules to a source document and builds a new
output document. Targets may use one [*] segment to spread a list of
extracted values across an array.

Example:
    >>> from remap import transform
    >>>
    >>> rules = {"pathMappings": [
    ...     {"source": "$.store.book[*].price", "target": "$.store.novel[*].cost"},
    ...     {"source": "$.store.book[*].price.sum()", "target": "$.summary.total"},
    ... ]}
    >>> transform(store, rules)
    {'store': {'novel': [{'cost': 8.95}, {'cost': 12.99}, {'cost': 8.99}]}, 'summary': {'total': 30.93}}
"""
from .writer import set_value_at_path, write_at
from .transformer import (
    CompiledRule,
    Transformer,
    TransformStep,
    TransformTrace,
    compose_transformations,
    create_transformer,
    debug_transform,
    extract_values,
    transform,
    transform_single_rule,
)

__all__ = [
    'CompiledRule',
    'Transformer',
    'TransformStep',
    'TransformTrace',
    'compose_transformations',
    'create_transformer',
    'debug_transform',
    'extract_values',
    'set_value_at_path',
    'transform',
    'transform_single_rule',
    'write_at',
]
