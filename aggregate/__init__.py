"""
Treeshift Aggregate - reducers applied to matched values.

Provides the closed set of aggregate operations usable as a path suffix,
e.g. "$.store.book[*].price.max()".
"""
from .operations import AGGREGATE_OPS, is_aggregate, natural_key, reduce_values

__all__ = ['AGGREGATE_OPS', 'is_aggregate', 'natural_key', 'reduce_values']
