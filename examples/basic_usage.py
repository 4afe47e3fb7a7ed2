#!/usr/bin/env python3
"""
Basic usage example for Treeshift.

This example shows how to relocate values from a bookstore document into
new shapes with path rules. Sources may fan out with [*] and may end in an
aggregate such as .max() or .sum(); targets may use one [*] to spread a
list of values across an array.

Run from the treeshift directory:
    python examples/basic_usage.py
"""
import sys
import os
import json
import logging

# Add parent directory to path for local development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from automaton import create_automaton
from remap import create_transformer, debug_transform, extract_values


def main():
    logging.basicConfig(level=logging.INFO)

    # Sample nested JSON data
    store = {
        "store": {
            "book": [
                {"category": "reference", "author": "Nigel Rees",
                 "title": "Sayings of the Century", "price": 8.95},
                {"category": "fiction", "author": "Evelyn Waugh",
                 "title": "Sword of Honour", "price": 12.99},
                {"category": "fiction", "author": "Herman Melville",
                 "title": "Moby Dick", "isbn": "0-553-21311-3", "price": 8.99},
                {"category": "fiction", "author": "J. R. R. Tolkien",
                 "title": "The Lord of the Rings", "isbn": "0-395-19395-8", "price": 22.99},
            ],
            "bicycle": {"color": "red", "price": 19.95}
        },
        "expensive": 10
    }

    # Wildcard to wildcard: each book becomes a novel
    basic_rules = {
        "pathMappings": [
            {"source": "$.store.book[*].price", "target": "$.store.novel[*].cost"},
            {"source": "$.store.book[*].title", "target": "$.store.novel[*].bookTitle"},
        ]
    }

    # Aggregates reduce all matches to one value
    aggregate_rules = {
        "pathMappings": [
            {"source": "$.store.book[*].price.max()", "target": "$.storeSummary.maxPrice"},
            {"source": "$.store.book[*].price.sum()", "target": "$.storeSummary.totalCostOfBooks"},
            {"source": "$.store.book[*].price.avg()", "target": "$.storeSummary.averagePrice"},
            {"source": "$.store.book[*].title.count()", "target": "$.storeSummary.bookCount"},
        ]
    }

    print("=" * 60)
    print("TREESHIFT - JSON Relocation Example")
    print("=" * 60)

    for name, rules in [("Basic", basic_rules), ("Aggregate", aggregate_rules)]:
        transformer = create_transformer(rules)
        print(f"\n{name} transformation:")
        print("-" * 40)
        print(json.dumps(transformer(store), indent=2))

    print("\nDirect extraction:")
    print("-" * 40)
    print("All prices:   ", extract_values(store, "$.store.book[*].price"))
    print("Categories:   ", extract_values(store, "$.store.book[*].category.unique()"))
    print("First title:  ", extract_values(store, "$.store.book[*].title.first()"))

    print("\nAutomaton matches:")
    print("-" * 40)
    for m in create_automaton("$.store.book[*].price").process(store):
        print(f"  {m.value:>6}  at {m.path}")

    print("\nTrace:")
    print("-" * 40)
    trace = debug_transform(store, basic_rules)
    print(trace.to_frame().to_string(index=False))


if __name__ == "__main__":
    main()
