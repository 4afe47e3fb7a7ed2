"""Pytest configuration and fixtures for treeshift tests"""
import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def store_data():
    """Bookstore document with three books and a bicycle"""
    return {
        "store": {
            "book": [
                {
                    "category": "reference",
                    "author": "Nigel Rees",
                    "title": "Sayings of the Century",
                    "price": 8.95,
                },
                {
                    "category": "fiction",
                    "author": "Evelyn Waugh",
                    "title": "Sword of Honour",
                    "price": 12.99,
                },
                {
                    "category": "fiction",
                    "author": "Herman Melville",
                    "title": "Moby Dick",
                    "price": 8.99,
                },
            ],
            "bicycle": {"color": "red", "price": 19.95},
        },
        "expensive": 10,
    }


@pytest.fixture
def nested_data():
    """Two categories with 2 and 1 items"""
    return {
        "categories": [
            {"items": [{"name": "item1"}, {"name": "item2"}]},
            {"items": [{"name": "item3"}]},
        ]
    }


@pytest.fixture
def rules_factory():
    """Factory to build a rule set from (source, target) pairs"""
    def _create_rules(*pairs):
        return {
            "pathMappings": [
                {"source": source, "target": target} for source, target in pairs
            ]
        }
    return _create_rules
