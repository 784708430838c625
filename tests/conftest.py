import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from catalog.domain import Category, ProductCategory

SEED_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "seed.json")


@pytest.fixture
def seed_path():
    return SEED_PATH


@pytest.fixture
def simple_categories():
    """Men -> Shirts, Women"""
    return (
        Category(id="1", title="Men"),
        Category(id="2", title="Shirts", parent_id="1"),
        Category(id="3", title="Women"),
    )


@pytest.fixture
def chain_categories():
    """A -> B -> C"""
    return (
        Category(id="A", title="A"),
        Category(id="B", title="B", parent_id="A"),
        Category(id="C", title="C", parent_id="B"),
    )


@pytest.fixture
def deep_categories():
    """
    Electronics
      Audio
        Headphones
        speakers
      computers
        Laptops
    Books
    """
    return (
        Category(id="e", title="Electronics"),
        Category(id="lap", title="Laptops", parent_id="comp"),
        Category(id="au", title="Audio", parent_id="e"),
        Category(id="sp", title="speakers", parent_id="au"),
        Category(id="comp", title="computers", parent_id="e"),
        Category(id="hp", title="Headphones", parent_id="au"),
        Category(id="b", title="Books"),
    )


@pytest.fixture
def simple_associations():
    """Прямые счётчики {1: 5, 2: 3, 3: 0}"""
    return tuple(ProductCategory(product_id=f"m{i}", category_id="1") for i in range(5)) + tuple(
        ProductCategory(product_id=f"s{i}", category_id="2") for i in range(3)
    )


@pytest.fixture
def long_chain():
    """n0000 -> n0001 -> ... -> n1499: цепочка глубже лимита рекурсии"""
    return tuple(
        Category(id=f"n{i:04d}", title=f"n{i:04d}", parent_id=f"n{i - 1:04d}" if i else None)
        for i in range(1500)
    )
