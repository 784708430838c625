import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from catalog.domain import Category
from catalog.tree import (
    build_child_index,
    build_parent_index,
    build_tree,
    count_nodes,
    find_category,
    tree_summary,
)
from catalog.search import search_tree


def collect_ids(nodes):
    ids = []
    for node in nodes:
        ids.append(node.id)
        ids.extend(collect_ids(node.children))
    return ids


def test_build_tree_simple(simple_categories):
    roots = build_tree(simple_categories)
    assert [r.title for r in roots] == ["Men", "Women"]
    assert [c.title for c in roots[0].children] == ["Shirts"]
    assert roots[1].children == ()


def test_build_tree_sorts_case_insensitive(deep_categories):
    roots = build_tree(deep_categories)
    assert [r.title for r in roots] == ["Books", "Electronics"]
    electronics = roots[1]
    assert [c.title for c in electronics.children] == ["Audio", "computers"]
    assert [c.title for c in electronics.children[0].children] == ["Headphones", "speakers"]
    assert [c.title for c in electronics.children[1].children] == ["Laptops"]


def test_forest_invariant(deep_categories):
    """Каждая категория ровно один раз, узлов столько же, сколько записей"""
    roots = build_tree(deep_categories)
    ids = collect_ids(roots)
    assert sorted(ids) == sorted(c.id for c in deep_categories)
    assert count_nodes(roots) == len(deep_categories)


def test_dangling_parent_becomes_root():
    cats = (
        Category(id="x", title="Orphan", parent_id="missing"),
        Category(id="y", title="Alpha"),
    )
    roots = build_tree(cats)
    assert [r.id for r in roots] == ["y", "x"]
    assert build_child_index(cats) == {}
    assert build_parent_index(cats) == {"x": None, "y": None}


def test_build_tree_empty():
    assert build_tree(()) == ()
    assert build_child_index(()) == {}
    assert tree_summary(()) == {"roots": 0, "total": 0}


def test_build_tree_does_not_mutate_input(simple_categories):
    before = tuple(simple_categories)
    build_tree(simple_categories)
    assert simple_categories == before


def test_opaque_payload_carried_through():
    cats = (Category(id="1", title="Men", description="desc", image="men.png"),)
    node = build_tree(cats)[0]
    assert node.category.description == "desc"
    assert node.category.image == "men.png"


def test_child_index_keeps_input_order(deep_categories):
    index = build_child_index(deep_categories)
    assert index["e"] == ("au", "comp")
    assert index["au"] == ("sp", "hp")
    assert "b" not in index


def test_tree_summary(deep_categories):
    assert tree_summary(deep_categories) == {"roots": 2, "total": 7}


def test_find_category(simple_categories):
    assert find_category(simple_categories, "2").get_or_else(None).title == "Shirts"
    assert find_category(simple_categories, "404").is_none()


def test_build_tree_long_chain(long_chain):
    roots = build_tree(long_chain)
    assert len(roots) == 1
    assert count_nodes(roots) == 1500
    node, depth = roots[0], 0
    while node.children:
        assert len(node.children) == 1
        node, depth = node.children[0], depth + 1
    assert depth == 1499
    assert node.id == "n1499"


def test_search_long_chain(long_chain):
    found = search_tree(build_tree(long_chain), "n1499")
    assert count_nodes(found) == 1500
