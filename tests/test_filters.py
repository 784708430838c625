import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from catalog.domain import ProductCategory, SelectionRequest
from catalog.filters import in_categories, resolve_filter


# ============ Приоритет выбора ============


def test_category_expands_to_subtree(simple_categories):
    result = resolve_filter(SelectionRequest(category="1"), simple_categories)
    assert result.category_ids == {"1", "2"}
    assert result.selected_parent == "1"
    assert [c.id for c in result.subcategories] == ["2"]


def test_categories_union_without_parent(simple_categories):
    result = resolve_filter(SelectionRequest(categories=("2", "3")), simple_categories)
    assert result.category_ids == {"2", "3"}
    assert result.selected_parent is None
    assert result.subcategories == ()


def test_single_root_in_categories_behaves_like_category(simple_categories):
    via_list = resolve_filter(SelectionRequest(categories=("1",)), simple_categories)
    via_category = resolve_filter(SelectionRequest(category="1"), simple_categories)
    assert via_list == via_category
    assert via_list.category_ids == {"1", "2"}
    assert via_list.selected_parent == "1"


def test_single_non_root_in_categories_has_no_parent(deep_categories):
    result = resolve_filter(SelectionRequest(categories=("au",)), deep_categories)
    assert result.category_ids == {"au", "sp", "hp"}
    assert result.selected_parent is None


def test_duplicates_in_categories_collapse(deep_categories):
    result = resolve_filter(SelectionRequest(categories=("b", "b")), deep_categories)
    assert result.category_ids == {"b"}
    assert result.selected_parent == "b"


def test_categories_union_overlapping_subtrees(deep_categories):
    result = resolve_filter(SelectionRequest(categories=("e", "au")), deep_categories)
    assert result.category_ids == {"e", "au", "comp", "sp", "hp", "lap"}
    assert result.selected_parent is None


def test_subcategory_wins_and_is_not_expanded(deep_categories):
    selection = SelectionRequest(subcategory="au", category="b", categories=("b",))
    result = resolve_filter(selection, deep_categories)
    assert result.category_ids == {"au"}
    assert result.selected_parent == "e"
    assert [c.title for c in result.subcategories] == ["Audio", "computers"]


def test_subcategory_root_has_no_parent(deep_categories):
    result = resolve_filter(SelectionRequest(subcategory="b"), deep_categories)
    assert result.category_ids == {"b"}
    assert result.selected_parent is None


def test_category_wins_over_categories(deep_categories):
    selection = SelectionRequest(category="comp", categories=("b",))
    result = resolve_filter(selection, deep_categories)
    assert result.category_ids == {"comp", "lap"}
    assert result.selected_parent == "comp"


def test_empty_selection_is_unconstrained(simple_categories):
    result = resolve_filter(SelectionRequest(), simple_categories)
    assert result.category_ids == frozenset()
    assert result.is_unconstrained
    assert result.selected_parent is None


def test_resolution_is_idempotent(deep_categories):
    selection = SelectionRequest(categories=("au", "b"))
    assert resolve_filter(selection, deep_categories) == resolve_filter(
        selection, deep_categories
    )


# ============ Фильтр товаров ============


def test_in_categories_predicate():
    rows = (
        ProductCategory(product_id="p1", category_id="a"),
        ProductCategory(product_id="p2", category_id="b"),
        ProductCategory(product_id="p3", category_id=None),
    )
    assert [r.product_id for r in filter(in_categories(frozenset({"a"})), rows)] == ["p1"]
    assert len(list(filter(in_categories(frozenset()), rows))) == 3
