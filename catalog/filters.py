from functools import reduce
from typing import Callable, FrozenSet, Iterable, Optional, Tuple
from .domain import Category, FilterResult, ProductCategory, SelectionRequest
from .tree import build_child_index, build_parent_index, index_by_id, is_root, sort_by_title
from .traversal import ChildIndex, subtree_ids


def _children_of(
    parent_id: Optional[str], child_index: ChildIndex, by_id: dict
) -> Tuple[Category, ...]:
    if parent_id is None:
        return ()
    return sort_by_title(by_id[cid] for cid in child_index.get(parent_id, ()))


def resolve_filter(
    selection: SelectionRequest, categories: Iterable[Category]
) -> FilterResult:
    """
    Сводит выбор пользователя к одному множеству id для запроса товаров.

    Порядок (первое совпадение выигрывает):
      1. subcategory -> {subcategory}, без потомков; selected_parent = её родитель
      2. category    -> category + потомки; selected_parent = category
      3. categories  -> один корень ведёт себя как category,
                        иначе объединение поддеревьев без selected_parent
      4. ничего      -> пустое множество (фильтр не применяется)
    """
    cats = tuple(categories)
    by_id = index_by_id(cats)
    child_index = build_child_index(cats)
    parent_index = build_parent_index(cats)

    def with_parent(ids: FrozenSet[str], parent: Optional[str]) -> FilterResult:
        return FilterResult(
            category_ids=ids,
            selected_parent=parent,
            subcategories=_children_of(parent, child_index, by_id),
        )

    if selection.subcategory:
        parent = parent_index.get(selection.subcategory)
        return with_parent(frozenset({selection.subcategory}), parent)

    if selection.category:
        return with_parent(
            subtree_ids(selection.category, child_index), selection.category
        )

    if selection.categories:
        ids = tuple(dict.fromkeys(selection.categories))
        if len(ids) == 1 and is_root(ids[0], parent_index):
            return with_parent(subtree_ids(ids[0], child_index), ids[0])

        union = reduce(
            lambda acc, cid: acc | subtree_ids(cid, child_index), ids, frozenset()
        )
        return FilterResult(category_ids=union)

    return FilterResult(category_ids=frozenset())


def in_categories(category_ids: FrozenSet[str]) -> Callable[[ProductCategory], bool]:
    """
    Фильтр товаров по эффективному множеству.
    Пустое множество — без ограничений, подходит любой товар
    """
    if not category_ids:
        return lambda row: True
    return lambda row: row.category_id in category_ids
