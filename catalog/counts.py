from functools import reduce
from typing import Dict, Iterable, Tuple
from .domain import Category, ProductCategory
from .tree import build_child_index, build_parent_index
from .traversal import ChildIndex, descendants


def tally_direct_counts(associations: Iterable[ProductCategory]) -> Dict[str, int]:
    """
    DirectCountMap: сколько товаров привязано ровно к категории.
    Товары без категории не учитываются
    """

    def accumulate(acc: dict, assoc: ProductCategory) -> dict:
        if not assoc.category_id:
            return acc
        return {**acc, assoc.category_id: acc.get(assoc.category_id, 0) + 1}

    return reduce(accumulate, associations, {})


def total_count(category_id: str, direct: Dict[str, int], child_index: ChildIndex) -> int:
    """
    Товары категории + рекурсивно все её потомки.
    Неизвестная категория или пустое поддерево -> 0
    """
    return direct.get(category_id, 0) + sum(
        direct.get(cid, 0) for cid in descendants(category_id, child_index)
    )


def total_counts(
    categories: Iterable[Category], direct: Dict[str, int]
) -> Dict[str, int]:
    """
    TotalCountMap для всех категорий за один пакетный проход.
    Итеративный post-order: сумма каждого поддерева считается один раз
    и переиспользуется родителем
    """
    cats = tuple(categories)
    child_index = build_child_index(cats)
    totals: Dict[str, int] = {}

    for cat in cats:
        if cat.id in totals:
            continue
        in_progress = set()
        stack = [(cat.id, False)]
        while stack:
            cid, expanded = stack.pop()
            if expanded:
                totals[cid] = direct.get(cid, 0) + sum(
                    totals.get(child, 0) for child in child_index.get(cid, ())
                )
            elif cid not in totals and cid not in in_progress:
                in_progress.add(cid)
                stack.append((cid, True))
                stack.extend((child, False) for child in child_index.get(cid, ()))

    return {c.id: totals[c.id] for c in cats}


def root_totals(
    categories: Iterable[Category], associations: Iterable[ProductCategory]
) -> Dict[str, int]:
    """Итоги только по корневым категориям (счётчики сайдбара)"""
    cats: Tuple[Category, ...] = tuple(categories)
    totals = total_counts(cats, tally_direct_counts(associations))
    parent_index = build_parent_index(cats)
    return {cid: totals[cid] for cid, parent in parent_index.items() if parent is None}
