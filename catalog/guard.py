from dataclasses import replace
from typing import FrozenSet, Iterable, List, Optional, Set
from .domain import Category, RejectReason
from .ftypes import Either
from .tree import build_child_index, build_parent_index, find_category, index_by_id
from .traversal import descendants


def validate_reparent(
    category_id: str,
    proposed_parent_id: Optional[str],
    categories: Iterable[Category],
) -> Either[RejectReason, Category]:
    """
    Проверяет смену родителя ДО сохранения.

    categories — полный, свежий, НЕ отфильтрованный список:
    в отфильтрованном цикл не обнаружить.

    Left(SELF_OR_CYCLE)     — родитель = сама категория или её потомок
    Left(PARENT_NOT_FOUND)  — родителя нет в списке
    Right(category)         — категория с новым parent_id
    """
    cats = tuple(categories)
    by_id = index_by_id(cats)
    current = find_category(cats, category_id).get_or_else(
        Category(id=category_id, title="")
    )

    if proposed_parent_id is None:
        return Either.right(replace(current, parent_id=None))

    if proposed_parent_id == category_id:
        return Either.left(RejectReason.SELF_OR_CYCLE)

    if proposed_parent_id not in by_id:
        return Either.left(RejectReason.PARENT_NOT_FOUND)

    if proposed_parent_id in descendants(category_id, build_child_index(cats)):
        return Either.left(RejectReason.SELF_OR_CYCLE)

    return Either.right(replace(current, parent_id=proposed_parent_id))


def cycle_members(categories: Iterable[Category]) -> FrozenSet[str]:
    """
    id категорий, лежащих на цикле родителей.
    Повторная проверка всего списка после записи: две последовательные правки,
    каждая из которых прошла validate_reparent, всё же могут замкнуть цикл
    """
    parent_index = build_parent_index(categories)
    found: Set[str] = set()
    for start in parent_index:
        path: List[str] = []
        on_path: Set[str] = set()
        current: Optional[str] = start
        while current is not None and current not in on_path and current not in found:
            path.append(current)
            on_path.add(current)
            current = parent_index.get(current)
        if current is not None and current in on_path:
            found.update(path[path.index(current):])
    return frozenset(found)
