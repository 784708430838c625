from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple
from .domain import Category
from .tree import build_parent_index

ChildIndex = Dict[str, Tuple[str, ...]]


## ленивый обход в глубину: отдаёт потомков по одному, без самого category_id
## visited защищает от зацикливания на некорректных (циклических) данных
def iter_descendants(category_id: str, child_index: ChildIndex) -> Iterator[str]:
    visited = {category_id}
    stack = list(reversed(child_index.get(category_id, ())))
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        yield current
        stack.extend(reversed(child_index.get(current, ())))


def descendants(category_id: str, child_index: ChildIndex) -> FrozenSet[str]:
    """
    Все id, достижимые по ChildIndex из category_id, кроме него самого.
    Пустое множество для листа или неизвестного id
    """
    return frozenset(iter_descendants(category_id, child_index))


def subtree_ids(category_id: str, child_index: ChildIndex) -> FrozenSet[str]:
    """Сама категория + все потомки"""
    return descendants(category_id, child_index) | {category_id}


def ancestors(category_id: str, categories: Iterable[Category]) -> Tuple[str, ...]:
    """
    Путь предков от корня к непосредственному родителю.
    Пример: A -> B -> C, ancestors(C) == (A, B)
    """
    parent_index = build_parent_index(categories)
    path = []
    seen = {category_id}
    current: Optional[str] = parent_index.get(category_id)
    while current is not None and current not in seen:
        seen.add(current)
        path.append(current)
        current = parent_index.get(current)
    return tuple(reversed(path))
