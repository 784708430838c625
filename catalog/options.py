from typing import Dict, Iterable, List, Optional, Tuple
from .domain import Category, OptionEntry
from .tree import build_child_index, index_by_id, resolved_parent, sort_by_title
from .traversal import subtree_ids


def flatten_options(
    categories: Iterable[Category],
    root_parent_id: Optional[str] = None,
    depth: int = 0,
) -> Tuple[OptionEntry, ...]:
    """
    Плоский список для пикера с отступами (pre-order, в глубину).

    На каждом уровне соседи отсортированы по title без учёта регистра;
    за каждым узлом сразу идут его потомки с depth + 1.
    Категории с неизвестным родителем считаются корнями.

    Пример:
      Men(Shirts), Women -> [Men@0, Shirts@1, Women@0]
    """
    cats = tuple(categories)
    by_id = index_by_id(cats)
    child_index = build_child_index(cats)

    def level(parent_id: Optional[str]) -> Tuple[Category, ...]:
        if parent_id is None:
            return sort_by_title(c for c in cats if resolved_parent(c, by_id) is None)
        return sort_by_title(by_id[cid] for cid in child_index.get(parent_id, ()))

    # явный стек вместо рекурсии; дети кладутся в обратном порядке,
    # чтобы первым снимался первый по алфавиту
    entries: List[OptionEntry] = []
    seen = set() if root_parent_id is None else {root_parent_id}
    stack = [(cat, depth) for cat in reversed(level(root_parent_id))]
    while stack:
        cat, d = stack.pop()
        if cat.id in seen:
            continue
        seen.add(cat.id)
        entries.append(OptionEntry(id=cat.id, title=cat.title, depth=d))
        stack.extend((child, d + 1) for child in reversed(level(cat.id)))
    return tuple(entries)


def exclude_subtree(
    categories: Iterable[Category], category_id: str
) -> Tuple[Category, ...]:
    """
    Список для выбора родителя при редактировании:
    без самой категории и всех её потомков
    """
    cats = tuple(categories)
    banned = subtree_ids(category_id, build_child_index(cats))
    return tuple(c for c in cats if c.id not in banned)


def group_roots(
    categories: Iterable[Category],
) -> List[Dict[str, object]]:
    """
    Двухуровневая группировка для формы товара:
    [{"root": Category, "children": (Category, ...)}], всё по алфавиту
    """
    cats = tuple(categories)
    by_id = index_by_id(cats)
    child_index = build_child_index(cats)
    roots = sort_by_title(c for c in cats if resolved_parent(c, by_id) is None)
    return [
        {
            "root": root,
            "children": sort_by_title(by_id[cid] for cid in child_index.get(root.id, ())),
        }
        for root in roots
    ]
