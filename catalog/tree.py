from typing import Dict, Iterable, List, Optional, Tuple
from .domain import Category, CategoryNode
from .ftypes import Maybe

# Общие примитивы иерархии: индексы и построение дерева.
# Все экраны (админка, сайдбар, меню, пикеры) используют только их.


def title_key(category: Category) -> str:
    """Ключ сортировки соседей: title без учёта регистра"""
    return category.title.casefold()


def sort_by_title(categories: Iterable[Category]) -> Tuple[Category, ...]:
    return tuple(sorted(categories, key=title_key))


def index_by_id(categories: Iterable[Category]) -> Dict[str, Category]:
    return {c.id: c for c in categories}


def find_category(categories: Iterable[Category], category_id: str) -> Maybe[Category]:
    """Безопасный поиск категории по id"""
    found = next((c for c in categories if c.id == category_id), None)
    return Maybe.some(found) if found is not None else Maybe.nothing()


def resolved_parent(category: Category, by_id: Dict[str, Category]) -> Optional[str]:
    """
    parent_id, если он указывает на категорию из того же списка.
    Висячая ссылка считается отсутствием родителя (категория — корень)
    """
    if category.parent_id is not None and category.parent_id in by_id:
        return category.parent_id
    return None


def build_child_index(categories: Iterable[Category]) -> Dict[str, Tuple[str, ...]]:
    """
    ChildIndex: id -> id прямых детей в порядке появления во входе.
    Один проход, O(n)
    """
    cats = tuple(categories)
    by_id = index_by_id(cats)
    index: Dict[str, List[str]] = {}
    for cat in cats:
        parent = resolved_parent(cat, by_id)
        if parent is not None:
            index.setdefault(parent, []).append(cat.id)
    return {pid: tuple(children) for pid, children in index.items()}


def build_parent_index(categories: Iterable[Category]) -> Dict[str, Optional[str]]:
    """Обратный индекс: id -> разрешённый parent_id (None для корней)"""
    cats = tuple(categories)
    by_id = index_by_id(cats)
    return {c.id: resolved_parent(c, by_id) for c in cats}


def is_root(category_id: str, parent_index: Dict[str, Optional[str]]) -> bool:
    return category_id in parent_index and parent_index[category_id] is None


def build_tree(categories: Iterable[Category]) -> Tuple[CategoryNode, ...]:
    """
    Строит лес из плоского списка.

    Корни и дети на каждом уровне отсортированы по title (без учёта регистра).
    Категория с неизвестным parent_id становится корнем.
    Вход не мутируется, узлы неизменяемые.

    Пример:
      [Men, Shirts(parent=Men), Women] -> (Men(Shirts), Women)
    """
    cats = tuple(categories)
    by_id = index_by_id(cats)
    sorted_children = {
        pid: sort_by_title(by_id[cid] for cid in kids)
        for pid, kids in build_child_index(cats).items()
    }
    roots = sort_by_title(c for c in cats if resolved_parent(c, by_id) is None)

    # порядок «родитель раньше детей», без рекурсии: глубина не ограничена
    order: List[Category] = []
    seen = set()
    stack = list(roots)
    while stack:
        cat = stack.pop()
        if cat.id in seen:
            continue
        seen.add(cat.id)
        order.append(cat)
        stack.extend(sorted_children.get(cat.id, ()))

    # узлы собираются от листьев к корням
    nodes: Dict[str, CategoryNode] = {}
    for cat in reversed(order):
        children = tuple(nodes[c.id] for c in sorted_children.get(cat.id, ()))
        nodes[cat.id] = CategoryNode(category=cat, children=children)
    return tuple(nodes[r.id] for r in roots)


def count_nodes(roots: Tuple[CategoryNode, ...]) -> int:
    """Количество узлов во всём лесу"""
    total = 0
    stack = list(roots)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total


def tree_summary(categories: Iterable[Category]) -> Dict[str, int]:
    """Сводка для таблицы админки: «N main categories • M total»"""
    cats = tuple(categories)
    by_id = index_by_id(cats)
    roots = sum(1 for c in cats if resolved_parent(c, by_id) is None)
    return {"roots": roots, "total": len(cats)}
