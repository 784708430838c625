from typing import Dict, Optional, Tuple
from .domain import CategoryNode


def _matches(node: CategoryNode, query: str) -> bool:
    return query in node.title.casefold() or query in (
        node.category.description or ""
    ).casefold()


def search_tree(roots: Tuple[CategoryNode, ...], query: str) -> Tuple[CategoryNode, ...]:
    """
    Поиск по дереву админки.
    Узел остаётся, если совпал сам (title/description) или совпал кто-то из потомков;
    у оставшихся узлов дети тоже отфильтрованы. Пустой запрос ничего не отсекает
    """
    q = query.strip().casefold()
    if not q:
        return roots

    # post-order на явном стеке: дети решаются раньше родителя
    kept: Dict[str, Optional[CategoryNode]] = {}
    stack = [(node, False) for node in roots]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            children = tuple(
                kept[c.id] for c in node.children if kept.get(c.id) is not None
            )
            matched = _matches(node, q) or children
            kept[node.id] = CategoryNode(node.category, children) if matched else None
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)

    return tuple(kept[r.id] for r in roots if kept.get(r.id) is not None)
