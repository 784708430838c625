from typing import Dict, List, Mapping, Optional, Tuple
from catalog.config import Config
from catalog.domain import Category, ProductCategory, RejectReason, SelectionRequest
from catalog.counts import root_totals
from catalog.filters import resolve_filter
from catalog.options import exclude_subtree, flatten_options
from catalog.guard import validate_reparent

# Граница между строковыми параметрами запроса/формы и типизированным ядром.
# Сентинел "null" и списки через запятую разбираются только здесь.

REJECT_MESSAGES = {
    RejectReason.SELF_OR_CYCLE: "A category cannot be moved under itself or one of its subcategories",
    RejectReason.PARENT_NOT_FOUND: "Selected parent category does not exist",
}


# ============ Разбор параметров ============


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def split_ids(value) -> Tuple[str, ...]:
    """'a, b,,c' -> ('a', 'b', 'c'); принимает и готовый список"""
    if value is None:
        return ()
    parts = value if isinstance(value, (list, tuple)) else str(value).split(",")
    return tuple(filter(None, map(_clean, parts)))


def parse_selection(params: Mapping[str, object]) -> SelectionRequest:
    """Query-параметры subcategory / category / categories -> SelectionRequest"""
    return SelectionRequest(
        subcategory=_clean(params.get("subcategory")),
        category=_clean(params.get("category")),
        categories=split_ids(params.get("categories")),
    )


def parse_parent_field(value) -> Optional[str]:
    """Поле формы parent_id: 'null' и пустое значение -> None"""
    value = _clean(value)
    if value is None or value == Config.NO_PARENT_SENTINEL:
        return None
    return value


# ============ Поверхности ============


def listing_surface(
    params: Mapping[str, object], categories: Tuple[Category, ...]
) -> dict:
    """
    Для страницы списка товаров.
    category_ids пустой -> запрос товаров без условия по категории
    """
    result = resolve_filter(parse_selection(params), categories)
    return {
        "category_ids": sorted(result.category_ids),
        "selected_parent": result.selected_parent,
        "subcategories": [{"id": c.id, "title": c.title} for c in result.subcategories],
    }


def count_surface(
    categories: Tuple[Category, ...], associations: Tuple[ProductCategory, ...]
) -> Dict[str, int]:
    """{root_id: количество товаров во всём поддереве}"""
    return root_totals(categories, associations)


def picker_surface(
    categories: Tuple[Category, ...], exclude_id: Optional[str] = None
) -> List[dict]:
    """
    Опции для выпадающего списка с отступами.
    exclude_id — категория в редактировании (скрывается вместе с потомками)
    """
    cats = categories if exclude_id is None else exclude_subtree(categories, exclude_id)
    return [
        {"id": o.id, "title": o.title, "depth": o.depth} for o in flatten_options(cats)
    ]


def edit_validation_surface(
    category_id: str, parent_field, categories: Tuple[Category, ...]
) -> dict:
    """
    Проверка формы редактирования перед сохранением.
    categories — полный список, загруженный непосредственно перед проверкой
    """
    parent_id = parse_parent_field(parent_field)
    verdict = validate_reparent(category_id, parent_id, categories)
    return verdict.fold(
        lambda reason: {
            "ok": False,
            "reason": reason.value,
            "message": REJECT_MESSAGES[reason],
            "parent_id": parent_id,
        },
        lambda category: {
            "ok": True,
            "reason": None,
            "message": None,
            "parent_id": category.parent_id,
        },
    )
