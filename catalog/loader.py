import json
import logging
from typing import Optional, Tuple
from .config import Config
from .domain import Category, ProductCategory
from .errors import SeedFormatError

logger = logging.getLogger(__name__)


def normalize_parent(value) -> Optional[str]:
    """'null', '' и None означают «нет родителя»"""
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == Config.NO_PARENT_SENTINEL:
        return None
    return value


def load_seed(path) -> Tuple[Tuple[Category, ...], Tuple[ProductCategory, ...]]:
    """
    Загружает снимок каталога из JSON:
      {"categories": [{id, title, parent_id, ...}], "products": [{id, category_id}]}
    Возвращает (категории, привязки товаров к категориям)
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SeedFormatError(f"Invalid JSON: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise SeedFormatError("Top-level object expected", path=str(path))

    def _to_category(raw) -> Category:
        if not isinstance(raw, dict) or "id" not in raw or "title" not in raw:
            raise SeedFormatError(f"Category needs id and title: {raw!r}", path=str(path))
        return Category(
            id=str(raw["id"]),
            title=str(raw["title"]),
            parent_id=normalize_parent(raw.get("parent_id")),
            description=raw.get("description"),
            image=raw.get("image"),
        )

    def _to_association(raw) -> ProductCategory:
        if not isinstance(raw, dict) or "id" not in raw:
            raise SeedFormatError(f"Product needs id: {raw!r}", path=str(path))
        category_id = raw.get("category_id")
        return ProductCategory(
            product_id=str(raw["id"]),
            category_id=str(category_id) if category_id else None,
        )

    categories = tuple(map(_to_category, data.get("categories", [])))
    associations = tuple(map(_to_association, data.get("products", [])))
    logger.debug(
        "Loaded %d categories and %d products from %s",
        len(categories),
        len(associations),
        path,
    )
    return categories, associations
