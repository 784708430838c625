from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class Category:
    id: str
    title: str
    parent_id: Optional[str] = None
    # непрозрачная нагрузка, ядро её не читает
    description: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class CategoryNode:
    """Узел дерева: категория + отсортированные по title дети"""

    category: Category
    children: Tuple["CategoryNode", ...] = ()

    @property
    def id(self) -> str:
        return self.category.id

    @property
    def title(self) -> str:
        return self.category.title


@dataclass(frozen=True)
class ProductCategory:
    product_id: str
    category_id: Optional[str]


@dataclass(frozen=True)
class OptionEntry:
    id: str
    title: str
    depth: int  # 0 = корень


@dataclass(frozen=True)
class SelectionRequest:
    """
    Выбор пользователя на странице каталога.
    Приоритет: subcategory > category > categories
    """

    subcategory: Optional[str] = None
    category: Optional[str] = None
    categories: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FilterResult:
    category_ids: FrozenSet[str]
    selected_parent: Optional[str] = None
    subcategories: Tuple[Category, ...] = ()

    @property
    def is_unconstrained(self) -> bool:
        """Пустое множество = фильтр по категориям не применяется"""
        return not self.category_ids


class RejectReason(str, Enum):
    SELF_OR_CYCLE = "SELF_OR_CYCLE"
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"
