import logging
from typing import Dict, FrozenSet, Optional, Tuple
from .domain import (
    Category,
    CategoryNode,
    FilterResult,
    OptionEntry,
    ProductCategory,
    RejectReason,
    SelectionRequest,
)
from .ftypes import Either, Maybe
from .tree import build_child_index, build_tree, find_category, tree_summary
from .traversal import ancestors, descendants
from .counts import root_totals, tally_direct_counts, total_counts
from .filters import in_categories, resolve_filter
from .options import exclude_subtree, flatten_options, group_roots
from .guard import validate_reparent
from .search import search_tree

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Фасад над одним снимком каталога.
    Ничего не кэширует между вызовами: каждая операция пересчитывает всё
    из переданных плоских списков
    """

    def __init__(
        self,
        categories: Tuple[Category, ...],
        associations: Tuple[ProductCategory, ...] = (),
    ):
        self.categories = tuple(categories)
        self.associations = tuple(associations)

    def get(self, category_id: str) -> Maybe[Category]:
        return find_category(self.categories, category_id)

    def tree(self) -> Tuple[CategoryNode, ...]:
        return build_tree(self.categories)

    def child_index(self) -> Dict[str, Tuple[str, ...]]:
        return build_child_index(self.categories)

    def descendants(self, category_id: str) -> FrozenSet[str]:
        return descendants(category_id, self.child_index())

    def breadcrumbs(self, category_id: str) -> Tuple[Category, ...]:
        """Путь от корня до категории включительно"""
        ids = ancestors(category_id, self.categories) + (category_id,)
        return tuple(
            c for c in (self.get(cid).get_or_else(None) for cid in ids) if c is not None
        )

    def summary(self) -> Dict[str, int]:
        return tree_summary(self.categories)

    def search(self, query: str) -> Tuple[CategoryNode, ...]:
        return search_tree(self.tree(), query)

    # ============ Счётчики ============

    def total_counts(self) -> Dict[str, int]:
        totals = total_counts(self.categories, tally_direct_counts(self.associations))
        logger.debug("Computed totals for %d categories", len(totals))
        return totals

    def root_totals(self) -> Dict[str, int]:
        return root_totals(self.categories, self.associations)

    # ============ Фильтрация товаров ============

    def resolve(self, selection: SelectionRequest) -> FilterResult:
        return resolve_filter(selection, self.categories)

    def filter_products(self, selection: SelectionRequest) -> Tuple[ProductCategory, ...]:
        """Товары, попадающие под выбор (пустой выбор — все товары)"""
        result = self.resolve(selection)
        return tuple(filter(in_categories(result.category_ids), self.associations))

    # ============ Пикеры ============

    def options(self, exclude_id: Optional[str] = None) -> Tuple[OptionEntry, ...]:
        cats = self.categories if exclude_id is None else exclude_subtree(self.categories, exclude_id)
        return flatten_options(cats)

    def grouped(self):
        return group_roots(self.categories)

    # ============ Редактирование ============

    def validate_reparent(
        self, category_id: str, proposed_parent_id: Optional[str]
    ) -> Either[RejectReason, Category]:
        """self.categories должен быть полным свежим списком, а не выборкой пикера"""
        verdict = validate_reparent(category_id, proposed_parent_id, self.categories)
        if verdict.is_left:
            logger.info(
                "Rejected reparent of %s under %s: %s",
                category_id,
                proposed_parent_id,
                verdict.value.value,
            )
        return verdict
