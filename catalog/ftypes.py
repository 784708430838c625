# Результаты без исключений:
#   Maybe  — поиск категории по id (tree.find_category)
#   Either — вердикт смены родителя: Left(RejectReason) или Right(Category)

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")


@dataclass(frozen=True)
class Maybe(Generic[T]):
    value: Optional[T] = None

    @staticmethod
    def some(value: T) -> "Maybe[T]":
        return Maybe(value)

    @staticmethod
    def nothing() -> "Maybe[T]":
        return Maybe(None)

    def is_some(self) -> bool:
        return self.value is not None

    def is_none(self) -> bool:
        return self.value is None

    def get_or_else(self, default: U) -> T | U:
        return self.value if self.is_some() else default


@dataclass(frozen=True)
class Either(Generic[L, R]):
    """
    Left — отказ с причиной, Right — принятое значение.
    Вызывающий код разбирает обе ветви через fold
    """

    is_left: bool
    value: Union[L, R]

    @staticmethod
    def left(value: L) -> "Either[L, R]":
        return Either(True, value)

    @staticmethod
    def right(value: R) -> "Either[L, R]":
        return Either(False, value)

    @property
    def is_right(self) -> bool:
        return not self.is_left

    def fold(self, on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
        return on_left(self.value) if self.is_left else on_right(self.value)  # type: ignore[arg-type]

    def left_or_none(self) -> Optional[L]:
        return self.value if self.is_left else None  # type: ignore[return-value]
