"""
Исключения каталога.

Отказ при смене родителя — не исключение, а Either.left (см. guard.py).
Здесь только настоящие сбои: битый файл данных, неверные настройки.
"""

from typing import Optional


class CatalogError(Exception):
    """Базовое исключение каталога"""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class SeedFormatError(CatalogError):
    """Файл с данными не соответствует ожидаемой структуре"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message=message, code="SEED_FORMAT")
        self.path = path


class ConfigError(CatalogError):
    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(message=message, code="CONFIG")
        self.setting = setting
