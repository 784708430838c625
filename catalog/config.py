import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from .errors import ConfigError

# Переменные окружения из .env (если файл есть)
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """Настройки приложения каталога"""

    SEED_PATH: Path = Path(os.getenv("CATALOG_SEED_PATH", BASE_DIR / "data" / "seed.json"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: Path = Path(os.getenv("CATALOG_LOG_DIR", BASE_DIR / "logs"))

    # Значение поля «без родителя» в формах
    NO_PARENT_SENTINEL: str = "null"


def setup_logging(level: Optional[str] = None, log_to_file: bool = True):
    """Настройка логирования: консоль + файл в LOG_DIR"""
    level = (level or Config.LOG_LEVEL).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown LOG_LEVEL '{level}'", setting="LOG_LEVEL")

    handlers = [logging.StreamHandler()]
    if log_to_file:
        Config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(Config.LOG_DIR / "catalog.log"))

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
