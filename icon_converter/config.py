"""Настройки конвертера: .env + необязательный JSON-файл.

Порядок поиска значения: JSON-файл → переменная окружения (имя в верхнем регистре) → значение по умолчанию.
"""
from __future__ import annotations

import json
import os
from typing import Any, Optional, Tuple

from dotenv import load_dotenv

from icon_converter.models.icon_size import DEFAULT_SIZES, IconSize, normalize_sizes, parse_sizes
from icon_converter.services.image_service import DEFAULT_MAX_IMAGE_DIMENSION

CONFIG_PATH_ENV = "ICON_CONVERTER_CONFIG"
DEFAULT_CONFIG_PATH = "icon_converter.json"


class Config:
    _instance = None  # Singleton instance

    def __new__(cls, config_path: Optional[str] = None):
        if cls._instance is None:
            instance = super(Config, cls).__new__(cls)
            # singleton is published only after a successful load
            instance._load_config(config_path)
            cls._instance = instance
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Сбрасывает синглтон (нужно тестам и повторной загрузке)."""
        cls._instance = None

    def _load_config(self, config_path: Optional[str]) -> None:
        """Загружает .env и JSON-файл настроек, если он есть.

        Raises:
            ValueError: если файл не является JSON-объектом (включая `json.JSONDecodeError`).
        """
        load_dotenv()
        self.config_path = config_path or os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)
        self.settings: dict[str, Any] = {}
        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                loaded = json.load(file)
        except FileNotFoundError:
            return
        if not isinstance(loaded, dict):
            raise ValueError(f"{self.config_path}: expected a JSON object")
        self.settings.update(loaded)

    def get(self, key: str, default: Any = None) -> Any:
        """Значение из JSON-настроек или переменных окружения."""
        if key in self.settings:
            return self.settings[key]
        return os.getenv(key.upper(), default)

    def get_default_sizes(self) -> Tuple[IconSize, ...]:
        value = self.get("default_sizes")
        if value is None or value == "":
            return DEFAULT_SIZES
        if isinstance(value, str):
            return parse_sizes(value)
        return normalize_sizes(value)

    def get_max_image_dimension(self) -> int:
        return int(self.get("max_image_dimension", DEFAULT_MAX_IMAGE_DIMENSION))

    def get_log_dir(self) -> Optional[str]:
        return self.get("log_dir") or None
