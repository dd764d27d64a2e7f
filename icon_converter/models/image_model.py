"""Модели данных для исходного изображения.

Принципы:
- SRP: только структура данных, без логики загрузки и кодирования.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

from icon_converter.models.image_format import ImageFormat


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель исходного растра и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Декодированное изображение PIL в режиме RGBA (только чтение).
        width: Ширина, px.
        height: Высота, px.
        source_format: Формат, определённый по сигнатуре файла.
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    source_format: ImageFormat
    size_bytes: Optional[int]

    @property
    def is_square(self) -> bool:
        return self.width == self.height
