"""Загрузка исходных изображений с диска и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за проверку, декодирование и базовое извлечение свойств.
- Формат проверяется по сигнатуре файла, а не по расширению.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from icon_converter.models.errors import DecodeFailed, ImageTooLarge, UnsupportedInputFormat
from icon_converter.models.image_format import SUPPORTED_EXTENSIONS, ImageFormat, detect_file_format
from icon_converter.models.image_model import ImageData

DEFAULT_MAX_IMAGE_DIMENSION = 4096


class ImageService:
    def __init__(self, max_image_dimension: int = DEFAULT_MAX_IMAGE_DIMENSION) -> None:
        self.max_image_dimension = max_image_dimension

    def validate_file(self, file_path: str | Path) -> ImageFormat:
        """Проверяет, что файл существует и имеет поддерживаемый формат.

        Returns:
            Формат, определённый по сигнатуре.

        Raises:
            ValueError: если путь пустой.
            FileNotFoundError: если путь не существует или не указывает на файл.
            UnsupportedInputFormat: если сигнатура не PNG/JPEG/BMP.
        """
        if not str(file_path).strip():
            raise ValueError("Путь к файлу не может быть пустым.")

        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        source_format = detect_file_format(path)
        if source_format is ImageFormat.UNKNOWN:
            raise UnsupportedInputFormat(
                f"Неподдерживаемый формат изображения: {path}. "
                f"Поддерживаются: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        return source_format

    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, форматом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            UnsupportedInputFormat: если формат не поддерживается.
            DecodeFailed: если файл не декодируется.
            ImageTooLarge: если ширина или высота больше `max_image_dimension`.
        """
        source_format = self.validate_file(file_path)
        path = Path(file_path)

        try:
            with Image.open(path) as opened:
                # размеры известны из заголовка, пиксели ещё не декодированы
                self._check_dimensions(*opened.size)
                pil_image = opened.convert("RGBA")
        except Image.DecompressionBombError as exc:
            raise ImageTooLarge(f"Изображение слишком велико для декодирования: {path}") from exc
        except (UnidentifiedImageError, OSError) as exc:
            raise DecodeFailed(f"Не удалось декодировать изображение: {path}") from exc

        width, height = pil_image.size

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            source_format=source_format,
            size_bytes=size_bytes,
        )

    def _check_dimensions(self, width: int, height: int) -> None:
        if width > self.max_image_dimension or height > self.max_image_dimension:
            raise ImageTooLarge(
                f"Размер изображения ({width}x{height}) превышает допустимый "
                f"({self.max_image_dimension}x{self.max_image_dimension})."
            )
