"""Типизированные ошибки конвертера.

Принципы:
- Ядро (нормализация размеров, композиция, кодирование, сборка контейнера) только
  выбрасывает эти исключения и ничего не логирует.
- Перевод ошибки в текст и код выхода делает вызывающая сторона (`ConvertService`, CLI).
"""
from __future__ import annotations


class IconConverterError(Exception):
    """Базовый класс всех ошибок конвертера."""


class InvalidSizeSet(IconConverterError):
    """Список размеров пуст или содержит неподдерживаемые значения."""


class CompositionFailed(IconConverterError):
    """Ресэмплер не смог построить масштабированный растр."""


class UnsupportedVariantPolicy(IconConverterError):
    """Кодировщик варианта вызван с неподдерживаемой длиной стороны."""


class VariantEncodingFailed(IconConverterError):
    """Внешний PNG-кодировщик упал или вернул поток без PNG-сигнатуры."""


class EmptyVariantSet(IconConverterError):
    """Сборщик контейнера вызван без вариантов."""


class WriteFailed(IconConverterError):
    """Файл назначения не удалось записать."""


class DecodeFailed(IconConverterError):
    """Исходный файл не декодируется как изображение."""


class UnsupportedInputFormat(IconConverterError):
    """Сигнатура исходного файла не соответствует PNG, JPEG или BMP."""


class ImageTooLarge(IconConverterError):
    """Исходное изображение превышает допустимый размер."""


class InvalidContainer(IconConverterError):
    """Байты не являются корректным ICO-контейнером."""
