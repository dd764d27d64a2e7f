"""Поддерживаемые размеры иконок и их нормализация.

Принципы:
- Закрытый набор значений {16, 32, 48, 256}: всё остальное отклоняется, а не «подрезается».
- Нормализация детерминирована: без повторов, по возрастанию.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Tuple

from icon_converter.models.errors import InvalidSizeSet


class IconSize(IntEnum):
    """Длина стороны квадратной иконки, px."""
    SIZE_16 = 16
    SIZE_32 = 32
    SIZE_48 = 48
    SIZE_256 = 256

    @property
    def uses_png(self) -> bool:
        """256×256 хранится как PNG, меньшие размеры как DIB."""
        return self is IconSize.SIZE_256

    @classmethod
    def from_value(cls, value: object) -> "IconSize":
        """Преобразует int/IconSize в член перечисления.

        Raises:
            InvalidSizeSet: если значение не целое или не входит в набор.
        """
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSizeSet(f"Размер должен быть целым числом: {value!r}")
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidSizeSet(
                f"Неподдерживаемый размер {value}. Допустимые размеры: {supported_sizes_text()}"
            ) from exc


DEFAULT_SIZES: Tuple[IconSize, ...] = (
    IconSize.SIZE_16,
    IconSize.SIZE_32,
    IconSize.SIZE_48,
    IconSize.SIZE_256,
)


def supported_sizes_text() -> str:
    return ", ".join(str(int(s)) for s in IconSize)


def normalize_sizes(sizes: Iterable[object]) -> Tuple[IconSize, ...]:
    """Проверяет список размеров и возвращает его без повторов, по возрастанию.

    Args:
        sizes: Запрошенные длины сторон (в любом порядке, возможно с повторами).

    Returns:
        Кортеж `IconSize`, отсортированный по возрастанию.

    Raises:
        InvalidSizeSet: если список пуст или содержит неподдерживаемое значение.
    """
    validated = {IconSize.from_value(value) for value in sizes}
    if not validated:
        raise InvalidSizeSet("Нужно указать хотя бы один размер иконки.")
    return tuple(sorted(validated))


def parse_sizes(text: str) -> Tuple[IconSize, ...]:
    """Разбирает строку вида "16,32, 48" в нормализованный набор размеров.

    Пустые элементы (",,") пропускаются, пробелы обрезаются.
    """
    parts: List[int] = []
    for raw in text.split(","):
        part = raw.strip()
        if not part:
            continue
        try:
            parts.append(int(part))
        except ValueError as exc:
            raise InvalidSizeSet(
                f"Некорректный размер '{part}'. Допустимые размеры: {supported_sizes_text()}"
            ) from exc
    return normalize_sizes(parts)
