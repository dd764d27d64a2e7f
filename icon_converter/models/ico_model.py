"""Модели ICO-контейнера: закодированный вариант и запись каталога.

Константы формата собраны здесь, чтобы «магические числа» не расползались по сервисам.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum

from icon_converter.models.icon_size import IconSize

# ICONDIR: reserved, type, count
ICO_HEADER_FORMAT = "<HHH"
ICO_HEADER_SIZE = struct.calcsize(ICO_HEADER_FORMAT)  # 6
ICO_RESERVED = 0
ICO_TYPE_ICON = 1

# ICONDIRENTRY: width, height, colors, reserved, planes, bpp, length, offset
ICO_ENTRY_FORMAT = "<BBBBHHII"
ICO_ENTRY_SIZE = struct.calcsize(ICO_ENTRY_FORMAT)  # 16

COLOR_PLANES = 1
BITS_PER_PIXEL = 32
COLOR_COUNT_TRUECOLOR = 0

# one-byte width/height field: 0 stands for 256
DIMENSION_ALIAS_ZERO = 256


def directory_dimension(edge: int) -> int:
    """Значение байта ширины/высоты в записи каталога (256 кодируется нулём)."""
    return 0 if edge == DIMENSION_ALIAS_ZERO else edge


def dimension_from_directory(value: int) -> int:
    return DIMENSION_ALIAS_ZERO if value == 0 else value


def first_payload_offset(count: int) -> int:
    return ICO_HEADER_SIZE + ICO_ENTRY_SIZE * count


class VariantFormat(Enum):
    BMP = "bmp"  # uncompressed DIB
    PNG = "png"


@dataclass(frozen=True)
class Variant:
    """Один закодированный размер иконки.

    Fields:
        size: Длина стороны.
        fmt: Подформат полезной нагрузки.
        data: Байты полезной нагрузки (DIB без BITMAPFILEHEADER или PNG-поток).
    """
    size: IconSize
    fmt: VariantFormat
    data: bytes


@dataclass(frozen=True)
class IcoDirectoryEntry:
    """Разобранная 16-байтовая запись каталога."""
    width: int
    height: int
    color_count: int
    reserved: int
    planes: int
    bits_per_pixel: int
    length: int
    offset: int

    @property
    def edge(self) -> int:
        """Реальная длина стороны с учётом алиаса 0 → 256."""
        return dimension_from_directory(self.width)

    @property
    def end(self) -> int:
        return self.offset + self.length
