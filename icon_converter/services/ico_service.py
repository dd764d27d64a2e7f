"""Кодирование вариантов и сборка ICO-контейнера.

Принципы:
- SRP: сервис знает только бинарный формат ICO (DIB, PNG-кадр, каталог),
  масштабирование делегировано `ResampleService`, PNG-кодировщик внешний.
- Чистые функции над буферами в памяти: запись на диск выполняется один раз,
  целым буфером, в `generate_ico`.
"""
from __future__ import annotations

import io
import struct
from contextlib import closing
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np
from PIL import Image

from icon_converter.models.errors import (
    EmptyVariantSet,
    InvalidContainer,
    UnsupportedVariantPolicy,
    VariantEncodingFailed,
    WriteFailed,
)
from icon_converter.models.ico_model import (
    BITS_PER_PIXEL,
    COLOR_COUNT_TRUECOLOR,
    COLOR_PLANES,
    ICO_ENTRY_FORMAT,
    ICO_ENTRY_SIZE,
    ICO_HEADER_FORMAT,
    ICO_HEADER_SIZE,
    ICO_RESERVED,
    ICO_TYPE_ICON,
    IcoDirectoryEntry,
    Variant,
    VariantFormat,
    directory_dimension,
    first_payload_offset,
)
from icon_converter.models.icon_size import IconSize, normalize_sizes
from icon_converter.models.image_format import PNG_SIGNATURE
from icon_converter.services.resample_service import ResampleService

# RGBA image -> self-contained PNG stream
PngEncoder = Callable[[Image.Image], bytes]

# BITMAPINFOHEADER: size, width, height, planes, bpp, compression, image size,
# x/y pixels per meter, colors used, colors important
BITMAPINFOHEADER_FORMAT = "<IiiHHIIiiII"
BITMAPINFOHEADER_SIZE = struct.calcsize(BITMAPINFOHEADER_FORMAT)  # 40
BI_RGB = 0

BYTES_PER_PIXEL = 4
# R, G, B, A -> B, G, R, A
BGRA_ORDER = [2, 1, 0, 3]

# 89 50 4E 47
PNG_MAGIC = PNG_SIGNATURE[:4]


def row_stride(width: int, bytes_per_pixel: int = BYTES_PER_PIXEL) -> int:
    """Длина строки XOR-маски, выровненная до 4 байт."""
    raw = width * bytes_per_pixel
    return (raw + 3) // 4 * 4


def and_mask_stride(width: int) -> int:
    """Длина строки 1-битной AND-маски: ceil(width / 32) * 4 байт."""
    return (width + 31) // 32 * 4


def dib_height(height: int) -> int:
    """В ICO высота DIB удваивается: XOR-маска и AND-маска лежат друг над другом."""
    return height * 2


def encode_png(image: Image.Image) -> bytes:
    """PNG-поток RGBA с максимальным сжатием (Pillow)."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    buffer = io.BytesIO()
    rgba.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


def encode_dib(image: Image.Image) -> bytes:
    """32-битный DIB без BITMAPFILEHEADER, как его ожидает ICO.

    Строки пишутся снизу вверх, пиксели в порядке B, G, R, A; после пикселей идёт
    AND-маска, целиком заполненная нулями (прозрачность задаёт альфа-канал).
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size

    stride = row_stride(width)
    xor_size = stride * height
    and_size = and_mask_stride(width) * height

    header = struct.pack(
        BITMAPINFOHEADER_FORMAT,
        BITMAPINFOHEADER_SIZE,
        width,
        dib_height(height),
        COLOR_PLANES,
        BITS_PER_PIXEL,
        BI_RGB,
        xor_size + and_size,
        0,
        0,
        0,
        0,
    )

    pixels = np.asarray(rgba, dtype=np.uint8).reshape(height, width, 4)
    bgra = pixels[::-1, :, BGRA_ORDER].reshape(height, width * BYTES_PER_PIXEL)
    rows = np.zeros((height, stride), dtype=np.uint8)
    rows[:, : width * BYTES_PER_PIXEL] = bgra

    return header + rows.tobytes() + bytes(and_size)


class IcoService:
    def __init__(
        self,
        resample_service: Optional[ResampleService] = None,
        png_encoder: PngEncoder = encode_png,
    ) -> None:
        self._resample = resample_service or ResampleService()
        self._png_encoder = png_encoder

    # ---- Variant encoder ----
    def encode_variant(self, raster: Image.Image, size: int) -> Variant:
        """Кодирует квадратный растр: 256 → PNG, остальные размеры → DIB.

        Raises:
            UnsupportedVariantPolicy: если размер не из поддерживаемого набора.
            VariantEncodingFailed: если растр не `size×size` или PNG-кодировщик
                вернул поток без PNG-сигнатуры.
        """
        try:
            icon_size = IconSize(size)
        except ValueError as exc:
            raise UnsupportedVariantPolicy(f"Нет политики кодирования для размера {size}") from exc

        if raster.size != (icon_size, icon_size):
            raise VariantEncodingFailed(
                f"Ожидался растр {int(icon_size)}x{int(icon_size)}, получен {raster.width}x{raster.height}"
            )

        if not icon_size.uses_png:
            return Variant(size=icon_size, fmt=VariantFormat.BMP, data=encode_dib(raster))

        try:
            data = self._png_encoder(raster)
        except Exception as exc:
            raise VariantEncodingFailed(f"PNG-кодировщик не смог закодировать {int(icon_size)}px") from exc
        data = bytes(data)
        if not data.startswith(PNG_MAGIC):
            raise VariantEncodingFailed("PNG-кодировщик вернул поток без PNG-сигнатуры")
        return Variant(size=icon_size, fmt=VariantFormat.PNG, data=data)

    # ---- Container writer ----
    def build_container(self, variants: Sequence[Variant]) -> bytes:
        """Собирает заголовок, каталог и полезные нагрузки в один буфер.

        Смещения накапливаются от `6 + 16 * count`, данные лежат без зазоров
        в том же порядке, что и записи каталога.

        Raises:
            EmptyVariantSet: если вариантов нет.
        """
        if not variants:
            raise EmptyVariantSet("Нужен хотя бы один вариант иконки.")

        count = len(variants)
        parts: List[bytes] = [struct.pack(ICO_HEADER_FORMAT, ICO_RESERVED, ICO_TYPE_ICON, count)]

        offset = first_payload_offset(count)
        for variant in variants:
            dimension = directory_dimension(int(variant.size))
            parts.append(
                struct.pack(
                    ICO_ENTRY_FORMAT,
                    dimension,
                    dimension,
                    COLOR_COUNT_TRUECOLOR,
                    0,
                    COLOR_PLANES,
                    BITS_PER_PIXEL,
                    len(variant.data),
                    offset,
                )
            )
            offset += len(variant.data)

        parts.extend(variant.data for variant in variants)
        return b"".join(parts)

    # ---- Pipeline ----
    def build_variants(self, source: Image.Image, sizes: Iterable[object]) -> List[Variant]:
        """Нормализует размеры и кодирует по одному варианту на размер (по возрастанию)."""
        variants: List[Variant] = []
        for size in normalize_sizes(sizes):
            # per-size raster is released right after encoding
            with closing(self._resample.compose_square(source, int(size))) as raster:
                variants.append(self.encode_variant(raster, size))
        return variants

    def generate_ico_data(self, source: Image.Image, sizes: Iterable[object]) -> bytes:
        """Полный конвейер: размеры → холсты → варианты → байты контейнера."""
        return self.build_container(self.build_variants(source, sizes))

    def generate_ico(self, source: Image.Image, sizes: Iterable[object], output_path: str | Path) -> bytes:
        """Генерирует контейнер и записывает его в файл одним вызовом.

        Raises:
            WriteFailed: если каталог или файл назначения не удалось записать.
        """
        data = self.generate_ico_data(source, sizes)
        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise WriteFailed(f"Не удалось записать файл {path}: {exc}") from exc
        return data

    # ---- Reader ----
    @staticmethod
    def read_directory(data: bytes) -> List[IcoDirectoryEntry]:
        """Разбирает заголовок и каталог ICO-контейнера.

        Raises:
            InvalidContainer: если буфер короткий, заголовок не ICO или запись
                указывает за пределы буфера.
        """
        if len(data) < ICO_HEADER_SIZE:
            raise InvalidContainer("Буфер короче заголовка ICO.")
        reserved, container_type, count = struct.unpack_from(ICO_HEADER_FORMAT, data, 0)
        if reserved != ICO_RESERVED or container_type != ICO_TYPE_ICON:
            raise InvalidContainer(f"Не ICO-заголовок: reserved={reserved}, type={container_type}")
        if len(data) < first_payload_offset(count):
            raise InvalidContainer(f"Каталог на {count} записей не помещается в буфер.")

        entries: List[IcoDirectoryEntry] = []
        for index in range(count):
            fields = struct.unpack_from(ICO_ENTRY_FORMAT, data, ICO_HEADER_SIZE + ICO_ENTRY_SIZE * index)
            entry = IcoDirectoryEntry(*fields)
            if entry.end > len(data):
                raise InvalidContainer(f"Запись {index} указывает за пределы файла.")
            entries.append(entry)
        return entries
