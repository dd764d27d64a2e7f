"""Определение формата входного файла по сигнатуре (magic bytes)."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Tuple

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8\xff"
BMP_SIGNATURE = b"BM"

SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".bmp")


class ImageFormat(Enum):
    UNKNOWN = "unknown"
    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"


def detect_format(data: bytes) -> ImageFormat:
    """Возвращает формат по первым байтам файла или `ImageFormat.UNKNOWN`."""
    if data.startswith(PNG_SIGNATURE):
        return ImageFormat.PNG
    # APP0/APP1/... marker follows FF D8 FF
    if data.startswith(JPEG_SIGNATURE):
        return ImageFormat.JPEG
    if data.startswith(BMP_SIGNATURE):
        return ImageFormat.BMP
    return ImageFormat.UNKNOWN


def detect_file_format(file_path: str | Path) -> ImageFormat:
    """Читает первые 8 байт файла и определяет формат."""
    with open(file_path, "rb") as fh:
        head = fh.read(len(PNG_SIGNATURE))
    if len(head) < len(BMP_SIGNATURE):
        return ImageFormat.UNKNOWN
    return detect_format(head)
