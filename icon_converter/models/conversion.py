"""Параметры и результат одной конвертации изображение → ICO."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Optional, Sequence, Tuple

from icon_converter.models.icon_size import DEFAULT_SIZES, IconSize


class ExitCode(IntEnum):
    """Коды выхода CLI."""
    SUCCESS = 0
    INVALID_ARGUMENTS = 1
    INPUT_FILE_NOT_FOUND = 2
    UNSUPPORTED_FORMAT = 3
    OUTPUT_WRITE_FAILED = 4


@dataclass(frozen=True)
class ConvertOptions:
    """Что конвертировать и куда.

    Fields:
        input_path: Исходное изображение (PNG, JPEG или BMP).
        output_path: Путь к .ico; если не задан, рядом с исходником с расширением .ico.
        sizes: Размеры иконок; если не заданы, используются размеры по умолчанию.
        overwrite: Перезаписывать существующий файл назначения.
    """
    input_path: Path
    output_path: Optional[Path] = None
    sizes: Optional[Sequence[IconSize]] = None
    overwrite: bool = False

    def effective_output_path(self) -> Path:
        if self.output_path is not None and str(self.output_path):
            return Path(self.output_path)
        return Path(self.input_path).with_suffix(".ico")

    def effective_sizes(self, defaults: Sequence[IconSize] = DEFAULT_SIZES) -> Tuple[IconSize, ...]:
        if self.sizes:
            return tuple(self.sizes)
        return tuple(defaults)


@dataclass(frozen=True)
class ConversionResult:
    success: bool
    exit_code: ExitCode
    output_path: Optional[Path] = None
    error_message: Optional[str] = None

    @classmethod
    def succeeded(cls, output_path: Path) -> "ConversionResult":
        return cls(success=True, exit_code=ExitCode.SUCCESS, output_path=output_path)

    @classmethod
    def failed(cls, error_message: str, exit_code: ExitCode) -> "ConversionResult":
        return cls(success=False, exit_code=exit_code, error_message=error_message)
