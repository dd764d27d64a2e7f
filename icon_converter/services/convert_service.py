"""Конвейер конвертации файла: проверка → загрузка → генерация ICO → запись.

Единственное место, где типизированные исключения превращаются в `ConversionResult`
с кодом выхода. Сервисы загрузки и генерации передаются снаружи (DIP).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from icon_converter.models.conversion import ConversionResult, ConvertOptions, ExitCode
from icon_converter.models.errors import (
    CompositionFailed,
    DecodeFailed,
    EmptyVariantSet,
    ImageTooLarge,
    InvalidSizeSet,
    UnsupportedInputFormat,
    UnsupportedVariantPolicy,
    VariantEncodingFailed,
    WriteFailed,
)
from icon_converter.models.icon_size import DEFAULT_SIZES, IconSize
from icon_converter.services.ico_service import IcoService
from icon_converter.services.image_service import ImageService

logger = logging.getLogger(__name__)


class ConvertService:
    def __init__(
        self,
        image_service: Optional[ImageService] = None,
        ico_service: Optional[IcoService] = None,
        default_sizes: Sequence[IconSize] = DEFAULT_SIZES,
    ) -> None:
        self._image_service = image_service or ImageService()
        self._ico_service = ico_service or IcoService()
        self._default_sizes = tuple(default_sizes)

    def execute(self, options: ConvertOptions) -> ConversionResult:
        """Выполняет конвертацию и возвращает результат вместо исключения."""
        input_path = Path(options.input_path)
        if not input_path.is_file():
            return self._fail(f"Входной файл не найден: {input_path}", ExitCode.INPUT_FILE_NOT_FOUND)

        try:
            self._image_service.validate_file(input_path)
        except UnsupportedInputFormat as exc:
            return self._fail(str(exc), ExitCode.UNSUPPORTED_FORMAT)
        except FileNotFoundError as exc:
            return self._fail(str(exc), ExitCode.INPUT_FILE_NOT_FOUND)

        output_path = options.effective_output_path()
        if output_path.exists() and not options.overwrite:
            return self._fail(
                f"Файл уже существует: {output_path}. Используйте --overwrite (-y), чтобы заменить его.",
                ExitCode.OUTPUT_WRITE_FAILED,
            )

        sizes = options.effective_sizes(self._default_sizes)
        try:
            image_data = self._image_service.load_image(input_path)
            try:
                data = self._ico_service.generate_ico(image_data.pil_image, sizes, output_path)
            finally:
                image_data.pil_image.close()
        except (UnsupportedInputFormat, DecodeFailed) as exc:
            return self._fail(str(exc), ExitCode.UNSUPPORTED_FORMAT)
        except (
            InvalidSizeSet,
            ImageTooLarge,
            CompositionFailed,
            UnsupportedVariantPolicy,
            VariantEncodingFailed,
            EmptyVariantSet,
        ) as exc:
            return self._fail(str(exc), ExitCode.INVALID_ARGUMENTS)
        except WriteFailed as exc:
            return self._fail(str(exc), ExitCode.OUTPUT_WRITE_FAILED)
        except Exception as exc:
            logger.exception("Unexpected error while converting %s", input_path)
            return self._fail(f"Unexpected error: {exc}", ExitCode.OUTPUT_WRITE_FAILED)

        logger.info(
            "Created %s (%d bytes, sizes: %s)",
            output_path,
            len(data),
            ", ".join(str(int(s)) for s in sorted(set(sizes))),
        )
        return ConversionResult.succeeded(output_path)

    @staticmethod
    def _fail(message: str, exit_code: ExitCode) -> ConversionResult:
        logger.info("Conversion failed (%s): %s", exit_code.name, message)
        return ConversionResult.failed(message, exit_code)
