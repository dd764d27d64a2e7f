"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без кодирования ICO).
- DIP: зависит от сервисов как от ролей; их можно подменить при создании.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from PIL import Image

from icon_converter.models.conversion import ConvertOptions
from icon_converter.models.errors import CompositionFailed, IconConverterError
from icon_converter.models.icon_size import DEFAULT_SIZES, IconSize
from icon_converter.models.image_format import SUPPORTED_EXTENSIONS
from icon_converter.models.image_model import ImageData
from icon_converter.services.convert_service import ConvertService
from icon_converter.services.image_service import ImageService
from icon_converter.services.resample_service import ResampleService

if TYPE_CHECKING:
    from icon_converter.ui.bottom_bar import BottomBar
    from icon_converter.ui.image_viewer import ImageViewer
    from icon_converter.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка изображений через `ImageService`.
    - Предпросмотр вариантов через `ResampleService` (та же композиция, что и при записи).
    - Сохранение ICO через `ConvertService`.
    """
    viewer: "ImageViewer"
    sidebar: "Sidebar"
    bottom: "BottomBar"
    window: Any

    image_service: ImageService = field(default_factory=ImageService)
    resample_service: ResampleService = field(default_factory=ResampleService)
    convert_service: ConvertService = field(default_factory=ConvertService)
    _current_image: Optional[ImageData] = None
    _selected_sizes: Tuple[IconSize, ...] = DEFAULT_SIZES
    _preview: List[Tuple[IconSize, Image.Image]] = field(default_factory=list)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_sizes_change = self._handle_sizes_change
        self.sidebar.on_save_ico = self._handle_save_ico
        self.sidebar.set_selected_sizes(self._selected_sizes)

        self.viewer.on_cursor_move = self.bottom.set_cursor_info
        self.viewer.on_zoom_change = self.bottom.set_zoom_percent
        self.bottom.on_zoom_preset = self.viewer.set_zoom_percent

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        patterns = " ".join(f"*{ext}" for ext in SUPPORTED_EXTENSIONS)
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(("Images", patterns), ("All files", "*.*")),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.open_image(file_path)

    def open_image(self, file_path: str | Path) -> bool:
        """Загружает изображение, показывает его свойства и предпросмотр."""
        try:
            image_data = self.image_service.load_image(file_path)
        except (IconConverterError, FileNotFoundError, ValueError) as exc:
            self.bottom.set_status(str(exc), error=True)
            return False

        if self._current_image is not None:
            self._current_image.pil_image.close()
        self._current_image = image_data

        self.sidebar.set_image_info(image_data)
        self._refresh_preview()
        self.bottom.set_status(f"Загружено: {image_data.path.name}")
        return True

    def _handle_sizes_change(self, sizes: Tuple[IconSize, ...]) -> None:
        self._selected_sizes = tuple(sizes)
        self._refresh_preview()

    def _handle_save_ico(self) -> None:
        if self._current_image is None:
            return
        if not self._selected_sizes:
            self.bottom.set_status("Выберите хотя бы один размер иконки.", error=True)
            return

        source_path = self._current_image.path
        try:
            target = filedialog.asksaveasfilename(
                title="Сохранить иконку",
                defaultextension=".ico",
                initialdir=str(source_path.parent),
                initialfile=source_path.with_suffix(".ico").name,
                filetypes=(("Windows icon", "*.ico"),),
            )
        except TclError:
            return

        if not target:
            return
        self.save_ico(Path(target))

    def save_ico(self, output_path: Path) -> bool:
        """Записывает ICO с выбранными размерами; диалог уже подтвердил перезапись."""
        if self._current_image is None:
            return False
        options = ConvertOptions(
            input_path=self._current_image.path,
            output_path=output_path,
            sizes=self._selected_sizes,
            overwrite=True,
        )
        result = self.convert_service.execute(options)
        if result.success:
            self.bottom.set_status(f"Сохранено: {result.output_path}")
        else:
            self.bottom.set_status(result.error_message or "Ошибка записи", error=True)
        return result.success

    # ---- Helpers ----
    def _refresh_preview(self) -> None:
        """Перестраивает предпросмотр для выбранных размеров. Не мутирует исходник."""
        has_sizes = bool(self._selected_sizes)
        self.sidebar.set_save_enabled(self._current_image is not None and has_sizes)
        if self._current_image is None or not has_sizes:
            self.viewer.clear()
            self._release_preview([])
            return

        source = self._current_image.pil_image
        try:
            variants = [
                (size, self.resample_service.compose_square(source, int(size)))
                for size in sorted(set(self._selected_sizes))
            ]
        except CompositionFailed as exc:
            logger.exception("Preview failed")
            self.viewer.clear()
            self._release_preview([])
            self.bottom.set_status(str(exc), error=True)
            return
        self.viewer.set_variants(variants)
        self._release_preview(variants)

    def _release_preview(self, replacement: List[Tuple[IconSize, Image.Image]]) -> None:
        """Закрывает растры предыдущего предпросмотра, когда вьюер их уже не держит."""
        for _, image in self._preview:
            image.close()
        self._preview = list(replacement)
