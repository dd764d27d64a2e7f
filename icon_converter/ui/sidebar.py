"""Боковая панель: открытие файла, информация об источнике, выбор размеров и сохранение ICO.

Принципы:
- SRP: управляет только UI параметров, не содержит логики кодирования.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Tuple

import customtkinter as ctk

from icon_converter.models.icon_size import DEFAULT_SIZES, IconSize
from icon_converter.models.image_model import ImageData


def format_size(size_bytes: Optional[int]) -> str:
    """Человекочитаемый размер файла."""
    if size_bytes is None:
        return "—"
    thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
    for label, limit in thresholds:
        if size_bytes < limit:
            if label == "Б":
                return f"{size_bytes} {label}"
            value = size_bytes / (limit // 1024)
            return f"{value:.1f} {label}"
    value = size_bytes / (1024**4)
    return f"{value:.1f} ГБ"


def format_dimensions(image_data: ImageData) -> str:
    text = f"{image_data.width} × {image_data.height} px"
    if not image_data.is_square:
        text += " (дополняется до квадрата)"
    return text


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, размеры, сохранение."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_sizes_change: Optional[Callable[[Tuple[IconSize, ...]], None]] = None
        self.on_save_ico: Optional[Callable[[], None]] = None

        # File
        self._title = ctk.CTkLabel(self, text="Файл", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._format_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_format = ctk.CTkLabel(self, textvariable=self._format_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_format.grid(row=6, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Sizes
        self._sizes_title = ctk.CTkLabel(self, text="Размеры иконки", font=ctk.CTkFont(size=16, weight="bold"))
        self._sizes_title.grid(row=7, column=0, padx=8, pady=(8, 4), sticky="w")

        self._size_vars: Dict[IconSize, ctk.BooleanVar] = {}
        for offset, size in enumerate(IconSize):
            var = ctk.BooleanVar(value=size in DEFAULT_SIZES)
            suffix = " (PNG)" if size.uses_png else " (BMP)"
            checkbox = ctk.CTkCheckBox(
                self,
                text=f"{int(size)} × {int(size)}{suffix}",
                variable=var,
                command=self._emit_sizes_change,
            )
            checkbox.grid(row=8 + offset, column=0, padx=8, pady=2, sticky="w")
            self._size_vars[size] = var

        # filler
        self.grid_rowconfigure(99, weight=1)

        self._save_btn = ctk.CTkButton(self, text="Сохранить ICO…", command=self._emit_save_ico, state="disabled")
        self._save_btn.grid(row=100, column=0, padx=8, pady=(8, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image_data: ImageData) -> None:
        """Отображает метаданные загруженного изображения."""
        self._path_val.set(str(image_data.path))
        self._size_val.set(format_size(image_data.size_bytes))
        self._dims_val.set(format_dimensions(image_data))
        self._format_val.set(image_data.source_format.value.upper())

    def set_selected_sizes(self, sizes: Iterable[IconSize]) -> None:
        selected = set(sizes)
        for size, var in self._size_vars.items():
            var.set(size in selected)

    def get_selected_sizes(self) -> Tuple[IconSize, ...]:
        """Отмеченные размеры по возрастанию (может быть пусто)."""
        return tuple(size for size in sorted(self._size_vars) if self._size_vars[size].get())

    def set_save_enabled(self, enabled: bool) -> None:
        self._save_btn.configure(state="normal" if enabled else "disabled")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_sizes_change(self) -> None:
        if self.on_sizes_change:
            self.on_sizes_change(self.get_selected_sizes())

    def _emit_save_ico(self) -> None:
        if self.on_save_ico:
            self.on_save_ico()
