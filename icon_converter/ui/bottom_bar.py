from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from icon_converter.models.icon_size import IconSize

ZOOM_PRESETS = (100, 200, 400, 800)


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_zoom_preset: Optional[Callable[[int], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(2, weight=1)  # status stretches

        # Zoom presets
        self._zoom_label = ctk.CTkLabel(self, text="Масштаб")
        self._zoom_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._preset_buttons = ctk.CTkSegmentedButton(
            self,
            values=[f"{p}%" for p in ZOOM_PRESETS],
            command=self._on_preset_click,
        )
        self._preset_buttons.set("100%")
        self._preset_buttons.grid(row=0, column=1, padx=6, pady=8, sticky="w")

        # Status + cursor
        self._status = ctk.StringVar(value="Откройте изображение")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="w")
        self._status_label.grid(row=0, column=2, padx=12, pady=8, sticky="ew")

        self._cursor = ctk.StringVar(value="")
        self._cursor_label = ctk.CTkLabel(self, textvariable=self._cursor, width=220, anchor="e")
        self._cursor_label.grid(row=0, column=3, padx=(6, 12), pady=8, sticky="e")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        if percent in ZOOM_PRESETS:
            self._preset_buttons.set(f"{percent}%")

    def set_status(self, text: str, error: bool = False) -> None:
        self._status.set(text)
        self._status_label.configure(text_color="#d9534f" if error else ("gray10", "gray90"))

    def set_cursor_info(
        self,
        size: Optional[IconSize],
        x: Optional[int],
        y: Optional[int],
        rgba: Optional[Tuple[int, int, int, int]],
    ) -> None:
        if size is None or x is None or y is None or rgba is None:
            self._cursor.set("")
            return
        r, g, b, a = rgba
        self._cursor.set(f"{int(size)}px ({x}, {y})  RGBA {r},{g},{b},{a}  {_rgba_to_hex(rgba)}")

    # events
    def _on_preset_click(self, value: str) -> None:
        try:
            percent = int(value.rstrip("%"))
        except ValueError:
            return
        if self.on_zoom_preset:
            self.on_zoom_preset(percent)
