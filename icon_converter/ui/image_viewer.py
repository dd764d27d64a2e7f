"""Виджет предпросмотра вариантов иконки: все размеры в ряд, масштаб и чтение пикселя под курсором.

Принципы:
- SRP: отвечает только за представление уже скомпонованных растров.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from icon_converter.models.icon_size import IconSize

CHECKER_CELL = 8
GAP = 24
LABEL_H = 20


def checkerboard(width: int, height: int, cell: int = CHECKER_CELL) -> Image.Image:
    """Шахматный фон, чтобы была видна прозрачность."""
    board = Image.new("RGBA", (width, height), (204, 204, 204, 255))
    dark = Image.new("RGBA", (cell, cell), (153, 153, 153, 255))
    for y in range(0, height, cell):
        for x in range((y // cell) % 2 * cell, width, cell * 2):
            board.paste(dark, (x, y))
    return board


class ImageViewer(ctk.CTkFrame):
    """Канва с вариантами иконки, выложенными слева направо по возрастанию размера."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._variants: List[Tuple[IconSize, Image.Image]] = []
        self._tk_images: List[ImageTk.PhotoImage] = []
        # (size, x, y, scaled edge) of each drawn variant, canvas coords
        self._layout: List[Tuple[IconSize, int, int, int]] = []
        self._scale_factor: float = 1.0

        self.on_cursor_move: Optional[Callable[[Optional[IconSize], Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", self._on_mouse_leave)

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

    # ---- Public API ----
    def set_variants(self, variants: Sequence[Tuple[IconSize, Image.Image]]) -> None:
        """Устанавливает скомпонованные растры (размер, изображение) и перерисовывает."""
        self._variants = list(variants)
        self._render()

    def clear(self) -> None:
        self._variants = []
        self._render()

    def set_zoom_percent(self, zoom_percent: int) -> None:
        """Устанавливает масштаб в процентах (25–800%)."""
        self._scale_factor = max(0.25, min(8.0, zoom_percent / 100.0))
        self._render()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    # ---- Internals ----
    def _render(self) -> None:
        self._canvas.delete("all")
        self._tk_images = []
        self._layout = []
        if not self._variants:
            return

        canvas_h = int(self._canvas.winfo_height())
        x = GAP
        for size, image in self._variants:
            edge = max(1, int(round(image.width * self._scale_factor)))
            # nearest keeps single pixels visible when zoomed in
            scaled = image.resize((edge, edge), Image.Resampling.NEAREST)
            composed = checkerboard(edge, edge)
            composed.alpha_composite(scaled)

            y = max(LABEL_H + GAP, (canvas_h - edge) // 2)
            tk_image = ImageTk.PhotoImage(composed)
            self._tk_images.append(tk_image)
            self._canvas.create_image(x, y, image=tk_image, anchor="nw")
            self._canvas.create_text(x, y - 4, text=f"{int(size)}×{int(size)}", anchor="sw", fill=self._get_text_fg())
            self._layout.append((size, x, y, edge))
            x += edge + GAP

    def _hit_test(self, cx: int, cy: int) -> Tuple[Optional[IconSize], Optional[int], Optional[int]]:
        for size, x, y, edge in self._layout:
            if x <= cx < x + edge and y <= cy < y + edge:
                px = int((cx - x) / self._scale_factor)
                py = int((cy - y) / self._scale_factor)
                return size, min(px, int(size) - 1), min(py, int(size) - 1)
        return None, None, None

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self.on_cursor_move is None:
            return
        size, px, py = self._hit_test(event.x, event.y)
        if size is None or px is None or py is None:
            self.on_cursor_move(None, None, None, None)
            return
        image = dict(self._variants)[size]
        self.on_cursor_move(size, px, py, image.getpixel((px, py)))

    def _on_mouse_leave(self, _event: tk.Event) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(None, None, None, None)

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _get_text_fg(self) -> str:
        return "#f2f2f2" if ctk.get_appearance_mode().lower() == "dark" else "#1f1f1f"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if not self._variants or event.delta == 0:
            return
        self._zoom_by(2.0 if event.delta > 0 else 0.5)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        if not self._variants:
            return
        self._zoom_by(2.0 if getattr(event, "num", None) == 4 else 0.5)

    def _zoom_by(self, factor: float) -> None:
        old = self._scale_factor
        self._scale_factor = max(0.25, min(8.0, old * factor))
        if abs(self._scale_factor - old) < 1e-6:
            return
        self._render()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())
