"""Композиция квадратного холста нужного размера из исходного растра.

Принципы:
- Само масштабирование делегируется ресэмплеру (по умолчанию Pillow LANCZOS);
  сервис решает только целевые размеры и центрирование.
- DIP: ресэмплер передаётся в конструктор, поэтому в тестах его легко подменить.
"""
from __future__ import annotations

from typing import Callable, Tuple

from PIL import Image

from icon_converter.models.errors import CompositionFailed

# (source, (width, height)) -> new RGBA image of exactly that size
Resampler = Callable[[Image.Image, Tuple[int, int]], Image.Image]

TRANSPARENT = (0, 0, 0, 0)


def lanczos_resample(image: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Высококачественное масштабирование с фильтром Ланцоша."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return rgba.resize(size, Image.Resampling.LANCZOS)


class ResampleService:
    def __init__(self, resampler: Resampler = lanczos_resample) -> None:
        self._resampler = resampler

    @staticmethod
    def fit_dimensions(width: int, height: int, edge: int) -> Tuple[int, int]:
        """Размеры, при которых длинная сторона равна `edge`, а пропорции сохранены."""
        if width <= 0 or height <= 0:
            raise CompositionFailed(f"Некорректный размер исходного растра: {width}x{height}")
        if width >= height:
            return edge, max(1, round(height * edge / width))
        return max(1, round(width * edge / height)), edge

    @staticmethod
    def center_offset(edge: int, scaled_w: int, scaled_h: int) -> Tuple[int, int]:
        # floor division: odd remainder goes to the right/bottom
        return (edge - scaled_w) // 2, (edge - scaled_h) // 2

    def compose_square(self, source: Image.Image, edge: int) -> Image.Image:
        """Строит новый RGBA-растр `edge×edge` с сохранением пропорций источника.

        Если пропорции не 1:1, масштабированный растр центрируется на прозрачном
        холсте. Исходное изображение не изменяется.

        Raises:
            CompositionFailed: если ресэмплер упал или вернул растр не того размера.
        """
        target = self.fit_dimensions(source.width, source.height, edge)
        try:
            scaled = self._resampler(source, target)
        except Exception as exc:
            raise CompositionFailed(f"Не удалось масштабировать изображение до {target[0]}x{target[1]}") from exc

        if scaled is source:
            scaled = source.copy()
        if scaled.size != target:
            raise CompositionFailed(
                f"Ресэмплер вернул {scaled.width}x{scaled.height} вместо {target[0]}x{target[1]}"
            )
        if scaled.mode != "RGBA":
            scaled = scaled.convert("RGBA")

        if scaled.size == (edge, edge):
            return scaled

        canvas = Image.new("RGBA", (edge, edge), TRANSPARENT)
        # paste without a mask copies RGBA values as-is
        canvas.paste(scaled, self.center_offset(edge, scaled.width, scaled.height))
        scaled.close()
        return canvas
