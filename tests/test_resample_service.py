import unittest
from unittest.mock import MagicMock

from PIL import Image

from icon_converter.models.errors import CompositionFailed
from icon_converter.services.resample_service import ResampleService


def solid_resampler(image, size):
    """Test double: returns an opaque white raster of the requested size."""
    return Image.new("RGBA", size, (255, 255, 255, 255))


def transparent_rows(image):
    alpha = image.getchannel("A")
    width, height = image.size
    return [y for y in range(height) if all(alpha.getpixel((x, y)) == 0 for x in range(width))]


def transparent_columns(image):
    alpha = image.getchannel("A")
    width, height = image.size
    return [x for x in range(width) if all(alpha.getpixel((x, y)) == 0 for y in range(height))]


class TestFitDimensions(unittest.TestCase):

    def test_longer_side_matches_edge(self):
        self.assertEqual(ResampleService.fit_dimensions(200, 100, 32), (32, 16))
        self.assertEqual(ResampleService.fit_dimensions(100, 200, 32), (16, 32))
        self.assertEqual(ResampleService.fit_dimensions(512, 512, 16), (16, 16))

    def test_short_side_never_collapses_to_zero(self):
        self.assertEqual(ResampleService.fit_dimensions(1000, 1, 16), (16, 1))

    def test_invalid_source_dimensions(self):
        with self.assertRaises(CompositionFailed):
            ResampleService.fit_dimensions(0, 10, 16)


class TestComposeSquare(unittest.TestCase):

    def test_wide_source_is_centered_vertically(self):
        source = Image.new("RGBA", (200, 100), (255, 165, 0, 255))
        result = ResampleService().compose_square(source, 32)

        self.assertEqual(result.size, (32, 32))
        self.assertEqual(result.mode, "RGBA")
        rows = transparent_rows(result)
        self.assertEqual(rows, list(range(0, 8)) + list(range(24, 32)))
        self.assertEqual(result.getpixel((0, 0)), (0, 0, 0, 0))
        self.assertGreater(result.getpixel((16, 16))[3], 0)

    def test_tall_source_has_equal_left_and_right_padding(self):
        source = Image.new("RGBA", (100, 200), (0, 0, 255, 255))
        result = ResampleService().compose_square(source, 32)

        columns = transparent_columns(result)
        left = [x for x in columns if x < 16]
        right = [x for x in columns if x >= 16]
        self.assertEqual(len(left), 8)
        self.assertLessEqual(abs(len(left) - len(right)), 1)

    def test_odd_remainder_biases_top_left(self):
        service = ResampleService(resampler=solid_resampler)
        # 3x2 at 16 -> 16x11, five spare rows: 2 above, 3 below
        result = service.compose_square(Image.new("RGBA", (3, 2)), 16)

        rows = transparent_rows(result)
        self.assertEqual(rows, [0, 1, 13, 14, 15])

    def test_square_source_needs_no_padding(self):
        source = Image.new("RGBA", (64, 64), (10, 20, 30, 255))
        result = ResampleService().compose_square(source, 16)

        self.assertEqual(result.size, (16, 16))
        self.assertEqual(transparent_rows(result), [])

    def test_source_is_not_mutated(self):
        source = Image.new("RGBA", (40, 20), (1, 2, 3, 255))
        before = source.tobytes()
        ResampleService().compose_square(source, 16)
        self.assertEqual(source.size, (40, 20))
        self.assertEqual(source.tobytes(), before)

    def test_resampler_is_asked_for_fitted_dimensions(self):
        resampler = MagicMock(side_effect=solid_resampler)
        source = Image.new("RGBA", (200, 100))
        ResampleService(resampler=resampler).compose_square(source, 48)
        resampler.assert_called_once_with(source, (48, 24))

    def test_resampler_error_becomes_composition_failed(self):
        resampler = MagicMock(side_effect=RuntimeError("boom"))
        with self.assertRaises(CompositionFailed) as ctx:
            ResampleService(resampler=resampler).compose_square(Image.new("RGBA", (8, 8)), 16)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_wrong_size_from_resampler_is_rejected(self):
        resampler = MagicMock(return_value=Image.new("RGBA", (10, 10)))
        with self.assertRaises(CompositionFailed):
            ResampleService(resampler=resampler).compose_square(Image.new("RGBA", (8, 8)), 16)


if __name__ == '__main__':
    unittest.main()
