import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from PIL import Image

try:
    import tkinter  # noqa: F401
except ImportError:  # pragma: no cover - Python built without Tk
    raise unittest.SkipTest("tkinter is not available")

from icon_converter.controllers.app_controller import AppController
from icon_converter.models.icon_size import IconSize
from icon_converter.models.image_format import ImageFormat
from icon_converter.models.image_model import ImageData
from icon_converter.services.ico_service import IcoService
from icon_converter.ui.sidebar import format_dimensions


class TestAppController(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.png = self.tmp / "logo.png"
        Image.new("RGBA", (80, 40), (255, 255, 0, 255)).save(self.png)

        self.viewer = MagicMock()
        self.sidebar = MagicMock()
        self.bottom = MagicMock()
        self.controller = AppController(viewer=self.viewer, sidebar=self.sidebar, bottom=self.bottom, window=MagicMock())
        self.controller.bind_events()

    def tearDown(self):
        self._tmp.cleanup()

    def test_bind_events_wires_callbacks(self):
        self.assertEqual(self.sidebar.on_open_file, self.controller._handle_open_file)
        self.assertEqual(self.sidebar.on_save_ico, self.controller._handle_save_ico)
        self.assertEqual(self.viewer.on_cursor_move, self.bottom.set_cursor_info)
        self.sidebar.set_selected_sizes.assert_called_once_with(tuple(IconSize))

    def test_open_image_builds_preview(self):
        self.assertTrue(self.controller.open_image(self.png))

        self.sidebar.set_image_info.assert_called_once()
        variants = self.viewer.set_variants.call_args[0][0]
        self.assertEqual([size for size, _ in variants], list(IconSize))
        self.assertTrue(all(image.size == (int(size), int(size)) for size, image in variants))
        self.sidebar.set_save_enabled.assert_called_with(True)

    def test_open_missing_image_reports_error(self):
        self.assertFalse(self.controller.open_image(self.tmp / "missing.png"))
        self.assertTrue(self.bottom.set_status.call_args.kwargs.get("error"))
        self.viewer.set_variants.assert_not_called()

    def test_clearing_sizes_disables_save(self):
        self.controller.open_image(self.png)
        self.controller._handle_sizes_change(())

        self.viewer.clear.assert_called()
        self.sidebar.set_save_enabled.assert_called_with(False)

    def test_save_ico_uses_selected_sizes(self):
        self.controller.open_image(self.png)
        self.controller._handle_sizes_change((IconSize.SIZE_48, IconSize.SIZE_16))
        target = self.tmp / "saved.ico"
        target.write_bytes(b"old")

        self.assertTrue(self.controller.save_ico(target))

        entries = IcoService.read_directory(target.read_bytes())
        self.assertEqual([e.edge for e in entries], [16, 48])

    def test_refresh_closes_replaced_preview(self):
        self.controller.open_image(self.png)
        old = [image for _, image in self.viewer.set_variants.call_args[0][0]]

        with patch.object(Image.Image, "close", autospec=True) as mock_close:
            self.controller._handle_sizes_change((IconSize.SIZE_32,))

        closed = [call.args[0] for call in mock_close.call_args_list]
        self.assertTrue(all(any(c is image for c in closed) for image in old))
        new_image = self.viewer.set_variants.call_args[0][0][0][1]
        self.assertFalse(any(c is new_image for c in closed))

    def test_clearing_sizes_closes_preview(self):
        self.controller.open_image(self.png)
        old = [image for _, image in self.viewer.set_variants.call_args[0][0]]

        with patch.object(Image.Image, "close", autospec=True) as mock_close:
            self.controller._handle_sizes_change(())

        closed = [call.args[0] for call in mock_close.call_args_list]
        self.assertTrue(all(any(c is image for c in closed) for image in old))
        self.assertEqual(self.controller._preview, [])

    def test_save_overwrites_after_dialog_confirmation(self):
        self.controller.open_image(self.png)
        target = self.tmp / "logo.ico"
        target.write_bytes(b"old")

        with patch("icon_converter.controllers.app_controller.filedialog") as mock_dialog:
            mock_dialog.asksaveasfilename.return_value = str(target)
            self.controller._handle_save_ico()

        self.assertEqual(target.read_bytes()[:4], b"\x00\x00\x01\x00")

    @patch("icon_converter.controllers.app_controller.filedialog")
    def test_save_dialog_cancel_writes_nothing(self, mock_dialog):
        mock_dialog.asksaveasfilename.return_value = ""
        self.controller.open_image(self.png)

        self.controller._handle_save_ico()

        self.assertEqual(mock_dialog.asksaveasfilename.call_args.kwargs["initialfile"], "logo.ico")
        self.assertFalse((self.tmp / "logo.ico").exists())

    @patch("icon_converter.controllers.app_controller.filedialog")
    def test_open_dialog(self, mock_dialog):
        mock_dialog.askopenfilename.return_value = str(self.png)
        self.controller._handle_open_file()
        self.sidebar.set_image_info.assert_called_once()


class TestFormatDimensions(unittest.TestCase):

    def make(self, width, height):
        return ImageData(
            path=Path("x.png"),
            pil_image=MagicMock(),
            width=width,
            height=height,
            source_format=ImageFormat.PNG,
            size_bytes=None,
        )

    def test_square_source(self):
        self.assertEqual(format_dimensions(self.make(64, 64)), "64 × 64 px")

    def test_non_square_source_is_flagged(self):
        text = format_dimensions(self.make(80, 40))
        self.assertTrue(text.startswith("80 × 40 px"))
        self.assertIn("квадрат", text)


if __name__ == '__main__':
    unittest.main()
