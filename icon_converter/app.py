import customtkinter as ctk

from icon_converter.config import Config
from icon_converter.controllers.app_controller import AppController
from icon_converter.services.convert_service import ConvertService
from icon_converter.services.image_service import ImageService
from icon_converter.ui.bottom_bar import BottomBar
from icon_converter.ui.image_viewer import ImageViewer
from icon_converter.ui.sidebar import Sidebar


class IconConverterApp(ctk.CTk):
    def __init__(self, config: Config) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("Image to Icon Converter")
        self.minsize(900, 600)

        # root layout: left preview, right sidebar
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))

        self._sidebar = Sidebar(self)
        self._sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self)
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        image_service = ImageService(max_image_dimension=config.get_max_image_dimension())
        self._controller = AppController(
            viewer=self._viewer,
            sidebar=self._sidebar,
            bottom=self._bottom,
            window=self,
            image_service=image_service,
            convert_service=ConvertService(image_service=image_service),
            _selected_sizes=config.get_default_sizes(),
        )
        self._controller.bind_events()

    def open_image(self, file_path: str) -> None:
        self._controller.open_image(file_path)
