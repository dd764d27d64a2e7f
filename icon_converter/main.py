"""Точка входа в оконное приложение."""
import sys

from icon_converter.app import IconConverterApp
from icon_converter.config import Config
from icon_converter.logger import setup_logging


def main() -> None:
    """Создаёт и запускает главное окно; первый аргумент (если есть) открывается сразу."""
    config = Config()
    setup_logging(log_dir=config.get_log_dir())
    app = IconConverterApp(config)
    if len(sys.argv) > 1:
        app.open_image(sys.argv[1])
    app.mainloop()


if __name__ == "__main__":
    main()
