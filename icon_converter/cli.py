"""Convert PNG, JPEG or BMP images to multi-resolution Windows .ico files.

Examples:
  icon-converter logo.png
  icon-converter -i logo.png -o app.ico
  icon-converter logo.png -s 16,32,48 -y
  icon-converter --info app.ico
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from icon_converter.config import Config
from icon_converter.logger import setup_logging
from icon_converter.models.conversion import ConvertOptions, ExitCode
from icon_converter.models.errors import IconConverterError, InvalidSizeSet
from icon_converter.models.ico_model import VariantFormat
from icon_converter.models.icon_size import parse_sizes, supported_sizes_text
from icon_converter.services.convert_service import ConvertService
from icon_converter.services.ico_service import PNG_MAGIC, IcoService
from icon_converter.services.image_service import ImageService

VERSION = "1.0.0"
PROG = "image-to-icon-converter"

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with 2 on usage errors; here 2 means "input not found"."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(ExitCode.INVALID_ARGUMENTS, f"Error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", type=Path, help="Input image file path (PNG, JPEG, or BMP).")
    parser.add_argument("-i", "--input", dest="input_option", type=Path, help="Input image file path.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output ICO file path (default: input path with .ico extension).",
    )
    parser.add_argument(
        "-s",
        "--sizes",
        help=f"Comma-separated icon sizes (default: 16,32,48,256). Valid sizes: {supported_sizes_text()}",
    )
    parser.add_argument(
        "-y",
        "--overwrite",
        action="store_true",
        help="Overwrite the output file if it exists.",
    )
    parser.add_argument("--info", action="store_true", help="Print the directory of an existing .ico file and exit.")
    parser.add_argument("--verbose", action="store_true", help="Show debug output.")
    parser.add_argument("-v", "--version", action="version", version=f"{PROG} {VERSION}")
    return parser


def print_ico_info(path: Path) -> int:
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return ExitCode.INPUT_FILE_NOT_FOUND
    data = path.read_bytes()
    try:
        entries = IcoService.read_directory(data)
    except IconConverterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return ExitCode.UNSUPPORTED_FORMAT

    print(f"{path}: {len(entries)} image(s), {len(data)} bytes")
    for index, entry in enumerate(entries):
        payload = data[entry.offset : entry.offset + len(PNG_MAGIC)]
        fmt = VariantFormat.PNG if payload == PNG_MAGIC else VariantFormat.BMP
        print(
            f"  #{index}: {entry.edge}x{entry.edge} {entry.bits_per_pixel}bpp "
            f"{fmt.value} length={entry.length} offset={entry.offset}"
        )
    return ExitCode.SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    args_list: List[str] = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    if not args_list:
        parser.print_help()
        return ExitCode.INVALID_ARGUMENTS

    try:
        args = parser.parse_args(args_list)
    except SystemExit as exc:
        # -h/--version exit with 0, usage errors with INVALID_ARGUMENTS
        return int(exc.code or 0)

    if args.input is not None and args.input_option is not None:
        parser.print_usage(sys.stderr)
        print("Error: give the input either positionally or with --input, not both.", file=sys.stderr)
        return ExitCode.INVALID_ARGUMENTS
    input_path: Optional[Path] = args.input_option or args.input
    if input_path is None or not str(input_path).strip():
        print("Error: --input is required. Use --help for usage information.", file=sys.stderr)
        return ExitCode.INVALID_ARGUMENTS

    try:
        config = Config()
    except (ValueError, OSError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return ExitCode.INVALID_ARGUMENTS
    setup_logging(verbose=args.verbose, log_dir=config.get_log_dir())

    if args.info:
        return print_ico_info(input_path)

    sizes = None
    if args.sizes is not None:
        try:
            sizes = parse_sizes(args.sizes)
        except InvalidSizeSet:
            print(
                f"Error: Invalid sizes '{args.sizes}'. Valid sizes are: {supported_sizes_text()}",
                file=sys.stderr,
            )
            return ExitCode.INVALID_ARGUMENTS

    try:
        default_sizes = config.get_default_sizes()
        max_dimension = config.get_max_image_dimension()
    except (InvalidSizeSet, ValueError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return ExitCode.INVALID_ARGUMENTS

    options = ConvertOptions(
        input_path=input_path,
        output_path=args.output,
        sizes=sizes,
        overwrite=args.overwrite,
    )
    logger.debug("Converting %s with options %s", input_path, options)
    service = ConvertService(
        image_service=ImageService(max_image_dimension=max_dimension),
        default_sizes=default_sizes,
    )
    result = service.execute(options)

    if result.success:
        print(f"Successfully created: {result.output_path}")
    else:
        print(f"Error: {result.error_message}", file=sys.stderr)
    return int(result.exit_code)


if __name__ == "__main__":
    raise SystemExit(main())
