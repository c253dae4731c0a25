"""Command line interface for svg2excalidraw."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..core.config import Config
from ..core.constants import LOG_LEVELS, ConfigKeys, ConfigSections
from ..core.converter import SVGToExcalidrawConverter
from ..core.error_handling import Svg2ExcalidrawError
from ..core.logging_config import setup_logging
from ..outputs.scene_writer import scene_to_json

logger = logging.getLogger(__name__)


def get_version() -> str:
    """Get the current version of svg2excalidraw."""
    from .. import __version__

    return __version__


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="svg2excalidraw",
        description="Convert SVG drawings into Excalidraw scenes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage Examples:

  # Write drawing.excalidraw next to the input:
  svg2excalidraw convert drawing.svg

  # Smoother curves, explicit output:
  svg2excalidraw convert drawing.svg -o out/scene.excalidraw --curve-points 30

  # Print the scene instead of writing a file:
  svg2excalidraw convert drawing.svg --stdout
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"svg2excalidraw {get_version()}"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Configuration file (default: search for svg2excalidraw_config.toml)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: from configuration)",
    )
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser(
        "convert", help="Convert an SVG file to an Excalidraw scene"
    )
    convert_parser.add_argument("input", help="SVG file to convert")
    convert_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file (default: input with the configured extension)",
    )
    convert_parser.add_argument(
        "--curve-points",
        type=int,
        help="Points sampled per curve segment, clamped to 1..100",
    )
    convert_parser.add_argument(
        "--seed", type=int, help="Seed for element ids and roughness seeds"
    )
    convert_parser.add_argument(
        "--indent", type=int, help="JSON indentation (default: from configuration)"
    )
    convert_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the scene to stdout instead of writing a file",
    )

    return parser


def cmd_convert(args, config: Config) -> bool:
    """Convert one SVG file."""
    if args.curve_points is not None and args.curve_points <= 0:
        print("Error: --curve-points must be positive", file=sys.stderr)
        return False
    if args.indent is not None and args.indent < 0:
        print("Error: --indent must not be negative", file=sys.stderr)
        return False

    converter = SVGToExcalidrawConverter(
        config, curve_points=args.curve_points, seed=args.seed
    )

    if args.stdout:
        scene = converter.convert_file(args.input)
        indent = (
            args.indent
            if args.indent is not None
            else config.get(ConfigSections.OUTPUT, ConfigKeys.INDENT)
        )
        print(scene_to_json(scene, indent))
        return True

    output_path = (
        Path(args.output) if args.output else converter.default_output_path(args.input)
    )
    scene = converter.convert(args.input, output_path, indent=args.indent)
    print(f"Converted {args.input} -> {output_path} ({scene.element_count} elements)")
    return True


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(2)

    try:
        config = Config(args.config)
        config.validate()
    except Svg2ExcalidrawError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(
        level=args.log_level or config.get(ConfigSections.LOGGING, ConfigKeys.LEVEL),
        log_file=args.log_file or config.logging.get(ConfigKeys.FILE) or None,
    )

    command_handlers = {
        "convert": cmd_convert,
    }

    handler = command_handlers[args.command]
    try:
        success = handler(args, config)
    except Svg2ExcalidrawError as e:
        logger.debug(f"Conversion failed: {e.details}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(1)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
