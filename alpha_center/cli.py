"""Command-line interface for alpha centering."""

import argparse
import logging
import sys
from pathlib import Path

DEFAULT_OUTPUT_DIR = "./centered"

PADDING_HELP = "Either an amount of pixels or a percentage relative to the output image"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for command-line runs."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add options shared by every image subcommand."""
    parser.add_argument(
        "-t",
        "--tolerance",
        type=int,
        help="Tolerance for detecting transparent pixels. "
        "0-255, 0 being exact and 255 being anything (default: 0)",
    )
    parser.add_argument(
        "--scanner",
        choices=["ring", "naive", "mask"],
        help="Bounding box search: ring (default), naive or mask",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")


def add_crop_arguments(parser: argparse.ArgumentParser) -> None:
    """Add crop arguments to a parser."""
    parser.add_argument("files", nargs="*", metavar="FILE", help="PNG files to process")
    parser.add_argument(
        "-p",
        "--padding",
        help=f"Padding to add to all 4 sides of the image. {PADDING_HELP}. "
        "Also accepts vertical,horizontal (10,5%%) or top,right,bottom,left",
    )
    parser.add_argument("-px", "--padding-x", help=f"Padding for the left and right sides. {PADDING_HELP}")
    parser.add_argument("-py", "--padding-y", help=f"Padding for the top and bottom sides. {PADDING_HELP}")
    parser.add_argument("-pt", "--padding-top", help=f"Padding for the top side. {PADDING_HELP}")
    parser.add_argument("-pr", "--padding-right", help=f"Padding for the right side. {PADDING_HELP}")
    parser.add_argument("-pb", "--padding-bottom", help=f"Padding for the bottom side. {PADDING_HELP}")
    parser.add_argument("-pl", "--padding-left", help=f"Padding for the left side. {PADDING_HELP}")
    parser.add_argument(
        "-o",
        "--output-dir",
        help=f"Output folder (default: '{DEFAULT_OUTPUT_DIR}')",
    )
    parser.add_argument(
        "-s",
        "--stop-at-first-error",
        action="store_true",
        default=None,
        help="Stop at the first error encountered instead of skipping the file",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=None,
        help="Force overwrite of existing files",
    )
    parser.add_argument(
        "--config",
        help="JSON configuration (inline JSON string or path to .json file). "
        "Options given on the command line override it.",
    )
    parser.add_argument(
        "--debug-dir",
        help="Directory to save debug visualization images",
    )
    add_common_arguments(parser)


def parse_config(config_arg: str | None):
    """Parse crop config from CLI argument.

    Args:
        config_arg: Either inline JSON string or path to .json file

    Returns:
        CropConfig object (defaults if not provided)
    """
    from .models import CropConfig

    if not config_arg:
        return CropConfig()

    # Check if it looks like a file path
    config_path = Path(config_arg)
    if config_path.suffix == ".json" and config_path.exists():
        return CropConfig.from_file(config_path)

    return CropConfig.from_json(config_arg)


def build_config(args: argparse.Namespace):
    """Merge --config with the options given on the command line."""
    from .padding import padding_from_options

    config = parse_config(getattr(args, "config", None))

    if args.tolerance is not None:
        config.tolerance = args.tolerance
    if args.scanner is not None:
        config.scan_method = args.scanner
    if getattr(args, "output_dir", None) is not None:
        config.output_dir = args.output_dir
    if getattr(args, "force", None) is not None:
        config.force = args.force
    if getattr(args, "stop_at_first_error", None) is not None:
        config.stop_at_first_error = args.stop_at_first_error

    if hasattr(args, "padding"):
        config.padding = padding_from_options(
            all_sides=args.padding,
            horizontal=args.padding_x,
            vertical=args.padding_y,
            top=args.padding_top,
            right=args.padding_right,
            bottom=args.padding_bottom,
            left=args.padding_left,
            base=config.padding,
        )

    config.validate()
    return config


def run_crop(args: argparse.Namespace) -> None:
    """Crop every input file to its visible pixels."""
    from .batch import run_batch
    from .exceptions import AlphaCenterError

    if not args.files:
        sys.exit("Empty input. Please specify at least one file to process.")

    try:
        config = build_config(args)

        visualizer = None
        if args.debug_dir:
            from .visualizer import DebugVisualizer

            visualizer = DebugVisualizer(args.debug_dir)

        result = run_batch(args.files, config, visualizer=visualizer)
    except AlphaCenterError as e:
        sys.exit(e.user_message)
    except Exception as e:
        sys.exit(f"Unexpected error: {e}")

    logging.getLogger(__name__).debug(
        "%d processed, %d skipped, %d failed",
        len(result.processed),
        len(result.skipped),
        len(result.failed),
    )


def run_bounds(args: argparse.Namespace) -> None:
    """Print the bounding box of the visible pixels of an image."""
    from .alpha import ArraySource
    from .exceptions import AlphaCenterError
    from .io import read_image
    from .scanner import find_bounding_box

    try:
        config = build_config(args)
        img = read_image(args.input)
    except AlphaCenterError as e:
        sys.exit(e.user_message)

    box = find_bounding_box(ArraySource(img), config.tolerance, config.scan_method)
    if box.is_empty:
        print("empty")
    else:
        print(" ".join(str(v) for v in box.as_tuple()))


def run_bench(args: argparse.Namespace) -> None:
    """Time every bounding box strategy on a random bitmap."""
    from .benchmark import run_benchmark

    report = run_benchmark(
        width=args.width,
        height=args.height,
        density=args.density,
        repeat=args.repeat,
        seed=args.seed,
    )

    print(f"{report.width} x {report.height}, density {report.density}")
    for method, seconds in report.timings.items():
        print(f"  {method:<6} {seconds * 1000:10.2f} ms  {report.boxes[method].as_tuple()}")

    if not report.consistent:
        sys.exit("Strategies disagree on the bounding box")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Center images by cropping out transparent pixels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  alpha-center crop icon.png                    Crop into ./centered/icon.png
  alpha-center crop *.png -p 10% -t 16 -o out   Crop with 10% padding
  alpha-center bounds icon.png                  Print left top right bottom
  alpha-center bench --width 640 --height 480   Time the search strategies
""",
    )
    subparsers = parser.add_subparsers(dest="command")

    crop_parser = subparsers.add_parser(
        "crop",
        help="Crop images to their visible pixels",
    )
    add_crop_arguments(crop_parser)
    crop_parser.set_defaults(func=run_crop)

    bounds_parser = subparsers.add_parser(
        "bounds",
        help="Print the bounding box of the visible pixels",
    )
    bounds_parser.add_argument("input", help="Input PNG file")
    add_common_arguments(bounds_parser)
    bounds_parser.set_defaults(func=run_bounds)

    bench_parser = subparsers.add_parser(
        "bench",
        help="Time the bounding box strategies on a random bitmap",
    )
    bench_parser.add_argument("--width", type=int, default=1920, help="Bitmap width (default: 1920)")
    bench_parser.add_argument("--height", type=int, default=1080, help="Bitmap height (default: 1080)")
    bench_parser.add_argument(
        "--density",
        type=float,
        default=0.5,
        help="Probability of a pixel being opaque (default: 0.5)",
    )
    bench_parser.add_argument("--repeat", type=int, default=3, help="Runs per strategy (default: 3)")
    bench_parser.add_argument("--seed", type=int, help="Random seed")
    bench_parser.set_defaults(func=run_bench)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(getattr(args, "verbose", False), getattr(args, "quiet", False))
    args.func(args)


if __name__ == "__main__":
    main()
