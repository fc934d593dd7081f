"""Command-line interface for star counting."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from batch import process_batch
from config import MAX_SENSITIVITY, MIN_SENSITIVITY, load_settings
from processing import analyze_image, write_mask
from progress import ProgressRenderer

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def sensitivity_arg(value: str) -> int:
    """argparse type for a 0-255 sensitivity."""
    try:
        sensitivity = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid sensitivity: {value!r}")
    if not (MIN_SENSITIVITY <= sensitivity <= MAX_SENSITIVITY):
        raise argparse.ArgumentTypeError(
            f"sensitivity must be in range [{MIN_SENSITIVITY}, {MAX_SENSITIVITY}], got {sensitivity}"
        )
    return sensitivity


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Count stars (8-connected bright clusters) in images."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-f",
        "--file",
        type=Path,
        help="Image file to process.",
    )
    source.add_argument(
        "--images-dir",
        type=Path,
        help="Process every supported image in this directory.",
    )
    parser.add_argument(
        "-s",
        "--sensitivity",
        type=sensitivity_arg,
        default=None,
        help="White sensitivity from 0 (black) to 255 (white); pixels strictly brighter are stars. Default: 20.",
    )
    parser.add_argument(
        "--output-name",
        type=Path,
        help="Optional name for the output image when used with --file. Requires an extension.",
    )
    parser.add_argument(
        "-o",
        "--output-image",
        action="store_true",
        help="Write a high-contrast mask image, by default <file_name>-starred.jpg.",
    )
    parser.add_argument(
        "--output-csv",
        type=Path,
        help="With --images-dir, write a per-image CSV summary to this path.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional JSON settings file (sensitivity, output_suffix, output_extension).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )

    args = parser.parse_args(argv)

    if args.output_name is not None and args.file is None:
        parser.error("--output-name can only be used with --file")
    if args.output_csv is not None and args.images_dir is None:
        parser.error("--output-csv can only be used with --images-dir")

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        settings = load_settings(args.config)
    except ValueError as exc:
        print(f"Failed to load settings: {exc}", file=sys.stderr)
        return 1
    sensitivity = args.sensitivity if args.sensitivity is not None else settings["sensitivity"]

    if args.images_dir is not None:
        try:
            summary = process_batch(
                images_dir=args.images_dir,
                sensitivity=sensitivity,
                output_image=args.output_image,
                output_csv=args.output_csv,
                progress_renderer=ProgressRenderer(enable=sys.stdout.isatty()),
                settings=settings,
            )
        except (OSError, ValueError) as exc:
            print(str(exc), file=sys.stderr)
            return 1

        for result in summary["results"]:
            print(f"{result.filename}: found {result.star_count} stars")
        print(f"Found {summary['total_stars']} stars in {summary['processed']} image(s)")
        if summary["failed"]:
            print(f"Failed to process {len(summary['failed'])} image(s): {', '.join(summary['failed'])}", file=sys.stderr)
            return 1
        return 0

    try:
        result, occupancy = analyze_image(args.file, sensitivity)
        print(f"Found {result.star_count} stars")
        if args.output_image:
            print("Processing into output...")
            write_mask(args.file, occupancy, args.output_name, settings)
            print("Done!")
    except (OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
