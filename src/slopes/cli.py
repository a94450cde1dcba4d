"""
Command Line Interface
======================

Usage:
    slopes generate --output drawing.svg
    slopes generate --output drawing.json --format json --samples-per-row 500
    slopes generate --config config.yaml --jitter-seed 3 --output drawing.svg
    slopes serve

Exit Codes:
    0 - Success
    2 - Invalid configuration
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import slopes.config as slopes_config
from slopes.config import Settings, load_config, setup_logging
from slopes.errors import InvalidConfigurationError
from slopes.export import EXPORT_FORMATS, write_drawing
from slopes.generator import SlopesGenerator


logger = logging.getLogger(__name__)


# CLI flags that override the `generation` settings section
_GENERATION_OVERRIDES = (
    "width",
    "height",
    "vertical_margin",
    "horizontal_margin",
    "distance_between_rows",
    "perlin_ratio",
    "samples_per_row",
    "num_rows",
    "noise_seed",
    "jitter_seed",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slopes",
        description="Generate mountain-range line art for pen plotters",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config.yaml (default: search common locations)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser("generate", help="Generate a drawing to a file")
    gen.add_argument("--output", "-o", type=Path, required=True, help="Output file")
    gen.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default=None,
        help="Output format (default: from the output file extension, else svg)",
    )
    gen.add_argument("--width", type=float, help="Page width")
    gen.add_argument("--height", type=float, help="Page height")
    gen.add_argument("--vertical-margin", type=float, help="Top/bottom margin")
    gen.add_argument("--horizontal-margin", type=float, help="Left/right margin")
    gen.add_argument("--distance-between-rows", type=float, help="Row spacing")
    gen.add_argument("--perlin-ratio", type=float, help="Noise vs. jitter mix in [0, 1]")
    gen.add_argument("--samples-per-row", type=int, help="Samples per row")
    gen.add_argument("--num-rows", type=int, help="Number of rows")
    gen.add_argument("--noise-seed", type=int, help="Noise seed")
    gen.add_argument("--jitter-seed", type=int, help="Jitter seed (reproducible runs)")

    subparsers.add_parser("serve", help="Run the HTTP service")

    return parser


def _resolve_format(output: Path, fmt: Optional[str]) -> str:
    if fmt is not None:
        return fmt
    suffix = output.suffix.lstrip(".").lower()
    return suffix if suffix in EXPORT_FORMATS else "svg"


def run_generate(args: argparse.Namespace, settings: Settings) -> int:
    """Handle the `generate` command."""
    overrides = {
        name: getattr(args, name)
        for name in _GENERATION_OVERRIDES
        if getattr(args, name) is not None
    }
    generation = settings.generation.model_copy(update=overrides)

    try:
        config = generation.to_generation_config()
    except InvalidConfigurationError as e:
        logger.error(str(e))
        return 2

    generator = SlopesGenerator.from_seeds(
        config,
        noise_seed=generation.noise_seed,
        jitter_seed=generation.jitter_seed,
        grouping_tolerance=settings.postprocess.grouping_tolerance,
    )
    drawing = generator.run_drawing()

    write_drawing(
        drawing,
        args.output,
        fmt=_resolve_format(args.output, args.format),
        stroke_width=settings.export.stroke_width,
        stroke_color=settings.export.stroke_color,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_config(args.config)
    setup_logging(settings)

    if args.command == "generate":
        return run_generate(args, settings)

    # The service reads the module-level settings.
    slopes_config.settings = settings
    from slopes.main import serve
    serve()
    return 0


if __name__ == "__main__":
    sys.exit(main())
