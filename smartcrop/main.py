"""smartcrop - command-line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .core.config import DEFAULT_ASPECT_RATIO, DEFAULT_OUTPUT_WIDTH
from .core.exceptions import SmartCropError
from .core.models import CropMethod
from .utils.logging import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="smartcrop - Crop images to an aspect ratio around their focal point"
    )
    parser.add_argument(
        'input',
        type=Path,
        help='Image file to crop'
    )
    parser.add_argument(
        '--ratio',
        default=DEFAULT_ASPECT_RATIO,
        help="Target aspect ratio: '16:9', '1.5' or a preset name (default: %(default)s)"
    )
    parser.add_argument(
        '--width',
        type=int,
        default=DEFAULT_OUTPUT_WIDTH,
        help='Output width in pixels (default: %(default)s)'
    )
    parser.add_argument(
        '--method',
        choices=[m.value for m in CropMethod],
        default=CropMethod.AUTO.value,
        help='Focal point method (default: %(default)s)'
    )
    parser.add_argument(
        '--center',
        action='store_true',
        help='Plain center crop, no focal point detection'
    )
    parser.add_argument(
        '--compare',
        action='store_true',
        help='Write one crop per focal point method'
    )
    parser.add_argument(
        '--output',
        type=Path,
        help='Output file (default: <input>_crop.jpg next to the input)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--no-log-file',
        action='store_true',
        help='Only log to the console'
    )
    return parser


def main(argv: list[str] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.debug else logging.INFO
    logger = setup_logging(level=log_level, log_file=not args.no_log_file)

    try:
        run(args.input, args.output, args.ratio, args.width, args.method,
            center=args.center, compare=args.compare)
    except SmartCropError as e:
        logger.error(str(e))
        return 1

    return 0


def run(
    input_path: Path,
    output: Path = None,
    ratio: str = DEFAULT_ASPECT_RATIO,
    width: int = DEFAULT_OUTPUT_WIDTH,
    method: str = CropMethod.AUTO.value,
    center: bool = False,
    compare: bool = False,
) -> list[Path]:
    """Crop one image file and save the result(s).

    Args:
        input_path: Source image
        output: Output file; comparison crops get the method name appended
        ratio: Target aspect ratio
        width: Output width
        method: Focal point method
        center: Skip focal point detection
        compare: Save one crop per method instead of a single crop

    Returns:
        Paths of the saved images
    """
    from .crops import center_crop, compare_methods, smart_crop
    from .export import export_image, load_image

    logger = logging.getLogger('smartcrop')

    if output is None:
        output = input_path.with_name(f"{input_path.stem}_crop.jpg")

    image = load_image(input_path)
    logger.info(f"Cropping {input_path.name} ({image.width}x{image.height}) to {ratio}")

    if center:
        cropped = center_crop(image, ratio, width)
        return [export_image(cropped, output)]

    if compare:
        saved = []
        for name, result in compare_methods(image, ratio, width).items():
            path = output.with_name(f"{output.stem}_{name}{output.suffix}")
            saved.append(export_image(result.image, path))
            logger.info(f"  {name}: focal point {result.focal_point}")
        return saved

    result = smart_crop(image, ratio, width, method)
    if result.focal_point is None:
        logger.info("No focal point found, used center crop")
    else:
        logger.info(
            f"Focal point ({result.focal_point.x:.0f}, {result.focal_point.y:.0f}) "
            f"via {result.method.value}"
        )

    path = export_image(result.image, output)
    logger.info(f"Saved {path}")
    return [path]


if __name__ == '__main__':
    sys.exit(main())
