"""
Open Cutout command line.

Composites a cutout over a background and exports it:

    python open_cutout.py compose --cutout cutout.png \
        --background "gradient:sunset" --format jpeg --output result.jpg
"""

from pathlib import Path
from typing import List, Optional
import argparse
import logging
import sys

from OC_Libs.CompositingLib.backgrounds import parse_background_spec
from OC_Libs.CompositingLib.compositor import Compositor
from OC_Libs.CompositingLib.export import (
    ExportConfig,
    default_export_filename,
    save_export,
)
from OC_Libs.constants import DEFAULT_JPEG_QUALITY
from OC_Libs.errors import CutoutError
from OC_Libs.SessionLib.image_import import load_source_image

logger = logging.getLogger("open_cutout")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="open_cutout",
        description="Composite background-removed cutouts onto new backgrounds.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compose = subparsers.add_parser("compose", help="Render a cutout over a background")
    compose.add_argument("--cutout", required=True, type=Path, help="Cutout image (PNG with alpha)")
    compose.add_argument(
        "--background",
        default="transparent",
        help="transparent, color:#rrggbb, gradient:<preset|#a,#b>[@direction] or image:PATH",
    )
    compose.add_argument("--format", default="png", choices=["png", "jpg", "jpeg"])
    compose.add_argument("--quality", type=int, default=DEFAULT_JPEG_QUALITY, help="JPEG quality 1-100")
    compose.add_argument("--output", type=Path, default=None, help="Output file (default: removed-bg.<ext>)")
    compose.add_argument("--overwrite", action="store_true", help="Replace an existing output file")
    return parser


def run_compose(args: argparse.Namespace) -> Path:
    cutout = load_source_image(args.cutout)
    spec = parse_background_spec(args.background)
    config = ExportConfig(
        save_format=args.format,
        quality=args.quality,
        overwrite=args.overwrite,
    )
    output = args.output or Path(default_export_filename(config.save_format))

    rendered = Compositor().render(cutout, spec)
    return save_export(rendered, output, config)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "compose":
            saved = run_compose(args)
            logger.info(f"Saved {saved}")
    except (CutoutError, ValueError) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
