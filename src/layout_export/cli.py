from __future__ import annotations

import argparse
import logging
import sys

from contracts.errors import LayoutExportError
from layout_source import SourceConfig
from layout_source.engines.tesseract_hocr import tesseract_version

from . import __version__
from .config import (
    RegionGrouping,
    TraversalConfig,
    parse_max_level,
    parse_output_format,
    parse_region_grouping,
    parse_writing_direction,
)
from .module import run_layout_export

PROG = "tesseract-layout"

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Usage errors are configuration errors: exit status 1.
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


class _VersionAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        tesseract = tesseract_version()
        linked = f"linked with {tesseract}" if tesseract else "tesseract not found on PATH"
        parser.exit(0, f"{parser.prog} {__version__}\n{linked}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog=PROG,
        description="Document layout analysis using tesseract.",
    )
    # Kept as typed: it is written verbatim as the PAGE imageFilename.
    p.add_argument("image", help="Page image (or PDF) to analyse.")
    p.add_argument(
        "-L",
        "--level",
        default="3",
        help="Layout level: 1=blocks, 2=paragraphs, 3=lines, 4=words, 5=characters (default: 3).",
    )
    p.add_argument(
        "-F",
        "--format",
        default="xmlpage",
        help="Output format, either 'ascii' or 'xmlpage' (default: xmlpage).",
    )
    p.add_argument(
        "-B",
        "--blocks",
        dest="region_grouping",
        action="store_const",
        const=RegionGrouping.BLOCK.value,
        default=RegionGrouping.BLOCK.value,
        help="Use blocks for the TextRegions (default).",
    )
    p.add_argument(
        "-P",
        "--paragraphs",
        dest="region_grouping",
        action="store_const",
        const=RegionGrouping.PARAGRAPH.value,
        help="Use paragraphs for the TextRegions.",
    )
    for flag, direction, label in (
        ("--ltr", "ltr", "left-to-right"),
        ("--rtl", "rtl", "right-to-left"),
        ("--ttb", "ttb", "top-to-bottom"),
    ):
        p.add_argument(
            flag,
            dest="writing_direction",
            action="store_const",
            const=direction,
            default=None,
            help=f"Force {label} reading direction on every region.",
        )
    p.add_argument(
        "-S",
        "--psm",
        type=int,
        default=None,
        help="Tesseract page segmentation mode, forwarded as --psm (optional).",
    )
    p.add_argument(
        "-l",
        "--language",
        default="eng",
        help="Tesseract language (default: eng).",
    )
    p.add_argument(
        "--pdf-page",
        type=int,
        default=1,
        help="Page to analyse when IMAGE is a PDF (1-indexed, default: 1).",
    )
    p.add_argument(
        "--dpi",
        type=int,
        default=300,
        help="Render DPI when IMAGE is a PDF (default: 300).",
    )
    p.add_argument(
        "--timeout-s",
        type=float,
        default=120.0,
        help="Tesseract timeout in seconds.",
    )
    p.add_argument("--verbose", action="store_true", help="Log progress to stderr.")
    p.add_argument("-v", "--version", action=_VersionAction, help="Print version and exit.")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = TraversalConfig(
            max_level=parse_max_level(args.level),
            output_format=parse_output_format(args.format),
            region_grouping=parse_region_grouping(args.region_grouping),
            writing_direction_override=parse_writing_direction(args.writing_direction),
            segmentation_mode=args.psm,
        )
        source_config = SourceConfig(
            segmentation_mode=config.segmentation_mode,
            language=args.language,
            timeout_s=args.timeout_s,
            pdf_page=args.pdf_page,
            dpi=args.dpi,
        )
        run_layout_export(
            config=config,
            image_path=args.image,
            out=sys.stdout,
            source_config=source_config,
        )
    except LayoutExportError as e:
        logger.debug("run aborted", exc_info=True)
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
