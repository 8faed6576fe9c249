from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from contracts.errors import SourceUnavailable

from ..contracts import SourceConfig
from ..hocr import parse_hocr
from ..tree import TreeLayoutSource
from .base import LayoutEngine

logger = logging.getLogger(__name__)


def build_tesseract_command(*, config: SourceConfig, image_file: Path) -> list[str]:
    cmd = [
        "tesseract",
        str(image_file),
        "stdout",
        "-l",
        config.language,
    ]

    if config.segmentation_mode is not None:
        cmd.extend(["--psm", str(config.segmentation_mode)])

    # Per-character boxes give the glyph level (ocrx_cinfo elements).
    cmd.extend(["-c", "hocr_char_boxes=1", "hocr"])
    return cmd


def tesseract_version(*, timeout_s: float = 10.0) -> str | None:
    """First line of `tesseract --version`, or None if tesseract cannot be run."""

    try:
        proc = subprocess.run(
            ["tesseract", "--version"],
            check=False,
            capture_output=True,
            timeout=timeout_s,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if proc.returncode != 0:
        return None

    # Older releases print the version banner on stderr.
    for stream in (proc.stdout, proc.stderr):
        text = stream.decode("utf-8", errors="replace").strip()
        if text:
            return text.splitlines()[0].strip()
    return None


class TesseractHocrEngine(LayoutEngine):
    """
    Tesseract layout analysis via the `tesseract` CLI, parsed from hOCR output.

    Only geometry and layout metadata are kept from the hOCR document; the
    recognized text is discarded.
    """

    def analyse_image_file(self, *, config: SourceConfig, image_file: Path) -> TreeLayoutSource:
        if not image_file.exists():
            raise SourceUnavailable(
                code="SOURCE_INPUT_NOT_FOUND",
                message=f"Input image file not found: {image_file}",
                detail={"image_file": str(image_file)},
            )

        cmd = build_tesseract_command(config=config, image_file=image_file)
        logger.info("running %s", " ".join(["tesseract", "<IMAGE_FILE>", *cmd[2:]]))

        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                timeout=config.timeout_s,
            )
        except FileNotFoundError as e:
            raise SourceUnavailable(
                code="SOURCE_BACKEND_NOT_INSTALLED",
                message="tesseract binary not found on PATH",
                detail={"expected_command": "tesseract"},
            ) from e
        except subprocess.TimeoutExpired as e:
            raise SourceUnavailable(
                code="SOURCE_TIMEOUT",
                message="tesseract timed out",
                detail={"timeout_s": config.timeout_s},
            ) from e

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace")
            raise SourceUnavailable(
                code="SOURCE_BACKEND_ERROR",
                message="tesseract returned a non-zero exit code",
                detail={
                    "returncode": proc.returncode,
                    "stderr": stderr[-4000:],
                },
            )

        page = parse_hocr(proc.stdout)
        return TreeLayoutSource(page.blocks, image_width=page.width, image_height=page.height)
