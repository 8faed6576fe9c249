from __future__ import annotations

import logging
from pathlib import Path

from .contracts import NormalizeEngineName, PdfPageRenderConfig, PdfRenderError, RenderedPdfPage
from .engines.base import PdfRenderEngine
from .engines.pypdfium2_engine import Pypdfium2Engine

logger = logging.getLogger(__name__)


def _get_engine(engine: NormalizeEngineName) -> PdfRenderEngine:
    if engine == NormalizeEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported PDF render engine: {engine}")


def is_pdf_path(path: Path) -> bool:
    return path.suffix.lower() == ".pdf"


def render_pdf_page(*, config: PdfPageRenderConfig, pdf_file: Path, out_dir: Path) -> RenderedPdfPage:
    """
    Rasterize one page of `pdf_file` into `out_dir` as `page_NNN.png`.

    The caller owns `out_dir` (typically a temporary directory) and its cleanup.
    """

    if not pdf_file.exists():
        raise PdfRenderError(f"PDF file not found: {pdf_file}")

    engine = _get_engine(config.engine)
    page = engine.render_page(
        pdf_file=pdf_file,
        out_dir=out_dir,
        page_num=config.page_num,
        dpi=config.dpi,
        color_mode=config.color_mode,
    )
    logger.info(
        "rendered %s page %d at %d dpi (%dx%d) with %s",
        pdf_file.name,
        page.page_num,
        config.dpi,
        page.width_px,
        page.height_px,
        engine.backend_id(),
    )
    return page
