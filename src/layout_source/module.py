from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from contracts.errors import SourceUnavailable
from normalize_pdf import PdfPageRenderConfig, PdfRenderError, is_pdf_path, render_pdf_page

from .contracts import LayoutEngineName, SourceConfig
from .engines.base import LayoutEngine, LayoutSource
from .engines.tesseract_hocr import TesseractHocrEngine

logger = logging.getLogger(__name__)


def _get_engine(engine: LayoutEngineName) -> LayoutEngine:
    if engine == LayoutEngineName.TESSERACT_HOCR:
        return TesseractHocrEngine()
    raise ValueError(f"Unsupported layout engine: {engine}")


def _analyse_pdf_page(*, config: SourceConfig, engine: LayoutEngine, pdf_file: Path) -> LayoutSource:
    render_config = PdfPageRenderConfig(page_num=config.pdf_page, dpi=config.dpi)
    with tempfile.TemporaryDirectory(prefix="tesseract-layout-") as tmp:
        try:
            page = render_pdf_page(config=render_config, pdf_file=pdf_file, out_dir=Path(tmp))
        except PdfRenderError as e:
            raise SourceUnavailable(
                code="SOURCE_PDF_RENDER_FAILED",
                message=str(e),
                detail={"pdf_file": str(pdf_file), "page_num": config.pdf_page},
            ) from e
        # The returned source is fully materialized; the page image is not needed afterwards.
        return engine.analyse_image_file(config=config, image_file=page.image_file)


def open_layout_source(*, config: SourceConfig, image_path: Path) -> LayoutSource:
    """
    Analyse the layout of `image_path` and return a cursor over the result.

    PDF inputs are rasterized (one page, `config.pdf_page`) before analysis.
    Raises `SourceUnavailable` when the input cannot be analysed.
    """

    engine = _get_engine(config.engine)
    if is_pdf_path(image_path):
        source = _analyse_pdf_page(config=config, engine=engine, pdf_file=image_path)
    else:
        source = engine.analyse_image_file(config=config, image_file=image_path)

    width, height = source.image_size()
    logger.info("layout source ready for %s (%dx%d)", image_path, width, height)
    return source
