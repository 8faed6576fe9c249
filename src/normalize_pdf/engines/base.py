from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..contracts import ColorMode, RenderedPdfPage


class PdfRenderEngine(ABC):
    """
    PDF page rasterization abstraction.

    Engines must:
    - Render one PDF page to a raster image file
    - Be deterministic for a given input+params
    - Perform NO OCR, text extraction or layout inference
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def render_page(
        self,
        *,
        pdf_file: Path,
        out_dir: Path,
        page_num: int,  # 1-indexed
        dpi: int,
        color_mode: ColorMode,
    ) -> RenderedPdfPage:
        raise NotImplementedError
