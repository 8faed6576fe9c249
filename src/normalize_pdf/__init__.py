"""
PDF page normalization (PDF page -> deterministic raster image).

This package is intentionally limited to format normalization:
- It renders one PDF page to an image deterministically.
- It performs NO OCR, text extraction, layout inference, or content filtering.
"""

from .contracts import (
    ColorMode,
    NormalizeEngineName,
    PdfPageRenderConfig,
    PdfRenderError,
    RenderedPdfPage,
)
from .module import is_pdf_path, render_pdf_page

__all__ = [
    "ColorMode",
    "NormalizeEngineName",
    "PdfPageRenderConfig",
    "PdfRenderError",
    "RenderedPdfPage",
    "is_pdf_path",
    "render_pdf_page",
]
