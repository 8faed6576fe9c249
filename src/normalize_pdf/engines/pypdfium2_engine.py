from __future__ import annotations

from pathlib import Path

from ..contracts import ColorMode, PdfRenderError, RenderedPdfPage
from .base import PdfRenderEngine


class Pypdfium2Engine(PdfRenderEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise PdfRenderError(
                "Missing dependency: pypdfium2 is required to analyse PDF inputs."
            ) from e

    def render_page(
        self,
        *,
        pdf_file: Path,
        out_dir: Path,
        page_num: int,
        dpi: int,
        color_mode: ColorMode,
    ) -> RenderedPdfPage:
        pdfium = self._require_pdfium()
        try:
            doc = pdfium.PdfDocument(str(pdf_file))
        except pdfium.PdfiumError as e:
            raise PdfRenderError(f"Cannot open PDF: {pdf_file}") from e

        try:
            page_count = len(doc)
            if page_num < 1 or page_num > page_count:
                raise PdfRenderError(f"Page out of range: {page_num} (1..{page_count})")

            scale = dpi / 72.0  # PDF points are 1/72 inch
            bitmap = doc[page_num - 1].render(scale=scale)

            pil_img = bitmap.to_pil()
            if color_mode == ColorMode.GRAY:
                pil_img = pil_img.convert("L")
            else:
                pil_img = pil_img.convert("RGB")
        finally:
            doc.close()

        out_dir.mkdir(parents=True, exist_ok=True)
        width_px, height_px = pil_img.size
        out_file = out_dir / f"page_{page_num:03d}.png"
        pil_img.save(out_file, format="PNG")

        return RenderedPdfPage(
            page_num=page_num,
            image_file=out_file,
            width_px=int(width_px),
            height_px=int(height_px),
        )
