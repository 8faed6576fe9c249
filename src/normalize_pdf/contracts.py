from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ColorMode(str, Enum):
    RGB = "rgb"
    GRAY = "gray"


class NormalizeEngineName(str, Enum):
    """
    Rendering backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


class PdfRenderError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class RenderedPdfPage:
    page_num: int  # 1-indexed
    image_file: Path  # absolute output file path
    width_px: int
    height_px: int


@dataclass(frozen=True, slots=True)
class PdfPageRenderConfig:
    """
    Rasterization parameters for turning one PDF page into a layout input image.
    """

    page_num: int = 1
    dpi: int = 300
    color_mode: ColorMode = ColorMode.GRAY
    engine: NormalizeEngineName = NormalizeEngineName.PYPDFIUM2

    def __post_init__(self) -> None:
        if self.dpi <= 0:
            raise ValueError("dpi must be a positive integer")
        if self.page_num < 1:
            raise ValueError("page_num must be >= 1")
