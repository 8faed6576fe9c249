from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from contracts.errors import ConfigurationError


class LayoutEngineName(str, Enum):
    """
    Layout analysis backends supported by this package.

    Backends report page geometry only; recognized text is never exposed.
    """

    TESSERACT_HOCR = "tesseract_hocr"


@dataclass(frozen=True, slots=True)
class SourceConfig:
    """
    Layout source configuration.

    - `segmentation_mode` is forwarded untouched to the backend (tesseract `--psm`).
    - `pdf_page`/`dpi` apply only when the input is a PDF; the page is rasterized first.
    - This module must NOT read environment variables itself.
    """

    engine: LayoutEngineName = LayoutEngineName.TESSERACT_HOCR
    segmentation_mode: int | None = None  # None => backend default
    language: str = "eng"
    timeout_s: float = 120.0
    pdf_page: int = 1
    dpi: int = 300

    def __post_init__(self) -> None:
        if self.timeout_s <= 0:
            raise ConfigurationError("timeout_s must be > 0")
        if self.pdf_page < 1:
            raise ConfigurationError("pdf_page must be >= 1")
        if self.dpi <= 0:
            raise ConfigurationError("dpi must be a positive integer")
        if not self.language.strip():
            raise ConfigurationError("language must not be empty")
