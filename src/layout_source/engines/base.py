from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from contracts.layout import Baseline, BoundingBox, Level, OrientationInfo, ParagraphStyle

if TYPE_CHECKING:
    from ..contracts import SourceConfig


class LayoutSource(ABC):
    """
    Cursor interface over an analysed page layout.

    IMPORTANT:
    - Exactly one cursor per level is live at a time.
    - `advance(level)` invalidates every descendant cursor; they restart at the
      first child of the new current node.
    - Sources report geometry/metadata only; they never recognize text.
    """

    @abstractmethod
    def image_size(self) -> tuple[int, int]:
        """Return (width, height) of the analysed page image in pixels."""
        raise NotImplementedError

    @abstractmethod
    def is_empty(self, level: Level) -> bool:
        raise NotImplementedError

    @abstractmethod
    def bounding_box(self, level: Level) -> BoundingBox:
        raise NotImplementedError

    @abstractmethod
    def baseline(self) -> Baseline:
        raise NotImplementedError

    @abstractmethod
    def paragraph_info(self) -> ParagraphStyle:
        raise NotImplementedError

    @abstractmethod
    def orientation_info(self) -> OrientationInfo:
        raise NotImplementedError

    @abstractmethod
    def x_height(self) -> float | None:
        """x-height of the current line, or None when the source cannot measure it."""
        raise NotImplementedError

    @abstractmethod
    def is_at_final_sibling(self, parent_level: Level, child_level: Level) -> bool:
        raise NotImplementedError

    @abstractmethod
    def advance(self, level: Level) -> bool:
        raise NotImplementedError


class LayoutEngine(ABC):
    """
    Interface for layout analysis backends.

    Engines analyse one page image and return a ready-to-walk `LayoutSource`.
    Construction failures raise `contracts.errors.SourceUnavailable`.
    """

    @abstractmethod
    def analyse_image_file(self, *, config: SourceConfig, image_file: Path) -> LayoutSource:
        raise NotImplementedError
