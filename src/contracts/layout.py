from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum


class Level(IntEnum):
    """
    Page iterator levels, outermost first.

    Values are ordered so that `level <= max_level` bounds a traversal depth.
    """

    BLOCK = 1
    PARAGRAPH = 2
    LINE = 3
    WORD = 4
    GLYPH = 5

    @property
    def parent(self) -> "Level | None":
        return None if self is Level.BLOCK else Level(self.value - 1)

    @property
    def child(self) -> "Level | None":
        return None if self is Level.GLYPH else Level(self.value + 1)

    @property
    def id_prefix(self) -> str:
        return _ID_PREFIX[self]


_ID_PREFIX = {
    Level.BLOCK: "b",
    Level.PARAGRAPH: "p",
    Level.LINE: "l",
    Level.WORD: "w",
    Level.GLYPH: "g",
}


class Justification(str, Enum):
    UNKNOWN = "unknown"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Orientation(str, Enum):
    """Page rotation needed to read the block upright."""

    PAGE_UP = "up"
    PAGE_RIGHT = "right"
    PAGE_DOWN = "down"
    PAGE_LEFT = "left"


class WritingDirection(str, Enum):
    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"
    TOP_TO_BOTTOM = "ttb"


class TextlineOrder(str, Enum):
    LEFT_TO_RIGHT = "ltr"
    RIGHT_TO_LEFT = "rtl"
    TOP_TO_BOTTOM = "ttb"


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """
    Absolute pixel coordinates:
    - (left, top) is the top-left corner
    - (right, bottom) is the bottom-right corner
    """

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        if self.left > self.right or self.top > self.bottom:
            raise ValueError(
                f"Invalid bounding box: ({self.left},{self.top},{self.right},{self.bottom})"
            )

    @property
    def width(self) -> int:
        return int(self.right - self.left)

    @property
    def height(self) -> int:
        return int(self.bottom - self.top)


@dataclass(frozen=True, slots=True)
class Baseline:
    x1: int
    y1: int
    x2: int
    y2: int


@dataclass(frozen=True, slots=True)
class ParagraphStyle:
    justification: Justification = Justification.UNKNOWN
    is_list: bool = False
    is_crown: bool = False  # first line flush with the margin; indent is then not reported
    indent: int = 0


@dataclass(frozen=True, slots=True)
class OrientationInfo:
    orientation: Orientation = Orientation.PAGE_UP
    writing_direction: WritingDirection = WritingDirection.LEFT_TO_RIGHT
    textline_order: TextlineOrder = TextlineOrder.TOP_TO_BOTTOM
    deskew_angle: float = 0.0

    def with_writing_direction(self, direction: WritingDirection | None) -> "OrientationInfo":
        if direction is None or direction == self.writing_direction:
            return self
        return replace(self, writing_direction=direction)
