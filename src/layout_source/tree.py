from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from contracts.errors import LayoutCursorError
from contracts.layout import Baseline, BoundingBox, Level, OrientationInfo, ParagraphStyle

from .engines.base import LayoutSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LayoutTreeNode:
    """
    One materialized layout node.

    Only the metadata belonging to the node's level is meaningful:
    - BLOCK: `orientation`
    - PARAGRAPH: `paragraph_style`
    - LINE: `baseline`, `x_height`
    """

    level: Level
    box: BoundingBox
    children: tuple["LayoutTreeNode", ...] = ()
    orientation: OrientationInfo | None = None
    paragraph_style: ParagraphStyle | None = None
    baseline: Baseline | None = None
    x_height: float | None = None

    def __post_init__(self) -> None:
        for child in self.children:
            if child.level != self.level.child:
                raise ValueError(
                    f"{self.level.name} node cannot contain a {child.level.name} node"
                )
        # The walker enters the first child of every non-glyph node.
        if self.level.child is not None and not self.children:
            raise ValueError(f"{self.level.name} node must have at least one child")


class TreeLayoutSource(LayoutSource):
    """
    Pull cursor over an in-memory layout tree.

    The cursor state is one sibling index per level; the current node at a level
    is found by descending from the block list along the indexes of the levels
    above it. Advancing a level resets every deeper index to 0.
    """

    def __init__(
        self, blocks: Iterable[LayoutTreeNode], *, image_width: int, image_height: int
    ) -> None:
        self._blocks = tuple(blocks)
        for block in self._blocks:
            if block.level != Level.BLOCK:
                raise ValueError(f"Top-level node must be a BLOCK, got {block.level.name}")
        self._image_size = (int(image_width), int(image_height))
        self._cursor: dict[Level, int] = {level: 0 for level in Level}

    def _siblings(self, level: Level) -> tuple[LayoutTreeNode, ...]:
        nodes = self._blocks
        for ancestor in Level:
            if ancestor == level:
                break
            idx = self._cursor[ancestor]
            if idx >= len(nodes):
                raise LayoutCursorError(
                    f"No current {ancestor.name.lower()}: cursor is exhausted or invalidated"
                )
            nodes = nodes[idx].children
        return nodes

    def _current(self, level: Level) -> LayoutTreeNode:
        siblings = self._siblings(level)
        idx = self._cursor[level]
        if idx >= len(siblings):
            raise LayoutCursorError(
                f"No current {level.name.lower()}: cursor is exhausted or the parent has no children"
            )
        return siblings[idx]

    def image_size(self) -> tuple[int, int]:
        return self._image_size

    def is_empty(self, level: Level) -> bool:
        try:
            self._current(level)
        except LayoutCursorError:
            return True
        return False

    def bounding_box(self, level: Level) -> BoundingBox:
        return self._current(level).box

    def baseline(self) -> Baseline:
        node = self._current(Level.LINE)
        if node.baseline is not None:
            return node.baseline
        # No measured baseline: use the bottom edge of the line box.
        box = node.box
        return Baseline(x1=box.left, y1=box.bottom, x2=box.right, y2=box.bottom)

    def paragraph_info(self) -> ParagraphStyle:
        style = self._current(Level.PARAGRAPH).paragraph_style
        return style if style is not None else ParagraphStyle()

    def orientation_info(self) -> OrientationInfo:
        info = self._current(Level.BLOCK).orientation
        return info if info is not None else OrientationInfo()

    def x_height(self) -> float | None:
        return self._current(Level.LINE).x_height

    def is_at_final_sibling(self, parent_level: Level, child_level: Level) -> bool:
        if child_level <= parent_level:
            raise ValueError(
                f"{child_level.name} is not below {parent_level.name} in the layout hierarchy"
            )
        level = parent_level.child
        while level is not None and level <= child_level:
            if self._cursor[level] < len(self._siblings(level)) - 1:
                return False
            level = level.child
        return True

    def advance(self, level: Level) -> bool:
        siblings = self._siblings(level)
        self._cursor[level] += 1
        deeper = level.child
        while deeper is not None:
            self._cursor[deeper] = 0
            deeper = deeper.child
        has_more = self._cursor[level] < len(siblings)
        if not has_more:
            logger.debug("%s cursor exhausted", level.name.lower())
        return has_more
