from __future__ import annotations

from contracts.layout import (
    Baseline,
    BoundingBox,
    Level,
    OrientationInfo,
    ParagraphStyle,
)
from layout_source.tree import LayoutTreeNode, TreeLayoutSource


def box(left: int, top: int, right: int, bottom: int) -> BoundingBox:
    return BoundingBox(left=left, top=top, right=right, bottom=bottom)


def glyph(b: BoundingBox) -> LayoutTreeNode:
    return LayoutTreeNode(level=Level.GLYPH, box=b)


def word(b: BoundingBox, glyphs: list[LayoutTreeNode] | None = None) -> LayoutTreeNode:
    return LayoutTreeNode(level=Level.WORD, box=b, children=tuple(glyphs or [glyph(b)]))


def line(
    b: BoundingBox,
    words: list[LayoutTreeNode] | None = None,
    *,
    baseline: Baseline | None = None,
    x_height: float | None = None,
) -> LayoutTreeNode:
    return LayoutTreeNode(
        level=Level.LINE,
        box=b,
        children=tuple(words or [word(b)]),
        baseline=baseline,
        x_height=x_height,
    )


def paragraph(
    b: BoundingBox, lines: list[LayoutTreeNode], style: ParagraphStyle | None = None
) -> LayoutTreeNode:
    return LayoutTreeNode(
        level=Level.PARAGRAPH,
        box=b,
        children=tuple(lines),
        paragraph_style=style if style is not None else ParagraphStyle(),
    )


def block(
    b: BoundingBox,
    paragraphs: list[LayoutTreeNode],
    orientation: OrientationInfo | None = None,
) -> LayoutTreeNode:
    return LayoutTreeNode(
        level=Level.BLOCK,
        box=b,
        children=tuple(paragraphs),
        orientation=orientation,
    )


def tree_source(blocks: list[LayoutTreeNode], width: int = 1000, height: int = 800) -> TreeLayoutSource:
    return TreeLayoutSource(blocks, image_width=width, image_height=height)


def two_line_block(
    style: ParagraphStyle | None = None, orientation: OrientationInfo | None = None
) -> LayoutTreeNode:
    """One block, one paragraph, two lines (the basic single-column page)."""
    return block(
        box(10, 20, 510, 220),
        [
            paragraph(
                box(10, 20, 510, 120),
                [
                    line(box(10, 20, 510, 60), baseline=Baseline(10, 55, 510, 57)),
                    line(box(10, 70, 510, 110), baseline=Baseline(10, 105, 510, 105)),
                ],
                style,
            )
        ],
        orientation,
    )


def full_depth_blocks(n_blocks: int = 2) -> list[LayoutTreeNode]:
    """Blocks with 1 paragraph, 2 lines, 2 words per line and 2 glyphs per word."""
    blocks = []
    for bi in range(n_blocks):
        top = bi * 200
        lines = []
        for li in range(2):
            lt = top + li * 50
            words = []
            for wi in range(2):
                wl = wi * 100
                glyphs = [glyph(box(wl + gi * 40, lt, wl + gi * 40 + 30, lt + 40)) for gi in range(2)]
                words.append(word(box(wl, lt, wl + 70, lt + 40), glyphs))
            lines.append(line(box(0, lt, 170, lt + 40), words, x_height=18.0))
        blocks.append(
            block(box(0, top, 170, top + 90), [paragraph(box(0, top, 170, top + 90), lines)])
        )
    return blocks
