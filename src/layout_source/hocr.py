from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from bs4.element import Tag

from contracts.errors import SourceUnavailable
from contracts.layout import (
    Baseline,
    BoundingBox,
    Level,
    Orientation,
    OrientationInfo,
    ParagraphStyle,
    WritingDirection,
)

from .tree import LayoutTreeNode

logger = logging.getLogger(__name__)

_LINE_CLASSES = ["ocr_line", "ocr_header", "ocr_textfloat", "ocr_caption"]

# hOCR `textangle` is the counter-clockwise rotation of the text.
_TEXTANGLE_ORIENTATION = {
    0: Orientation.PAGE_UP,
    90: Orientation.PAGE_LEFT,
    180: Orientation.PAGE_DOWN,
    270: Orientation.PAGE_RIGHT,
}

_DIR_WRITING_DIRECTION = {
    "ltr": WritingDirection.LEFT_TO_RIGHT,
    "rtl": WritingDirection.RIGHT_TO_LEFT,
    "ttb": WritingDirection.TOP_TO_BOTTOM,
}


@dataclass(frozen=True, slots=True)
class HocrPage:
    width: int
    height: int
    blocks: tuple[LayoutTreeNode, ...]


def parse_title(title: str) -> dict[str, list[str]]:
    """
    Split an hOCR `title` attribute into its properties.

    "bbox 0 0 10 20; baseline 0.01 -3" -> {"bbox": ["0", "0", "10", "20"], "baseline": ["0.01", "-3"]}
    """

    props: dict[str, list[str]] = {}
    for part in title.split(";"):
        tokens = part.split()
        if tokens:
            props[tokens[0]] = tokens[1:]
    return props


def _props(elem: Tag) -> dict[str, list[str]]:
    return parse_title(elem.get("title") or "")


def _box(props: dict[str, list[str]], key: str = "bbox") -> BoundingBox | None:
    values = props.get(key)
    if not values or len(values) < 4:
        return None
    try:
        left, top, right, bottom = (int(float(v)) for v in values[:4])
    except ValueError:
        return None
    return BoundingBox(left=left, top=top, right=max(left, right), bottom=max(top, bottom))


def _float_prop(props: dict[str, list[str]], key: str) -> float | None:
    values = props.get(key)
    if not values:
        return None
    try:
        return float(values[0])
    except ValueError:
        return None


def _baseline(props: dict[str, list[str]], box: BoundingBox) -> Baseline | None:
    # `baseline slope offset`, relative to the bottom-left corner of the line box.
    values = props.get("baseline")
    if not values or len(values) < 2:
        return None
    try:
        slope = float(values[0])
        offset = float(values[1])
    except ValueError:
        return None
    y1 = box.bottom + offset
    y2 = y1 + slope * (box.right - box.left)
    return Baseline(x1=box.left, y1=int(round(y1)), x2=box.right, y2=int(round(y2)))


def _x_height(props: dict[str, list[str]]) -> float | None:
    size = _float_prop(props, "x_size")
    ascenders = _float_prop(props, "x_ascenders")
    descenders = _float_prop(props, "x_descenders")
    if size is None or ascenders is None or descenders is None:
        return None
    return size - ascenders - descenders


def _placeholder(level: Level, box: BoundingBox) -> LayoutTreeNode:
    child = level.child
    return LayoutTreeNode(
        level=level,
        box=box,
        children=(_placeholder(child, box),) if child is not None else (),
    )


def _with_placeholder(
    level: Level, parent_box: BoundingBox, children: list[LayoutTreeNode]
) -> tuple[LayoutTreeNode, ...]:
    # Every node must have at least one child so that each level can be entered.
    if children:
        return tuple(children)
    return (_placeholder(level, parent_box),)


def _glyph(elem: Tag) -> LayoutTreeNode | None:
    box = _box(_props(elem), key="x_bboxes")
    if box is None:
        return None
    return LayoutTreeNode(level=Level.GLYPH, box=box)


def _word(elem: Tag) -> LayoutTreeNode | None:
    box = _box(_props(elem))
    if box is None:
        return None
    glyphs = [g for g in (_glyph(el) for el in elem.find_all(class_="ocrx_cinfo")) if g]
    return LayoutTreeNode(
        level=Level.WORD,
        box=box,
        children=_with_placeholder(Level.GLYPH, box, glyphs),
    )


def _line(elem: Tag) -> LayoutTreeNode | None:
    props = _props(elem)
    box = _box(props)
    if box is None:
        return None
    words = [w for w in (_word(el) for el in elem.find_all(class_="ocrx_word")) if w]
    return LayoutTreeNode(
        level=Level.LINE,
        box=box,
        children=_with_placeholder(Level.WORD, box, words),
        baseline=_baseline(props, box),
        x_height=_x_height(props),
    )


def _paragraph(elem: Tag) -> LayoutTreeNode | None:
    box = _box(_props(elem))
    if box is None:
        return None
    lines = [ln for ln in (_line(el) for el in elem.find_all(class_=_LINE_CLASSES)) if ln]
    return LayoutTreeNode(
        level=Level.PARAGRAPH,
        box=box,
        children=_with_placeholder(Level.LINE, box, lines),
        # hOCR does not carry justification/list/crown/indent.
        paragraph_style=ParagraphStyle(),
    )


def _block_orientation(elem: Tag, par_elems: list[Tag]) -> OrientationInfo:
    orientation = Orientation.PAGE_UP
    first_line = elem.find(class_=_LINE_CLASSES)
    if first_line is not None:
        angle = _float_prop(_props(first_line), "textangle")
        if angle is not None:
            orientation = _TEXTANGLE_ORIENTATION.get(int(round(angle)) % 360, Orientation.PAGE_UP)

    # tesseract leaves `dir` off left-to-right paragraphs.
    direction = WritingDirection.LEFT_TO_RIGHT
    if par_elems:
        value = (par_elems[0].get("dir") or "").strip().lower()
        direction = _DIR_WRITING_DIRECTION.get(value, WritingDirection.LEFT_TO_RIGHT)

    return OrientationInfo(orientation=orientation, writing_direction=direction)


def _block(elem: Tag) -> LayoutTreeNode | None:
    box = _box(_props(elem))
    if box is None:
        return None
    par_elems = elem.find_all(class_="ocr_par")
    paragraphs = [p for p in (_paragraph(el) for el in par_elems) if p]
    return LayoutTreeNode(
        level=Level.BLOCK,
        box=box,
        children=_with_placeholder(Level.PARAGRAPH, box, paragraphs),
        orientation=_block_orientation(elem, par_elems),
    )


def parse_hocr(data: bytes | str) -> HocrPage:
    """
    Parse tesseract hOCR output into a layout tree.

    Only text areas (`ocr_carea`) become blocks; photo/separator areas carry no
    text lines and are skipped. Only the first `ocr_page` is used.
    """

    with warnings.catch_warnings():
        # hOCR is XHTML; its XML declaration is expected.
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(data, "html.parser")

    page = soup.find(class_="ocr_page")
    if page is None:
        raise SourceUnavailable(
            code="SOURCE_HOCR_UNPARSEABLE",
            message="hOCR output contains no ocr_page element",
        )

    page_box = _box(_props(page))
    if page_box is None:
        raise SourceUnavailable(
            code="SOURCE_HOCR_UNPARSEABLE",
            message="hOCR ocr_page element has no bbox",
        )

    blocks = tuple(b for b in (_block(el) for el in page.find_all(class_="ocr_carea")) if b)
    logger.info(
        "parsed hOCR page %dx%d with %d block(s)", page_box.width, page_box.height, len(blocks)
    )
    return HocrPage(width=page_box.width, height=page_box.height, blocks=blocks)
