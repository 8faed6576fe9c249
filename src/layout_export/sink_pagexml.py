from __future__ import annotations

from datetime import datetime
from typing import TextIO

from lxml import etree

from contracts.layout import (
    Baseline,
    BoundingBox,
    Orientation,
    OrientationInfo,
    ParagraphStyle,
    WritingDirection,
)

from .config import RegionGrouping
from .geometry import baseline_points, box_points
from .identifiers import NodeId
from .sinks import OutputSink

PAGE_NAMESPACE = "http://schema.primaresearch.org/PAGE/gts/pagecontent/2013-07-15"
PAGE_SCHEMA_LOCATION = f"{PAGE_NAMESPACE} {PAGE_NAMESPACE}/pagecontent.xsd"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
CREATOR = "tesseract-layout"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Defaults (page up, left-to-right) are not written.
READING_ORIENTATION = {
    Orientation.PAGE_UP: None,
    Orientation.PAGE_RIGHT: "90",
    Orientation.PAGE_DOWN: "180",
    Orientation.PAGE_LEFT: "-90",
}

READING_DIRECTION = {
    WritingDirection.LEFT_TO_RIGHT: None,
    WritingDirection.RIGHT_TO_LEFT: "right-to-left",
    WritingDirection.TOP_TO_BOTTOM: "top-to-bottom",
}


def region_attributes(info: OrientationInfo) -> list[tuple[str, str]]:
    attrs: list[tuple[str, str]] = []
    orientation = READING_ORIENTATION[info.orientation]
    if orientation is not None:
        attrs.append(("readingOrientation", orientation))
    direction = READING_DIRECTION[info.writing_direction]
    if direction is not None:
        attrs.append(("readingDirection", direction))
    return attrs


def _tag(name: str) -> str:
    return f"{{{PAGE_NAMESPACE}}}{name}"


class PageXmlSink(OutputSink):
    """
    PAGE-XML (2013-07-15) emitter.

    With block grouping each block is one TextRegion and paragraphs are not
    tagged; with paragraph grouping each paragraph is one TextRegion carrying
    the orientation of its block.

    The document is built as an lxml tree and written, two-space indented,
    by `document_end`.
    """

    def __init__(self, out: TextIO, *, region_grouping: RegionGrouping) -> None:
        super().__init__(out)
        self._region_grouping = region_grouping
        self._block_orientation = OrientationInfo()
        self._root: etree._Element | None = None
        self._open: list[etree._Element] = []

    def _enter(self, name: str, attrs: list[tuple[str, str]], box: BoundingBox) -> etree._Element:
        elem = etree.SubElement(self._open[-1], _tag(name))
        for key, value in attrs:
            elem.set(key, value)
        etree.SubElement(elem, _tag("Coords"), points=box_points(box))
        self._open.append(elem)
        return elem

    def _leave(self) -> None:
        self._open.pop()

    def document_start(self, *, image_path: str, width: int, height: int, created: datetime) -> None:
        stamp = created.strftime(TIMESTAMP_FORMAT)
        root = etree.Element(_tag("PcGts"), nsmap={None: PAGE_NAMESPACE, "xsi": XSI_NAMESPACE})
        root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", PAGE_SCHEMA_LOCATION)

        metadata = etree.SubElement(root, _tag("Metadata"))
        etree.SubElement(metadata, _tag("Creator")).text = CREATOR
        etree.SubElement(metadata, _tag("Created")).text = stamp
        etree.SubElement(metadata, _tag("LastChange")).text = stamp

        page = etree.SubElement(root, _tag("Page"))
        page.set("imageFilename", image_path)
        page.set("imageWidth", str(width))
        page.set("imageHeight", str(height))

        self._root = root
        self._open = [page]

    def document_end(self) -> None:
        if self._root is None:
            return
        etree.indent(self._root, space="  ")
        self._write(XML_DECLARATION)
        self._write(etree.tostring(self._root, encoding="unicode"))
        self._root = None
        self._open = []

    def block_enter(self, node_id: NodeId, box: BoundingBox, orientation: OrientationInfo) -> None:
        self._block_orientation = orientation
        if self._region_grouping == RegionGrouping.BLOCK:
            self._enter("TextRegion", [("id", node_id.text), *region_attributes(orientation)], box)

    def block_leave(self, node_id: NodeId) -> None:
        if self._region_grouping == RegionGrouping.BLOCK:
            self._leave()

    def paragraph_enter(self, node_id: NodeId, box: BoundingBox, style: ParagraphStyle) -> None:
        if self._region_grouping == RegionGrouping.PARAGRAPH:
            self._enter(
                "TextRegion",
                [("id", node_id.text), *region_attributes(self._block_orientation)],
                box,
            )

    def paragraph_leave(self, node_id: NodeId) -> None:
        if self._region_grouping == RegionGrouping.PARAGRAPH:
            self._leave()

    def line_enter(
        self, node_id: NodeId, box: BoundingBox, baseline: Baseline, x_height: float | None
    ) -> None:
        attrs = [("id", node_id.text)]
        if x_height is not None:
            attrs.append(("custom", f"x-height:{x_height:g}px;"))
        elem = self._enter("TextLine", attrs, box)
        etree.SubElement(elem, _tag("Baseline"), points=baseline_points(baseline))

    def line_leave(self, node_id: NodeId) -> None:
        self._leave()

    def word_enter(self, node_id: NodeId, box: BoundingBox) -> None:
        self._enter("Word", [("id", node_id.text)], box)

    def word_leave(self, node_id: NodeId) -> None:
        self._leave()

    def glyph_enter(self, node_id: NodeId, box: BoundingBox) -> None:
        self._enter("Glyph", [("id", node_id.text)], box)

    def glyph_leave(self, node_id: NodeId) -> None:
        self._leave()
