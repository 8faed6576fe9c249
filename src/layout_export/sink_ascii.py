from __future__ import annotations

from contracts.layout import Baseline, BoundingBox, Justification, OrientationInfo, ParagraphStyle

from .geometry import baseline_points, box_geometry
from .identifiers import NodeId
from .sinks import OutputSink


def paragraph_tokens(style: ParagraphStyle) -> list[str]:
    """Justification, list marker and crown/indent, in that order."""
    tokens: list[str] = []
    if style.justification != Justification.UNKNOWN:
        tokens.append(style.justification.value)
    if style.is_list:
        tokens.append("list")
    if style.is_crown:
        tokens.append("crown")
    elif style.indent != 0:
        tokens.append(str(style.indent))
    return tokens


class AsciiSink(OutputSink):
    """One line per entered node, no envelope and no nesting punctuation."""

    def block_enter(self, node_id: NodeId, box: BoundingBox, orientation: OrientationInfo) -> None:
        self._write(f"block {node_id.index} : {box_geometry(box)}")

    def paragraph_enter(self, node_id: NodeId, box: BoundingBox, style: ParagraphStyle) -> None:
        parts = [f"paragraph {node_id.index} :", *paragraph_tokens(style), box_geometry(box)]
        self._write(" ".join(parts))

    def line_enter(
        self, node_id: NodeId, box: BoundingBox, baseline: Baseline, x_height: float | None
    ) -> None:
        line = f"line {node_id.index} : {baseline_points(baseline)} {box_geometry(box)}"
        if x_height is not None:
            line += f" {x_height:g}"
        self._write(line)

    def word_enter(self, node_id: NodeId, box: BoundingBox) -> None:
        self._write(f"word {node_id.index} : {box_geometry(box)}")

    def glyph_enter(self, node_id: NodeId, box: BoundingBox) -> None:
        self._write(f"glyph {node_id.index} : {box_geometry(box)}")
