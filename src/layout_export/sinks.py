from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TextIO

from contracts.layout import Baseline, BoundingBox, OrientationInfo, ParagraphStyle

from .identifiers import NodeId


class OutputSink(ABC):
    """
    Serializer fed by the layout walker, one event per node in traversal order.

    Every `*_enter` event is matched by the corresponding `*_leave` event after
    all of the node's descendants have been emitted. Block orientation passed to
    `block_enter` already has any writing-direction override applied.
    """

    def __init__(self, out: TextIO) -> None:
        self._out = out

    def _write(self, line: str) -> None:
        self._out.write(line + "\n")

    def document_start(self, *, image_path: str, width: int, height: int, created: datetime) -> None:
        pass

    def document_end(self) -> None:
        pass

    @abstractmethod
    def block_enter(self, node_id: NodeId, box: BoundingBox, orientation: OrientationInfo) -> None:
        raise NotImplementedError

    def block_leave(self, node_id: NodeId) -> None:
        pass

    @abstractmethod
    def paragraph_enter(self, node_id: NodeId, box: BoundingBox, style: ParagraphStyle) -> None:
        raise NotImplementedError

    def paragraph_leave(self, node_id: NodeId) -> None:
        pass

    @abstractmethod
    def line_enter(
        self, node_id: NodeId, box: BoundingBox, baseline: Baseline, x_height: float | None
    ) -> None:
        raise NotImplementedError

    def line_leave(self, node_id: NodeId) -> None:
        pass

    @abstractmethod
    def word_enter(self, node_id: NodeId, box: BoundingBox) -> None:
        raise NotImplementedError

    def word_leave(self, node_id: NodeId) -> None:
        pass

    @abstractmethod
    def glyph_enter(self, node_id: NodeId, box: BoundingBox) -> None:
        raise NotImplementedError

    def glyph_leave(self, node_id: NodeId) -> None:
        pass
