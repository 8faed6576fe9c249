from __future__ import annotations

import logging
from collections import Counter

from contracts.layout import Level
from layout_source.engines.base import LayoutSource

from .config import TraversalConfig
from .identifiers import IdentifierScheme, NodeId
from .sinks import OutputSink

logger = logging.getLogger(__name__)


class LayoutWalker:
    """
    Depth-first walk over the block/paragraph/line/word/glyph cursors of a source.

    For each level up to `config.max_level`: enter the current node, descend one
    level if allowed, leave the node, then stop at the parent's final child or
    advance to the next sibling. One walker performs one pass; the source cursors
    are consumed and cannot be rewound.
    """

    def __init__(self, *, config: TraversalConfig, source: LayoutSource, sink: OutputSink) -> None:
        self._config = config
        self._source = source
        self._sink = sink
        self._ids = IdentifierScheme()
        self.visited: Counter[Level] = Counter()

    def walk(self) -> None:
        if self._source.is_empty(Level.BLOCK):
            logger.info("layout is empty; nothing to walk")
            return
        self._walk_level(Level.BLOCK)
        logger.debug(
            "walk complete: %s",
            ", ".join(f"{lvl.name.lower()}={self.visited[lvl]}" for lvl in Level if self.visited[lvl]),
        )

    def _walk_level(self, level: Level) -> None:
        parent = level.parent
        child = level.child
        while True:
            node_id = self._ids.enter(level)
            self.visited[level] += 1
            self._enter(level, node_id)

            if child is not None and child <= self._config.deepest_level:
                self._walk_level(child)

            self._leave(level, node_id)

            if parent is not None and self._source.is_at_final_sibling(parent, level):
                break
            if not self._source.advance(level):
                break

    def _enter(self, level: Level, node_id: NodeId) -> None:
        source = self._source
        box = source.bounding_box(level)
        logger.debug("enter %s %s", node_id.text, box)

        if level == Level.BLOCK:
            orientation = source.orientation_info().with_writing_direction(
                self._config.writing_direction_override
            )
            self._sink.block_enter(node_id, box, orientation)
        elif level == Level.PARAGRAPH:
            self._sink.paragraph_enter(node_id, box, source.paragraph_info())
        elif level == Level.LINE:
            self._sink.line_enter(node_id, box, source.baseline(), source.x_height())
        elif level == Level.WORD:
            self._sink.word_enter(node_id, box)
        else:
            self._sink.glyph_enter(node_id, box)

    def _leave(self, level: Level, node_id: NodeId) -> None:
        if level == Level.BLOCK:
            self._sink.block_leave(node_id)
        elif level == Level.PARAGRAPH:
            self._sink.paragraph_leave(node_id)
        elif level == Level.LINE:
            self._sink.line_leave(node_id)
        elif level == Level.WORD:
            self._sink.word_leave(node_id)
        else:
            self._sink.glyph_leave(node_id)
