"""
Layout sources (geometry only).

A layout source exposes an analysed page as per-level cursors over the
block/paragraph/line/word/glyph hierarchy. Sources never expose recognized
text, and this package performs no serialization.
"""

from .contracts import LayoutEngineName, SourceConfig
from .engines.base import LayoutEngine, LayoutSource
from .module import open_layout_source
from .tree import LayoutTreeNode, TreeLayoutSource

__all__ = [
    "LayoutEngine",
    "LayoutEngineName",
    "LayoutSource",
    "LayoutTreeNode",
    "SourceConfig",
    "TreeLayoutSource",
    "open_layout_source",
]
