"""
Canonical layout contracts.

These models are the schema boundary between the layout source (producer of
the block/paragraph/line/word/glyph tree) and the exporters that serialize it.
"""

from .errors import ConfigurationError, LayoutCursorError, LayoutExportError, SourceUnavailable
from .layout import (
    Baseline,
    BoundingBox,
    Justification,
    Level,
    Orientation,
    OrientationInfo,
    ParagraphStyle,
    TextlineOrder,
    WritingDirection,
)

__all__ = [
    "Baseline",
    "BoundingBox",
    "ConfigurationError",
    "Justification",
    "LayoutCursorError",
    "LayoutExportError",
    "Level",
    "Orientation",
    "OrientationInfo",
    "ParagraphStyle",
    "SourceUnavailable",
    "TextlineOrder",
    "WritingDirection",
]
