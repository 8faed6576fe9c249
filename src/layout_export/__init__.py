"""
Layout export: serialize an analysed page layout as an ascii listing or PAGE-XML.

The walker drives a `layout_source.LayoutSource` cursor depth-first, numbers
each node with hierarchical ids and feeds the events to one output sink.
"""

__version__ = "2016.10.1"

from .config import OutputFormat, RegionGrouping, TraversalConfig
from .identifiers import IdentifierScheme, NodeId
from .module import LayoutExportSummary, make_sink, run_layout_export
from .sink_ascii import AsciiSink
from .sink_pagexml import PageXmlSink
from .sinks import OutputSink
from .walker import LayoutWalker

__all__ = [
    "AsciiSink",
    "IdentifierScheme",
    "LayoutExportSummary",
    "LayoutWalker",
    "NodeId",
    "OutputFormat",
    "OutputSink",
    "PageXmlSink",
    "RegionGrouping",
    "TraversalConfig",
    "make_sink",
    "run_layout_export",
]
