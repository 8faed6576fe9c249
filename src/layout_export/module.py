from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TextIO

from contracts.layout import Level
from layout_source import LayoutSource, SourceConfig, open_layout_source

from .config import OutputFormat, TraversalConfig
from .sink_ascii import AsciiSink
from .sink_pagexml import PageXmlSink
from .sinks import OutputSink
from .walker import LayoutWalker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LayoutExportSummary:
    empty: bool
    nodes_per_level: dict[str, int] = field(default_factory=dict)


def make_sink(config: TraversalConfig, out: TextIO) -> OutputSink:
    if config.output_format == OutputFormat.ASCII:
        return AsciiSink(out)
    if config.output_format == OutputFormat.PAGE_XML:
        return PageXmlSink(out, region_grouping=config.region_grouping)
    raise ValueError(f"Unsupported output format: {config.output_format}")


def run_layout_export(
    *,
    config: TraversalConfig,
    image_path: str | Path,
    out: TextIO,
    source: LayoutSource | None = None,
    source_config: SourceConfig | None = None,
    created: datetime | None = None,
) -> LayoutExportSummary:
    """
    Analyse `image_path` (unless `source` is given) and write its layout to `out`.

    An empty layout (no blocks) writes nothing at all, in either format.
    Errors from the source propagate unchanged; nothing is retried.
    """

    if source is None:
        if source_config is None:
            source_config = SourceConfig(segmentation_mode=config.segmentation_mode)
        source = open_layout_source(config=source_config, image_path=Path(image_path))

    if source.is_empty(Level.BLOCK):
        logger.info("no layout blocks found in %s", image_path)
        return LayoutExportSummary(empty=True)

    sink = make_sink(config, out)
    width, height = source.image_size()
    sink.document_start(
        image_path=str(image_path),
        width=width,
        height=height,
        # Created and LastChange share this one local timestamp.
        created=created if created is not None else datetime.now(),
    )

    walker = LayoutWalker(config=config, source=source, sink=sink)
    walker.walk()
    sink.document_end()

    counts = {lvl.name.lower(): walker.visited[lvl] for lvl in Level if walker.visited[lvl]}
    logger.info("exported %s layout of %s: %s", config.output_format.value, image_path, counts)
    return LayoutExportSummary(empty=False, nodes_per_level=counts)
