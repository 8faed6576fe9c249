from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from contracts.errors import ConfigurationError
from contracts.layout import Level, WritingDirection


class OutputFormat(str, Enum):
    ASCII = "ascii"
    PAGE_XML = "xmlpage"


class RegionGrouping(str, Enum):
    """Layout level that defines a PAGE-XML TextRegion."""

    BLOCK = "block"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True, slots=True)
class TraversalConfig:
    """
    Immutable traversal settings, built once per run.

    `segmentation_mode` is opaque here and only forwarded to the layout source.
    """

    max_level: int = Level.LINE.value
    output_format: OutputFormat = OutputFormat.PAGE_XML
    region_grouping: RegionGrouping = RegionGrouping.BLOCK
    writing_direction_override: WritingDirection | None = None
    segmentation_mode: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_level, bool) or not isinstance(self.max_level, int):
            raise ConfigurationError(f"invalid layout level: {self.max_level!r}")
        if not (Level.BLOCK <= self.max_level <= Level.GLYPH):
            raise ConfigurationError(f"invalid layout level: {self.max_level}")
        if not isinstance(self.output_format, OutputFormat):
            raise ConfigurationError(f"unknown output format: {self.output_format!r}")
        if not isinstance(self.region_grouping, RegionGrouping):
            raise ConfigurationError(f"unknown region grouping: {self.region_grouping!r}")
        if self.writing_direction_override is not None and not isinstance(
            self.writing_direction_override, WritingDirection
        ):
            raise ConfigurationError(
                f"unknown writing direction: {self.writing_direction_override!r}"
            )

    @property
    def deepest_level(self) -> Level:
        return Level(self.max_level)


def parse_max_level(value: str | int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"invalid layout level: {value}") from e


def parse_output_format(value: str) -> OutputFormat:
    try:
        return OutputFormat(value.strip().lower())
    except ValueError as e:
        raise ConfigurationError(f"unknown output format: {value}") from e


def parse_region_grouping(value: str) -> RegionGrouping:
    try:
        return RegionGrouping(value.strip().lower())
    except ValueError as e:
        raise ConfigurationError(f"unknown region grouping: {value}") from e


def parse_writing_direction(value: str | None) -> WritingDirection | None:
    if value is None or value.strip().lower() in ("", "none"):
        return None
    try:
        return WritingDirection(value.strip().lower())
    except ValueError as e:
        raise ConfigurationError(f"unknown writing direction: {value}") from e
