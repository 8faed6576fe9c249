from __future__ import annotations

from contracts.layout import Baseline, BoundingBox

Point = tuple[int, int]


def box_polygon(box: BoundingBox) -> list[Point]:
    """Clockwise 4-point polygon starting at the top-left corner."""
    return [
        (box.left, box.top),
        (box.right, box.top),
        (box.right, box.bottom),
        (box.left, box.bottom),
    ]


def format_points(points: list[Point]) -> str:
    return " ".join(f"{x},{y}" for x, y in points)


def box_points(box: BoundingBox) -> str:
    return format_points(box_polygon(box))


def baseline_points(baseline: Baseline) -> str:
    return format_points([(baseline.x1, baseline.y1), (baseline.x2, baseline.y2)])


def box_geometry(box: BoundingBox) -> str:
    # ImageMagick-style size+offset: WxH+X+Y
    return f"{box.width}x{box.height}+{box.left}+{box.top}"
