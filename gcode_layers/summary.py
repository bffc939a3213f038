import math
from typing import List
from .models import BoundingBox, Layer, LayerSummary, Position


def segment_length(a: Position, b: Position) -> float:
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2 + (b.z - a.z) ** 2)


def compute_bounding_box(layers: List[Layer]) -> BoundingBox:
    """Bounding box over every movement endpoint (extrusion and travel)."""
    xs, ys, zs = [], [], []
    for layer in layers:
        for movement in layer.movements:
            for p in (movement.from_, movement.to):
                xs.append(p.x)
                ys.append(p.y)
                zs.append(p.z)

    if not xs:
        return BoundingBox()

    return BoundingBox(
        min_x=round(min(xs), 3), max_x=round(max(xs), 3),
        min_y=round(min(ys), 3), max_y=round(max(ys), 3),
        min_z=round(min(zs), 3), max_z=round(max(zs), 3),
    )


def summarize_layers(layers: List[Layer], diagnostic_count: int = 0) -> LayerSummary:
    """Extract global statistics from interpreted layers."""

    movement_count = 0
    extrusion_count = 0
    travel_count = 0
    purge_count = 0
    arc_segment_count = 0
    extrusion_length = 0.0
    travel_length = 0.0

    for layer in layers:
        purge_count += len(layer.purges)
        for movement in layer.movements:
            movement_count += 1
            if movement.arc is not None:
                arc_segment_count += 1
            length = segment_length(movement.from_, movement.to)
            if movement.is_extruding:
                extrusion_count += 1
                extrusion_length += length
            else:
                travel_count += 1
                travel_length += length

    return LayerSummary(
        layer_count=len(layers),
        movement_count=movement_count,
        extrusion_count=extrusion_count,
        travel_count=travel_count,
        purge_count=purge_count,
        arc_segment_count=arc_segment_count,
        extrusion_length=round(extrusion_length, 3),
        travel_length=round(travel_length, 3),
        z_heights=[layer.z for layer in layers],
        bounding_box=compute_bounding_box(layers),
        diagnostic_count=diagnostic_count,
    )
