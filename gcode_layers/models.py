from enum import Enum
from typing import List, Optional, Dict, Tuple
from pydantic import BaseModel, Field

# --- From Parser ---
class GCodeLine(BaseModel):
    index: int           # 1-based line number (원본 라인 번호)
    raw: str             # Original string
    cmd: str             # G1, G2, G10, etc.
    params: Dict[str, float] # {"X": 10.2, "E": 0.0334}
    comment: Optional[str] = None


# --- Geometry ---
class Position(BaseModel):
    """Absolute machine position. Replaced, never mutated."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    model_config = {"frozen": True}

    def moved(self, x: Optional[float] = None, y: Optional[float] = None,
              z: Optional[float] = None) -> "Position":
        return Position(
            x=self.x if x is None else x,
            y=self.y if y is None else y,
            z=self.z if z is None else z,
        )


class ArcInfo(BaseModel):
    """원호 메타데이터 (같은 G2/G3 명령의 모든 세그먼트가 공유)"""
    center: Tuple[float, float]
    radius: float
    clockwise: bool

    model_config = {"frozen": True}


class Movement(BaseModel):
    """
    단일 이동 세그먼트

    Serialized with the keys the viewer expects:
        {"from": {...}, "to": {...}, "isExtruding": true, "isPurge": false, "arc": null}
    """
    from_: Position = Field(..., alias="from")
    to: Position
    is_extruding: bool = Field(False, alias="isExtruding")
    is_purge: bool = Field(False, alias="isPurge")
    arc: Optional[ArcInfo] = None

    model_config = {"frozen": True, "populate_by_name": True}


class PurgePoint(BaseModel):
    position: Position

    model_config = {"frozen": True}


class Layer(BaseModel):
    """
    레이어 (Z 높이 기준)

    z stays None until the first extrusion assigned to the layer fixes it.
    """
    z: Optional[float] = None
    movements: List[Movement] = Field(default_factory=list)
    purges: List[PurgePoint] = Field(default_factory=list)


# --- Diagnostics ---
class DiagnosticKind(str, Enum):
    UNRESOLVED_ARC_CENTER = "unresolved_arc_center"          # I/J 누락
    INVALID_ARC_RADIUS = "invalid_arc_radius"                # 0, 음수, inf
    INVALID_ARC_SEGMENT_POINT = "invalid_arc_segment_point"  # 세그먼트 좌표가 유한하지 않음


class Diagnostic(BaseModel):
    kind: DiagnosticKind
    line_index: int
    line: str
    message: str

    def __str__(self):
        return f"Line {self.line_index}: {self.message}"


# --- Summary ---
class BoundingBox(BaseModel):
    """3D 바운딩 박스 (이동이 없으면 모든 값 0)"""
    min_x: float = Field(0.0, alias="minX")
    max_x: float = Field(0.0, alias="maxX")
    min_y: float = Field(0.0, alias="minY")
    max_y: float = Field(0.0, alias="maxY")
    min_z: float = Field(0.0, alias="minZ")
    max_z: float = Field(0.0, alias="maxZ")

    model_config = {"populate_by_name": True}


class LayerSummary(BaseModel):
    layer_count: int
    movement_count: int
    extrusion_count: int
    travel_count: int
    purge_count: int
    arc_segment_count: int
    extrusion_length: float
    travel_length: float
    z_heights: List[Optional[float]]
    bounding_box: BoundingBox
    diagnostic_count: int = 0
