"""
G2/G3 원호 이동 처리

Arcs are discretized into short linear sub-segments of roughly equal arc
length. Clockwise sweeps are negative radians, counter-clockwise sweeps are
non-negative; the segment generator walks from the start angle by that signed
sweep, so the sign decides the traversal direction.
"""
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from ..config import DEFAULT_ARC_SEGMENT_LENGTH
from ..models import ArcInfo, Diagnostic, DiagnosticKind, GCodeLine, Movement, Position

TWO_PI = 2 * math.pi


class ArcCommandError(Exception):
    """원호 명령 전체 실패 (이동 없음, 위치 변경 없음)"""

    def __init__(self, kind: DiagnosticKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass
class ArcMoveResult:
    """G2/G3 처리 결과"""
    movements: List[Movement]
    position: Position               # 원호 끝점 (파싱된 X/Y 그대로)
    center: Tuple[float, float]
    radius: float
    delta: float                     # signed sweep (rad)
    segment_count: int
    diagnostics: List[Diagnostic] = field(default_factory=list)


def arc_sweep(start_angle: float, end_angle: float, clockwise: bool) -> float:
    """Signed angular distance from start to end in the commanded direction.

    Clockwise results lie in (-2π, 0], counter-clockwise in [0, 2π).
    Coincident start and end give 0, not a full circle.
    """
    delta = end_angle - start_angle
    if clockwise:
        if delta > 0:
            delta -= TWO_PI
    else:
        if delta < 0:
            delta += TWO_PI
    return delta


def arc_segment_count(radius: float, delta: float,
                      segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH,
                      max_segments: int = None) -> int:
    arc_length = radius * abs(delta)
    if not math.isfinite(arc_length):
        raise ArcCommandError(
            DiagnosticKind.INVALID_ARC_RADIUS,
            f"arc length is not finite (radius={radius}, sweep={delta})"
        )
    count = max(math.ceil(arc_length / segment_length), 1)
    if max_segments is not None:
        count = min(count, max_segments)
    return count


def point_on_arc(center: Tuple[float, float], radius: float, angle: float) -> Tuple[float, float]:
    return center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle)


def resolve_arc_center(line: GCodeLine, position: Position) -> Tuple[float, float]:
    """I/J are offsets from the current position to the center."""
    params = line.params
    if 'I' not in params or 'J' not in params:
        raise ArcCommandError(
            DiagnosticKind.UNRESOLVED_ARC_CENTER,
            f"Invalid center for arc movement (missing I/J): {line.raw}"
        )
    return position.x + params['I'], position.y + params['J']


def handle_arc_move(line: GCodeLine, position: Position,
                    segment_length: float = DEFAULT_ARC_SEGMENT_LENGTH,
                    max_segments: int = None) -> ArcMoveResult:
    """G2(시계 방향)/G3(반시계 방향) 원호 명령 처리

    Raises:
        ArcCommandError: center cannot be resolved or the radius is not a
            finite positive number
    """
    params = line.params
    clockwise = line.cmd == 'G2'

    end_x = params.get('X', position.x)
    end_y = params.get('Y', position.y)
    center = resolve_arc_center(line, position)
    cx, cy = center

    radius = math.hypot(position.x - cx, position.y - cy)
    if not math.isfinite(radius) or radius <= 0:
        raise ArcCommandError(
            DiagnosticKind.INVALID_ARC_RADIUS,
            f"Invalid radius for arc movement ({radius}): {line.raw}"
        )

    start_angle = math.atan2(position.y - cy, position.x - cx)
    end_angle = math.atan2(end_y - cy, end_x - cx)
    delta = arc_sweep(start_angle, end_angle, clockwise)
    count = arc_segment_count(radius, delta, segment_length, max_segments)

    is_extruding = params.get('E', 0.0) > 0
    arc = ArcInfo(center=center, radius=radius, clockwise=clockwise)

    movements = []
    diagnostics = []
    previous = position
    for i in range(1, count + 1):
        angle = start_angle + delta * (i / count)
        x, y = point_on_arc(center, radius, angle)

        if not (math.isfinite(x) and math.isfinite(y)):
            # 세그먼트 스킵 - 위치는 이전 점 유지
            diagnostics.append(Diagnostic(
                kind=DiagnosticKind.INVALID_ARC_SEGMENT_POINT,
                line_index=line.index,
                line=line.raw,
                message=f"Invalid arc segment position {i}/{count}: ({x}, {y})",
            ))
            continue

        point = Position(x=x, y=y, z=position.z)
        movements.append(Movement(
            from_=previous,
            to=point,
            is_extruding=is_extruding,
            arc=arc,
        ))
        previous = point

    return ArcMoveResult(
        movements=movements,
        position=Position(x=end_x, y=end_y, z=position.z),
        center=center,
        radius=radius,
        delta=delta,
        segment_count=count,
        diagnostics=diagnostics,
    )
