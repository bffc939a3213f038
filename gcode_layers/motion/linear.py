from dataclasses import dataclass
from typing import Optional
from ..models import GCodeLine, Movement, Position, PurgePoint


@dataclass
class LinearMoveResult:
    """G0/G1 처리 결과"""
    movement: Movement
    position: Position               # 이동 후 위치
    purge: Optional[PurgePoint] = None


def handle_linear_move(line: GCodeLine, position: Position) -> LinearMoveResult:
    """G0/G1 이동 명령 처리

    Absolute positioning is assumed: each X/Y/Z parameter replaces that axis,
    missing axes keep their prior value. A positive E marks the move as
    extruding; an extruding move that changes no axis is a purge, recorded at
    the pre-move position.
    """
    params = line.params

    # 새 위치 계산
    new_x = params.get('X', position.x)
    new_y = params.get('Y', position.y)
    new_z = params.get('Z', position.z)
    target = Position(x=new_x, y=new_y, z=new_z)

    is_extruding = params.get('E', 0.0) > 0
    displaced = (new_x != position.x or new_y != position.y or new_z != position.z)
    is_purge = is_extruding and not displaced

    movement = Movement(
        from_=position,
        to=target,
        is_extruding=is_extruding,
        is_purge=is_purge,
    )
    purge = PurgePoint(position=position) if is_purge else None
    return LinearMoveResult(movement=movement, position=target, purge=purge)
