from .linear import handle_linear_move, LinearMoveResult
from .arc import (
    handle_arc_move,
    ArcMoveResult,
    ArcCommandError,
    arc_sweep,
    arc_segment_count,
)

__all__ = [
    'handle_linear_move',
    'LinearMoveResult',
    'handle_arc_move',
    'ArcMoveResult',
    'ArcCommandError',
    'arc_sweep',
    'arc_segment_count',
]
