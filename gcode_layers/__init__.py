from .interpreter import (
    GCodeInterpreter,
    InterpretationResult,
    InterpreterState,
    interpret_gcode,
    interpret_gcode_file,
)
from .commands import CommandKind, classify_command, classify_line
from .config import InterpreterConfig
from .models import (
    ArcInfo,
    Diagnostic,
    DiagnosticKind,
    Layer,
    Movement,
    Position,
    PurgePoint,
)

__all__ = [
    'GCodeInterpreter',
    'InterpretationResult',
    'InterpreterState',
    'interpret_gcode',
    'interpret_gcode_file',
    'CommandKind',
    'classify_command',
    'classify_line',
    'InterpreterConfig',
    'ArcInfo',
    'Diagnostic',
    'DiagnosticKind',
    'Layer',
    'Movement',
    'Position',
    'PurgePoint',
]
