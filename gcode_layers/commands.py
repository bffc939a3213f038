"""
G-code 명령 분류기

Maps the leading command code of a line to a closed set of semantic kinds.
"""
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class CommandKind(str, Enum):
    """명령 유형"""
    MOVEMENT = "movement"                # G0/G1 직선 이동
    ARC = "arc"                          # G2/G3 원호 이동
    RESET = "reset"                      # G92 위치 리셋
    PAUSE = "pause"                      # M600/M601 일시정지
    EXTRUSION = "extrusion"              # M83/M84 압출 모드
    COORDINATE_MODE = "coordinate_mode"  # G90/G91
    RETRACTION = "retraction"            # G10
    WIPE = "wipe"                        # G11
    OUTERWALL = "outerwall"
    UNKNOWN = "unknown"


COMMAND_TABLE: Mapping[str, CommandKind] = MappingProxyType({
    'G0': CommandKind.MOVEMENT,
    'G1': CommandKind.MOVEMENT,
    'G2': CommandKind.ARC,
    'G3': CommandKind.ARC,
    'G92': CommandKind.RESET,
    'M600': CommandKind.PAUSE,
    'M601': CommandKind.PAUSE,
    'M83': CommandKind.EXTRUSION,
    'M84': CommandKind.EXTRUSION,
    'G90': CommandKind.COORDINATE_MODE,
    'G91': CommandKind.COORDINATE_MODE,
    'G10': CommandKind.RETRACTION,
    'G11': CommandKind.WIPE,
})


def classify_command(cmd: str) -> CommandKind:
    """Look up an exact command code."""
    return COMMAND_TABLE.get(cmd, CommandKind.UNKNOWN)


def classify_line(line: str) -> CommandKind:
    """Classify a raw line by its first whitespace-delimited token."""
    parts = line.split()
    if not parts:
        return CommandKind.UNKNOWN
    return classify_command(parts[0])
