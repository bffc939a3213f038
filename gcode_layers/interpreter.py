"""
G-code Layer Interpreter
G-code 명령 스트림을 레이어별 이동 세그먼트로 변환하는 모듈
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from .commands import CommandKind, classify_command
from .config import InterpreterConfig, get_default_config
from .layers import LayerAccumulator
from .models import Diagnostic, GCodeLine, Layer, LayerSummary
from .motion import ArcCommandError, handle_arc_move, handle_linear_move
from .parser import iter_gcode_lines, parse_gcode
from .position import PositionTracker
from .summary import summarize_layers

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[Diagnostic], None]


class InterpreterState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass
class InterpretationResult:
    """최종 해석 결과"""
    layers: List[Layer] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    summary: Optional[LayerSummary] = None
    encoding: Optional[str] = None
    is_fallback: bool = False


class GCodeInterpreter:
    """G-code를 레이어 목록으로 해석하는 클래스"""

    def __init__(self, config: Optional[InterpreterConfig] = None,
                 on_diagnostic: Optional[DiagnosticSink] = None):
        self.config = config or get_default_config()
        self.on_diagnostic = on_diagnostic
        self.state = InterpreterState.IDLE
        self._reset_state()
        self._handlers = {
            CommandKind.MOVEMENT: self._process_movement,
            CommandKind.ARC: self._process_arc,
            CommandKind.RETRACTION: self._process_retraction,
            CommandKind.WIPE: self._process_wipe,
        }

    def _reset_state(self):
        """상태 초기화"""
        self.position = PositionTracker()
        self.accumulator = LayerAccumulator()
        self.diagnostics: List[Diagnostic] = []

    @property
    def layers(self) -> List[Layer]:
        return self.accumulator.layers

    def _report(self, diagnostic: Diagnostic):
        logger.warning(f"[Interpreter] {diagnostic.kind.value} at line {diagnostic.line_index}: {diagnostic.message}")
        self.diagnostics.append(diagnostic)
        if self.on_diagnostic is not None:
            self.on_diagnostic(diagnostic)

    def _process_movement(self, line: GCodeLine):
        """G0/G1 이동 명령 처리"""
        result = handle_linear_move(line, self.position.current)
        self.accumulator.record_movement(result.movement)
        if result.purge is not None:
            self.accumulator.record_purge(result.purge.position)
        self.position.advance(result.position)

    def _process_arc(self, line: GCodeLine):
        """G2/G3 원호 명령 처리"""
        try:
            result = handle_arc_move(
                line,
                self.position.current,
                segment_length=self.config.arc_segment_length,
                max_segments=self.config.max_arc_segments,
            )
        except ArcCommandError as e:
            # 명령 전체 스킵 - 위치 변경 없음
            self._report(Diagnostic(kind=e.kind, line_index=line.index, line=line.raw, message=e.message))
            return

        for movement in result.movements:
            self.accumulator.record_movement(movement)
        for diagnostic in result.diagnostics:
            self._report(diagnostic)
        self.position.advance(result.position)

    def _process_retraction(self, line: GCodeLine):
        self.accumulator.on_retraction(self.position.current)

    def _process_wipe(self, line: GCodeLine):
        self.accumulator.on_wipe()

    def _process_line(self, line: GCodeLine):
        """단일 G-code 라인 처리"""
        if not line.cmd:
            return
        kind = classify_command(line.cmd)
        handler = self._handlers.get(kind)
        # reset / pause / extrusion / coordinate_mode / unknown: no-op
        if handler is not None:
            handler(line)

    def parse(self, commands: Union[str, Iterable[str]]) -> List[Layer]:
        """Interpret a whole command stream and return its layers.

        Args:
            commands: program text or an iterable of raw lines

        Returns:
            Layers in creation order. Never raises for malformed commands;
            those are reported through diagnostics and skipped.
        """
        return self.run(iter_gcode_lines(commands, strip_comments=self.config.strip_comments))

    def run(self, lines: Iterable[GCodeLine]) -> List[Layer]:
        """Interpret already parsed lines."""
        self._reset_state()
        self.state = InterpreterState.RUNNING

        for line in lines:
            self._process_line(line)

        self.state = InterpreterState.DONE
        logger.info(
            f"[Interpreter] Done: {len(self.layers)} layers, {len(self.diagnostics)} diagnostics"
        )
        return self.layers


def interpret_gcode(commands: Union[str, Iterable[str]],
                    config: Optional[InterpreterConfig] = None,
                    on_diagnostic: Optional[DiagnosticSink] = None) -> InterpretationResult:
    """
    G-code 텍스트를 해석하여 레이어, 진단, 요약 반환

    Args:
        commands: G-code 텍스트 또는 라인 목록
        config: 인터프리터 설정 (없으면 기본값)
        on_diagnostic: 진단 콜백

    Returns:
        InterpretationResult
    """
    interpreter = GCodeInterpreter(config=config, on_diagnostic=on_diagnostic)
    layers = interpreter.parse(commands)
    return InterpretationResult(
        layers=layers,
        diagnostics=list(interpreter.diagnostics),
        summary=summarize_layers(layers, diagnostic_count=len(interpreter.diagnostics)),
    )


def interpret_gcode_file(file_path: str,
                         config: Optional[InterpreterConfig] = None,
                         on_diagnostic: Optional[DiagnosticSink] = None) -> InterpretationResult:
    """G-code 파일 해석 (인코딩 자동 감지)"""
    interpreter = GCodeInterpreter(config=config, on_diagnostic=on_diagnostic)
    parse_result = parse_gcode(file_path, strip_comments=interpreter.config.strip_comments)
    layers = interpreter.run(parse_result.lines)
    return InterpretationResult(
        layers=layers,
        diagnostics=list(interpreter.diagnostics),
        summary=summarize_layers(layers, diagnostic_count=len(interpreter.diagnostics)),
        encoding=parse_result.encoding,
        is_fallback=parse_result.is_fallback,
    )
