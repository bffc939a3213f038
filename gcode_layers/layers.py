"""
Layer Accumulator
이동 세그먼트를 Z 높이 기준 레이어로 묶는 모듈

Naive Z-keyed layering turns every retraction Z-hop into a new layer. The
retraction → wipe pairing is the only signal in the command stream that a hop
happened, so a wipe routes the current layer back to the height recorded at
retraction time and keeps the following travel moves there until printing
resumes.
"""
import logging
from enum import Enum
from typing import List, Optional

from .models import Layer, Movement, Position, PurgePoint

logger = logging.getLogger(__name__)


class RetractionPhase(Enum):
    IDLE = "idle"                # 대기 중인 리트랙션 없음
    PENDING = "pending"          # 리트랙션 발생, 와이프 대기
    ROUTED_BACK = "routed_back"  # 와이프 이후, 다음 압출 대기


class RetractionTracker:
    """리트랙션 → 와이프 상태 머신

    IDLE --retract(z)--> PENDING(z) --resolve()--> ROUTED_BACK --settle()--> IDLE
    A retraction in any phase enters PENDING; a second retraction while pending
    overwrites z. Resolving outside PENDING returns None and changes nothing.
    """

    def __init__(self):
        self.phase = RetractionPhase.IDLE
        self.pending_z: Optional[float] = None

    def retract(self, z: float):
        self.phase = RetractionPhase.PENDING
        self.pending_z = z

    def resolve(self) -> Optional[float]:
        if self.phase is not RetractionPhase.PENDING:
            return None
        z = self.pending_z
        self.phase = RetractionPhase.ROUTED_BACK
        self.pending_z = None
        return z

    def settle(self):
        if self.phase is RetractionPhase.ROUTED_BACK:
            self.phase = RetractionPhase.IDLE

    @property
    def is_pending(self) -> bool:
        return self.phase is RetractionPhase.PENDING

    @property
    def is_routed_back(self) -> bool:
        return self.phase is RetractionPhase.ROUTED_BACK


class LayerAccumulator:
    """레이어 생성 및 현재 레이어 관리"""

    def __init__(self):
        self.layers: List[Layer] = []
        self.current_layer: Optional[Layer] = None
        self.retraction = RetractionTracker()
        self.extrusion_seen: bool = False

    def _create_layer(self, z: Optional[float] = None) -> Layer:
        layer = Layer(z=z)
        self.layers.append(layer)
        self.current_layer = layer
        logger.debug(f"[LayerAccumulator] New layer #{len(self.layers) - 1} (z={z})")
        return layer

    def _ensure_layer(self) -> Layer:
        if self.current_layer is None:
            return self._create_layer()
        return self.current_layer

    def record_movement(self, movement: Movement):
        layer = self._ensure_layer()

        # 퍼지는 레이어를 바꾸지 않음
        if movement.is_purge:
            layer.movements.append(movement)
            return

        # 와이프 직후 이동은 되돌아간 레이어에 유지
        if self.retraction.is_routed_back:
            if not movement.is_extruding:
                layer.movements.append(movement)
                return
            self.retraction.settle()

        dest_z = movement.to.z
        if layer.z is None:
            if movement.is_extruding:
                layer.z = dest_z
        elif dest_z != layer.z and self.extrusion_seen:
            layer = self._create_layer(dest_z)

        if movement.is_extruding:
            self.extrusion_seen = True
        layer.movements.append(movement)

    def record_purge(self, position: Position):
        self._ensure_layer().purges.append(PurgePoint(position=position))

    def on_retraction(self, position: Position):
        self.retraction.retract(position.z)

    def on_wipe(self):
        z = self.retraction.resolve()
        if z is None:
            return
        layer = self.find_layer(z)
        if layer is not None:
            self.current_layer = layer
            logger.debug(f"[LayerAccumulator] Wipe routed back to layer z={z}")
        elif self.current_layer is None or self.current_layer.z is not None:
            self._create_layer(z)
        # 아직 높이가 정해지지 않은 첫 레이어는 그대로 유지

    def find_layer(self, z: float) -> Optional[Layer]:
        """가장 최근에 생성된 z 레이어"""
        for layer in reversed(self.layers):
            if layer.z == z:
                return layer
        return None
