from .models import Position


class PositionTracker:
    """현재 노즐 위치 추적 (절대 좌표)"""

    def __init__(self, start: Position = None):
        self._position = start if start is not None else Position()

    @property
    def current(self) -> Position:
        return self._position

    def advance(self, position: Position):
        self._position = position
