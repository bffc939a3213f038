"""
G-code Layer Interpreter Configuration
하드코딩 제거를 위한 설정 파일
"""
from pydantic import BaseModel, Field

# 원호 분할 시 목표 세그먼트 길이 (mm)
DEFAULT_ARC_SEGMENT_LENGTH = 1.0

class InterpreterConfig(BaseModel):
    """인터프리터 설정"""
    arc_segment_length: float = Field(DEFAULT_ARC_SEGMENT_LENGTH, gt=0)  # 원호 서브 세그먼트 목표 길이
    max_arc_segments: int = Field(100_000, ge=1)  # 원호 하나당 최대 세그먼트 수
    strip_comments: bool = True  # ';' 이후 주석 제거

def get_default_config() -> InterpreterConfig:
    return InterpreterConfig()
