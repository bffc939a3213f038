"""
Layer Export
뷰어(시각화 협력자)로 전달하기 위한 레이어 직렬화
"""
import base64
import struct
from typing import Any, Dict, Iterable, List

from .models import Layer, Movement, Position


def pack_positions(positions: Iterable[Position]) -> str:
    """좌표 목록을 x,y,z 순서의 Float32 (little-endian) Base64 문자열로 변환"""
    coords = [c for p in positions for c in (p.x, p.y, p.z)]
    if not coords:
        return ""
    return base64.b64encode(struct.pack(f'<{len(coords)}f', *coords)).decode('ascii')


def pack_movements(movements: List[Movement]) -> str:
    """이동마다 [from.x, from.y, from.z, to.x, to.y, to.z]"""
    return pack_positions(point for m in movements for point in (m.from_, m.to))


def layers_to_dict(layers: List[Layer]) -> Dict[str, Any]:
    """JSON 형식 (movement 키는 from/to/isExtruding/isPurge/arc)"""
    return {
        "layers": [layer.model_dump(by_alias=True) for layer in layers]
    }


def layers_to_binary_dict(layers: List[Layer]) -> Dict[str, Any]:
    """
    Float32Array + Base64 최적화 형식으로 반환

    Returns:
        {
            "layers": [
                {
                    "layerNum": 0,
                    "z": 0.2,
                    "extrusionData": "base64...",  # [x1,y1,z1,x2,y2,z2, ...]
                    "travelData": "base64...",
                    "purgeData": "base64...",      # [x,y,z, ...]
                    "extrusionCount": 1234,
                    "travelCount": 567,
                    "purgeCount": 3
                },
                ...
            ]
        }
    """
    result = []
    for i, layer in enumerate(layers):
        extrusions = [m for m in layer.movements if m.is_extruding]
        travels = [m for m in layer.movements if not m.is_extruding]

        result.append({
            "layerNum": i,
            "z": layer.z,
            "extrusionData": pack_movements(extrusions),
            "travelData": pack_movements(travels),
            "purgeData": pack_positions(p.position for p in layer.purges),
            "extrusionCount": len(extrusions),
            "travelCount": len(travels),
            "purgeCount": len(layer.purges),
        })
    return {"layers": result}
