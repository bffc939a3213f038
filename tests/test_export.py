"""
직렬화 / 요약 테스트
"""
import base64
import json
import struct

import pytest

from gcode_layers import GCodeInterpreter
from gcode_layers.export import layers_to_binary_dict, layers_to_dict, pack_movements, pack_positions
from gcode_layers.models import Movement, Position
from gcode_layers.summary import summarize_layers

PROGRAM = "G1 Z0.2\nG1 X10 E1\nG1 E0.5\nG1 X10 Y10\nG3 X0 Y10 I-5 J0 E1\nG1 Z0.4\nG1 X0 Y0 E1"


@pytest.fixture
def layers():
    return GCodeInterpreter().parse(PROGRAM)


def unpack(data: str):
    raw = base64.b64decode(data)
    return struct.unpack(f'<{len(raw) // 4}f', raw)


class TestExport:
    """layers_to_dict / layers_to_binary_dict 테스트"""

    def test_pack_positions_empty(self):
        assert pack_positions([]) == ""

    def test_pack_positions_values(self):
        data = pack_positions([Position(x=1, y=2, z=0.5), Position(x=3, y=4, z=0.5)])
        assert unpack(data) == pytest.approx((1, 2, 0.5, 3, 4, 0.5))

    def test_pack_movements_from_then_to(self):
        movement = Movement(from_=Position(z=0.5), to=Position(x=1, y=2, z=0.5), is_extruding=True)
        assert unpack(pack_movements([movement])) == pytest.approx((0, 0, 0.5, 1, 2, 0.5))

    def test_dict_uses_viewer_keys(self, layers):
        data = layers_to_dict(layers)
        movement = data["layers"][0]["movements"][1]
        assert set(movement) == {"from", "to", "isExtruding", "isPurge", "arc"}
        assert movement["isExtruding"] is True
        assert data["layers"][0]["z"] == 0.2
        # JSON 직렬화 가능
        json.dumps(data)

    def test_dict_arc_metadata(self, layers):
        data = layers_to_dict(layers)
        arcs = [m["arc"] for m in data["layers"][0]["movements"] if m["arc"]]
        assert arcs
        assert arcs[0]["clockwise"] is False
        assert tuple(arcs[0]["center"]) == (5.0, 10.0)

    def test_binary_counts(self, layers):
        data = layers_to_binary_dict(layers)
        first = data["layers"][0]
        total = first["extrusionCount"] + first["travelCount"]
        assert total == len(layers[0].movements)
        assert first["purgeCount"] == 1
        assert len(unpack(first["extrusionData"])) == 6 * first["extrusionCount"]
        assert unpack(first["purgeData"]) == pytest.approx((10, 0, 0.2))
        assert [l["layerNum"] for l in data["layers"]] == [0, 1]


class TestSummary:
    """summarize_layers 테스트"""

    def test_counts(self, layers):
        summary = summarize_layers(layers)
        assert summary.layer_count == 2
        assert summary.purge_count == 1
        assert summary.movement_count == sum(len(l.movements) for l in layers)
        assert summary.extrusion_count + summary.travel_count == summary.movement_count
        assert summary.arc_segment_count == 16
        assert summary.z_heights == [0.2, 0.4]

    def test_lengths(self):
        layers = GCodeInterpreter().parse("G1 X10 E1\nG1 X10 Y5")
        summary = summarize_layers(layers)
        assert summary.extrusion_length == pytest.approx(10.0)
        assert summary.travel_length == pytest.approx(5.0)

    def test_bounding_box(self, layers):
        box = summarize_layers(layers).bounding_box
        assert box.min_x == 0
        assert box.max_x == 10
        assert box.max_y == pytest.approx(15.0, abs=1e-3)
        assert box.max_z == 0.4

    def test_empty(self):
        summary = summarize_layers([])
        assert summary.layer_count == 0
        assert summary.bounding_box.max_x == 0
