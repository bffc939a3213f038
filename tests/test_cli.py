"""
CLI 테스트
"""
import json

import pytest

from gcode_layers.cli import main


@pytest.fixture
def gcode_file(tmp_path):
    path = tmp_path / "cube.gcode"
    path.write_text(
        "; test cube\n"
        "G1 Z0.2\n"
        "G1 X10 Y0 E1\n"
        "G1 X10 Y10 E1\n"
        "G2 X0 Y0\n",
        encoding="utf-8",
    )
    return str(path)


class TestCli:
    """gcode-layers CLI 테스트"""

    def test_layers_json(self, gcode_file, capsys):
        main(["layers", gcode_file])
        data = json.loads(capsys.readouterr().out)
        assert len(data["layers"]) == 1
        assert data["layers"][0]["z"] == 0.2
        assert data["diagnostics"][0]["kind"] == "unresolved_arc_center"

    def test_layers_binary(self, gcode_file, capsys):
        main(["layers", gcode_file, "--binary"])
        data = json.loads(capsys.readouterr().out)
        assert data["layers"][0]["extrusionCount"] == 2

    def test_layers_output_file(self, gcode_file, tmp_path):
        out = tmp_path / "layers.json"
        main(["layers", gcode_file, "-o", str(out)])
        data = json.loads(out.read_text(encoding="utf-8"))
        assert len(data["layers"][0]["movements"]) == 3

    def test_summarize(self, gcode_file, capsys):
        main(["summarize", gcode_file])
        data = json.loads(capsys.readouterr().out)
        assert data["layer_count"] == 1
        assert data["extrusion_count"] == 2
        assert data["diagnostic_count"] == 1
        assert data["bounding_box"]["maxX"] == 10

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["layers", str(tmp_path / "missing.gcode")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_segment_length(self, gcode_file, capsys):
        with pytest.raises(SystemExit):
            main(["layers", gcode_file, "--segment-length", "0"])
