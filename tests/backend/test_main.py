# tests/backend/test_main.py
"""
Tests for the command line entry point
"""

import json

import pytest
import yaml

from main import main, parse_override


class TestParseOverride:
    """Tests for --set KEY=VALUE parsing"""

    @pytest.mark.parametrize("text,expected", [
        ("exposure=2000", ("exposure", 2000)),
        ("gain=0.4", ("gain", 0.4)),
        ("exposure_auto=false", ("exposure_auto", False)),
        ("shutter_mode=global_reset", ("shutter_mode", "global_reset")),
        ("gige/mtu_size=1500", ("gige/mtu_size", 1500)),
        ("device_user_id=", ("device_user_id", "")),
    ])
    def test_values_parsed_as_yaml_scalars(self, text, expected):
        assert parse_override(text) == expected

    @pytest.mark.parametrize("text", ["exposure", "=5", "/=5", "exposure=[1"])
    def test_rejects_malformed(self, text):
        import argparse
        with pytest.raises(argparse.ArgumentTypeError):
            parse_override(text)


class TestMain:
    """Tests for main()"""

    def test_json_output(self, tmp_path, capsys):
        path = tmp_path / "params.yaml"
        path.write_text(yaml.safe_dump({"frame_rate": -3, "start_exposure": 5000}))

        code = main([str(path), "--json"])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["parameters"]["frameRate"] == 5.0
        assert output["parameters"]["exposure"] == 5000
        assert output["parameters"]["exposureGiven"] is True
        assert output["writes"] == [{"key": "frame_rate", "value": 5.0}]
        codes = {d["code"] for d in output["diagnostics"]}
        assert {"deprecated_parameter", "out_of_range", "device_selection"} <= codes

    def test_overrides_and_output(self, tmp_path, capsys):
        path = tmp_path / "params.yaml"
        path.write_text("binning: 2\n")
        out = tmp_path / "resolved.yaml"

        code = main([
            str(path),
            "--set", "shutter_mode=rolling",
            "--frame-rate", "12",
            "--output", str(out),
        ])

        assert code == 0
        assert "Shutter mode: rolling" in capsys.readouterr().out
        saved = yaml.safe_load(out.read_text())
        assert saved == {"binning": 2, "shutter_mode": "rolling", "frame_rate": 12.0}

    def test_missing_file_returns_error_code(self, tmp_path):
        assert main([str(tmp_path / "missing.yaml")]) == 1

    def test_default_file_from_settings(self, monkeypatch, default_parameter_file, capsys):
        from config import get_settings
        monkeypatch.setattr(get_settings(), "parameter_file", str(default_parameter_file))

        assert main([]) == 0
        assert "Camera frame: pylon_camera" in capsys.readouterr().out

    @pytest.mark.parametrize("name,content", [
        ("params.yaml", "exposure: [2000\n"),
        ("params.json", '{"exposure": '),
        ("params.yaml", "1: foo\nexposure: 2000\n"),
    ])
    def test_bad_file_returns_error_code(self, tmp_path, name, content):
        """Should exit with 1 instead of a traceback for unreadable files"""
        path = tmp_path / name
        path.write_text(content)

        assert main([str(path)]) == 1

    def test_invalid_override_value_exits(self):
        """Should stop argument parsing on an unparsable --set value"""
        with pytest.raises(SystemExit) as exc_info:
            main(["--set", "exposure=[1"])
        assert exc_info.value.code == 2

    def test_type_mismatch_in_json_output(self, tmp_path, capsys):
        path = tmp_path / "params.yaml"
        path.write_text("exposure: fast\n")

        assert main([str(path), "--json"]) == 0

        output = json.loads(capsys.readouterr().out)
        mismatches = [d for d in output["diagnostics"] if d["code"] == "type_mismatch"]
        assert [d["details"]["key"] for d in mismatches] == ["exposure"]
        assert output["parameters"]["exposureGiven"] is True
