"""Tests for traverse/cli.py"""
import json
import logging

from traverse.cli import build_parser, main


class TestMain:
    def test_linestring_row(self, sample_file, capsys):
        assert main([str(sample_file)]) == 0
        out = capsys.readouterr().out.strip()
        assert out.startswith('"LINESTRING (-121.820213695 37.413523321,')
        assert out.endswith('", "sample", ""')
        coordinates = out.split("(", 1)[1].split(")", 1)[0].split(",")
        assert len(coordinates) == 4

    def test_name_and_description(self, sample_file, capsys):
        main([str(sample_file), "--name", "nolaSouth", "--description", "from C3"])
        assert capsys.readouterr().out.strip().endswith('"nolaSouth", "from C3"')

    def test_polygon(self, sample_file, capsys):
        assert main([str(sample_file), "--polygon"]) == 0
        out = capsys.readouterr().out.strip()
        assert out.startswith('"POLYGON ((-121.820213695 37.413523321,')
        assert "-121.820213695 37.413523321))" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.csv")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Unable to retrieve records" in captured.err

    def test_malformed_file(self, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        path.write_text("P,1,1.0,2.0\n", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Unknown type" in capsys.readouterr().err

    def test_evaluation_error(self, tmp_path, capsys):
        path = tmp_path / "nostart.csv"
        path.write_text("H,L,Memo,Bearing,Distance,Direction\nL,1,N0°0'0\"E,10,TRUE\n", encoding="utf-8")
        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Traverse evaluation failed" in captured.err

    def test_bad_unit(self, sample_file, capsys):
        assert main([str(sample_file), "--distance-unit", "second"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_audit_dir(self, sample_file, tmp_path, capsys):
        audit_dir = tmp_path / "runs"
        assert main([str(sample_file), "--audit-dir", str(audit_dir)]) == 0
        with open(audit_dir / "sample_audit.json") as f:
            artifacts = json.load(f)
        assert artifacts["run_id"] == "sample"
        assert artifacts["record_count"] == 6
        assert artifacts["point_count"] == 4
        assert [s["label"] for s in artifacts["steps"]] == ["P1", "L1", "C1", "F1", "V1", "L2"]

    def test_audit_written_on_failure(self, tmp_path, capsys):
        path = tmp_path / "nostart.csv"
        path.write_text("H,C,Memo,Distance,Direction,Radius\nC,1,10,TRUE,25\n", encoding="utf-8")
        audit_dir = tmp_path / "runs"
        assert main([str(path), "--audit-dir", str(audit_dir)]) == 1
        with open(audit_dir / "nostart_audit.json") as f:
            assert "MissingContextError" in json.load(f)["error"]


def test_parser_defaults():
    args = build_parser().parse_args(["traverse.csv"])
    assert args.distance_unit == "foot"
    assert args.polygon is False
    assert args.audit_dir is None


class TestQuietRun:
    def test_success_writes_nothing_to_stderr(self, sample_file, capfd):
        assert main([str(sample_file)]) == 0
        captured = capfd.readouterr()
        assert captured.out.startswith('"LINESTRING (')
        assert captured.err == ""

    def test_audit_file_closed_after_run(self, sample_file, tmp_path, capfd):
        audit_dir = tmp_path / "runs"
        assert main([str(sample_file), "--audit-dir", str(audit_dir)]) == 0
        file_loggers = [
            logger for name, logger in logging.Logger.manager.loggerDict.items()
            if name.startswith("audit.file.") and isinstance(logger, logging.Logger)
        ]
        assert all(not logger.handlers for logger in file_loggers)
        assert capfd.readouterr().err == ""


def test_polygon_needs_three_points(tmp_path, capsys):
    path = tmp_path / "leg.csv"
    path.write_text(
        "H,P,Memo,Latitude,Longitude\nH,L,Memo,Bearing,Distance,Direction\n"
        "P,1,37.4,-121.8\nL,1,N0°0'0\"E,10,TRUE\n",
        encoding="utf-8",
    )
    assert main([str(path), "--polygon"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Cannot export traverse" in captured.err
