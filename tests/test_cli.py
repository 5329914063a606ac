import json

from click.testing import CliRunner

from squad_planner.cli import cli

ROWS = [
    ["Squad 4"],
    ["slot", "date", "from", "to"],
    ["", "2024-01-02", "1330", "1530", "Later"],
    ["", "2024-01-01", "0830", "1030", "Intro"],
]


def test_import_command_summarizes_and_writes_json(workbook_file, tmp_path):
    path = workbook_file([("s", ROWS)])
    out = tmp_path / "sessions.json"
    result = CliRunner().invoke(cli, ["import", "--input", str(path), "--json-out", str(out)])
    assert result.exit_code == 0, result.output
    assert "Imported 2 sessions." in result.output
    assert "squad 4: 2" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [d["from"] for d in data] == ["1330", "0830"]


def test_slots_command(workbook_file):
    path = workbook_file([("s", ROWS)])
    result = CliRunner().invoke(cli, ["slots", "--input", str(path)])
    assert result.exit_code == 0
    lines = [l for l in result.output.splitlines() if l[:1].isdigit()]
    assert lines == ["0830 - 1030", "1330 - 1530"]


def test_export_command_writes_file(workbook_file, tmp_path):
    path = workbook_file([("s", ROWS)])
    out_dir = tmp_path / "out"
    result = CliRunner().invoke(
        cli, ["export", "--input", str(path), "--squad", "4", "--out-dir", str(out_dir)]
    )
    assert result.exit_code == 0, result.output
    written = list(out_dir.glob("4_updated_on_*.xlsx"))
    assert len(written) == 1


def test_import_failure_exits_nonzero(workbook_file):
    path = workbook_file([("s", [["no digits here"]])])
    result = CliRunner().invoke(cli, ["import", "--input", str(path)])
    assert result.exit_code == 1
    assert "No valid session data" in result.output


def test_analyze_command_prints_fallback(workbook_file):
    path = workbook_file([("s", ROWS)])
    result = CliRunner().invoke(cli, ["analyze", "--input", str(path), "--squad", "4"])
    assert result.exit_code == 0
    assert "Error analyzing schedule." in result.output


def test_legacy_xls_input_is_refused(tmp_path):
    path = tmp_path / "timetable.xls"
    path.write_bytes(b"legacy")
    result = CliRunner().invoke(cli, ["import", "--input", str(path)])
    assert result.exit_code == 1
    assert "Unsupported file type" in result.output
