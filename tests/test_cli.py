import json

from click.testing import CliRunner

from longerdays.cli.export import main as export_main
from longerdays.cli.report import main as report_main


def test_report():
  result = CliRunner().invoke(report_main, ["--date", "2025-01-21", "--history", "3"])
  assert result.exit_code == 0, result.output
  assert "Sunrise" in result.output
  assert "since Dec 21" in result.output
  assert "Milestones" in result.output
  assert "Recent days" in result.output
  assert "peak rate" in result.output


def test_report_polar_night():
  result = CliRunner().invoke(report_main, ["--date", "2025-01-10", "--lat", "80", "--lon", "0"])
  assert result.exit_code == 0, result.output
  assert "does not rise and set" in result.output


def test_report_rejects_half_coordinate():
  result = CliRunner().invoke(report_main, ["--lat", "45"])
  assert result.exit_code == 2


def test_export_jsonl(tmp_path):
  result = CliRunner().invoke(export_main, ["--year", "2025", "--out", str(tmp_path), "--format", "jsonl"])
  assert result.exit_code == 0, result.output
  data = tmp_path / "2025" / "daylight_2025.jsonl"
  assert len(data.read_text().splitlines()) == 365
  manifest = json.loads((tmp_path / "2025" / "manifest.json").read_text())
  assert manifest["rows"] == 365
  assert manifest["stats"]["undefined_days"] == 0
  assert len(manifest["months"]) == 12


def test_report_rejects_config_without_content(tmp_path):
  path = tmp_path / "silent.yaml"
  path.write_text("preferences:\n  show_daily_change: false\n  show_change_since_solstice: false\n")
  result = CliRunner().invoke(report_main, ["--config", str(path), "--date", "2025-01-21"])
  assert result.exit_code == 2
  assert "needs content" in result.output
