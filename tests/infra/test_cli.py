from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from histbar.cli import main
from histbar.infra.env import ENV_OVERRIDE_KEYS


EXPECTED_UNIT_BINS = "\n".join(
    [
        "1.5|**********",
        "2.5|*****",
        "3.5|*****",
        "4.5|*****",
        "   +----------+ 2 times",
        "   +-----+ 1 times",
    ]
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ENV_OVERRIDE_KEYS:
        monkeypatch.setenv(key, "")


def _write_samples(tmp_path: Path, text: str = "1\n2\n3\n4\n5\n") -> Path:
    path = tmp_path / "samples.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_renders_histogram_from_file(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path)

    code = main(["-b", "1", "-l", "10", str(path)])

    assert code == 0
    assert capsys.readouterr().out == EXPECTED_UNIT_BINS + "\n"


def test_cli_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("5\n4\n3\n2\n1\n"))

    code = main(["--bin", "1", "--bar-length", "10"])

    assert code == 0
    assert capsys.readouterr().out == EXPECTED_UNIT_BINS + "\n"


def test_cli_empty_input_prints_blank_line(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    assert main([]) == 0
    assert capsys.readouterr().out == "\n"


def test_cli_json_output(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path)

    code = main(["--format", "json", "-b", "1", str(path)])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["bin_width"] == 1.0
    assert [bar["frequency"] for bar in payload["bars"]] == [2, 1, 1, 1]


def test_cli_reports_invalid_line(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path, "1\nnot-a-number\n3\n")

    code = main([str(path)])

    assert code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "line 2" in captured.err


def test_cli_rejects_zero_bin_width(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path)

    assert main(["-b", "0", str(path)]) == 2
    assert "bin_width" in capsys.readouterr().err


def test_cli_reports_too_many_bins(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path, "0\n100\n")

    assert main(["-b", "1", "--max-bins", "10", str(path)]) == 2
    assert "max_bins=10" in capsys.readouterr().err


def test_cli_missing_input_file(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "missing.txt")]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_cli_config_file_and_set_overrides(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path)
    config_path = tmp_path / "histbar.yaml"
    config_path.write_text("histogram:\n  bin_width: 1.0\n  bar_length: 4\n", encoding="utf-8")

    code = main(["--config", str(config_path), "--set", "histogram.bar_length=10", str(path)])

    assert code == 0
    assert capsys.readouterr().out == EXPECTED_UNIT_BINS + "\n"


def test_cli_environment_overrides(tmp_path: Path, monkeypatch, capsys) -> None:
    path = _write_samples(tmp_path)
    monkeypatch.setenv("HISTBAR_BIN_WIDTH", "1")
    monkeypatch.setenv("HISTBAR_BAR_LENGTH", "10")

    assert main([str(path)]) == 0
    assert capsys.readouterr().out == EXPECTED_UNIT_BINS + "\n"


def test_cli_dotenv_in_working_directory(tmp_path: Path, monkeypatch, capsys) -> None:
    path = _write_samples(tmp_path)
    (tmp_path / ".env").write_text("HISTBAR_BIN_WIDTH=1\nHISTBAR_BAR_LENGTH=10\n", encoding="utf-8")

    assert main([str(path)]) == 0
    assert capsys.readouterr().out == EXPECTED_UNIT_BINS + "\n"


def test_cli_rejects_undecodable_input(tmp_path: Path, capsys) -> None:
    path = tmp_path / "samples.bin"
    path.write_bytes(b"1\n\xff\xfe\n3\n")

    assert main([str(path)]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "cannot read" in captured.err


def test_cli_json_stays_strict_for_extreme_values(tmp_path: Path, capsys) -> None:
    path = _write_samples(tmp_path, "-1.7e308\n1.7e308\n")

    assert main(["--format", "json", str(path)]) == 0

    payload = json.loads(
        capsys.readouterr().out,
        parse_constant=lambda token: pytest.fail(f"non-JSON token {token}"),
    )
    assert sum(bar["frequency"] for bar in payload["bars"]) == 2
