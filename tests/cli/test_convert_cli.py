from __future__ import annotations

import json
from pathlib import Path

import pytest

from eqnconv.cli import convert as cli_convert


@pytest.fixture(autouse=True)
def _clear_notation_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EQNCONV_SOURCE", raising=False)
    monkeypatch.delenv("EQNCONV_TARGET", raising=False)


def test_converts_latex_to_legacy_by_default(capsys) -> None:
    rc = cli_convert.main([r"x \times 3 + \frac{y^{2}}{z}"])
    out = capsys.readouterr().out

    assert rc == 0
    assert out == "x times 3 + y^2 over z\n"


def test_explicit_notations(capsys) -> None:
    rc = cli_convert.main(["--from", "legacy", "--to", "latex", "sqrt x"])
    out = capsys.readouterr().out

    assert rc == 0
    assert out == "\\sqrt{x}\n"


def test_environment_defaults(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setenv("EQNCONV_SOURCE", "hwp")
    monkeypatch.setenv("EQNCONV_TARGET", "tex")

    rc = cli_convert.main(["hat a"])
    out = capsys.readouterr().out

    assert rc == 0
    assert out == "\\hat{a}\n"


def test_recovery_warnings_go_to_stderr(capsys) -> None:
    rc = cli_convert.main(["x +"])
    captured = capsys.readouterr()

    assert rc == 0
    assert captured.out == "x +\n"
    assert "WARNING: expected an operand near offset 3, found end of input" in captured.err


def test_strict_mode_fails(capsys) -> None:
    rc = cli_convert.main(["--strict", "x +"])
    out = capsys.readouterr().out

    assert rc == 1
    assert out.startswith("ERROR: EquationSyntaxError:")


def test_unknown_notation_fails(capsys) -> None:
    rc = cli_convert.main(["--to", "mathml", "x"])
    out = capsys.readouterr().out

    assert rc == 1
    assert "ERROR: Unsupported notation" in out


def test_missing_input_fails(capsys) -> None:
    rc = cli_convert.main([])
    out = capsys.readouterr().out

    assert rc == 1
    assert out.startswith("ERROR:")


def test_file_input_with_output_path(tmp_path: Path, capsys) -> None:
    source = tmp_path / "equations.txt"
    source.write_text("\\sqrt{x}\n\n\\hat{a} + 1\n", encoding="utf-8")
    out_path = tmp_path / "out" / "converted.txt"

    rc = cli_convert.main(["--file", str(source), "--out", str(out_path)])
    out = capsys.readouterr().out

    assert rc == 0
    assert out_path.read_text(encoding="utf-8") == "sqrt x\nhat a + 1\n"
    assert f"OK: 2 expression(s) -> {out_path}" in out


def test_json_output(capsys) -> None:
    rc = cli_convert.main(["--json", "a/b"])
    payload = json.loads(capsys.readouterr().out)

    assert rc == 0
    assert payload["node"] == "BinaryOp"
    assert payload["operator"] == "/"


def test_sexpr_output(capsys) -> None:
    rc = cli_convert.main(["--sexpr", "\\sqrt{x}"])
    out = capsys.readouterr().out

    assert rc == 0
    assert out == '(sqrt "x")\n'


def test_trace_file_records_each_conversion(tmp_path: Path, capsys) -> None:
    trace_path = tmp_path / "trace" / "convert.jsonl"

    rc = cli_convert.main(["--trace", str(trace_path), "x +"])
    capsys.readouterr()

    assert rc == 0
    lines = trace_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["kind"] == "convert"
    assert event["data"]["status"] == "partial"
    assert event["data"]["source"] == "latex"
    assert event["data"]["target"] == "legacy"
    assert event["data"]["output"] == "x +"
