"""Convert equation markup between LaTeX and the legacy notation."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from eqnconv.convert import ConversionResult, convert_with_report
from eqnconv.core.notation import Notation
from eqnconv.render.sexpr import render_sexpr
from eqnconv.trace import TraceLogger, conversion_event
from eqnconv.utils.canonicalize import expr_to_stable_json

DEFAULT_SOURCE = "latex"
DEFAULT_TARGET = "legacy"


def resolve_notations(source: str | None, target: str | None) -> tuple[Notation, Notation]:
    """Resolve CLI notation flags, falling back to EQNCONV_SOURCE / EQNCONV_TARGET."""

    source_name = source or os.getenv("EQNCONV_SOURCE") or DEFAULT_SOURCE
    target_name = target or os.getenv("EQNCONV_TARGET") or DEFAULT_TARGET
    return Notation.coerce(source_name), Notation.coerce(target_name)


class _SafeTraceLogger:
    """Best-effort trace logger that never raises to CLI flow."""

    def __init__(self, path: Path) -> None:
        self._logger: TraceLogger | None = None
        self._enabled = True
        try:
            self._logger = TraceLogger(str(path))
        except Exception as exc:
            self._enabled = False
            print(f"WARNING: conversion trace disabled: {exc}", file=sys.stderr)

    def append(self, event: dict) -> None:
        if not self._enabled or self._logger is None:
            return
        try:
            self._logger.append(event)
        except Exception as exc:
            self._enabled = False
            print(f"WARNING: conversion trace failed: {exc}", file=sys.stderr)

    def close(self) -> None:
        if self._logger is None:
            return
        try:
            self._logger.close()
        except Exception as exc:
            print(f"WARNING: conversion trace close failed: {exc}", file=sys.stderr)


def _read_inputs(expr: str | None, file: str | None) -> list[str]:
    if file:
        text = Path(file).read_text(encoding="utf-8")
        return [line.strip() for line in text.splitlines() if line.strip()]
    if expr is None:
        raise ValueError("an expression or --file is required.")
    return [expr]


def _format_result(result: ConversionResult, *, as_json: bool, as_sexpr: bool) -> str:
    if as_json:
        return expr_to_stable_json(result.ast)
    if as_sexpr:
        return render_sexpr(result.ast)
    return result.output


def main(argv: list[str] | None = None) -> int:
    """Run the conversion CLI."""

    parser = argparse.ArgumentParser(description="Convert equations between LaTeX and legacy markup.")
    parser.add_argument("expr", nargs="?", help="Equation text to convert.")
    parser.add_argument("--file", help="Convert every non-empty line of this file instead.")
    parser.add_argument(
        "--from",
        dest="source",
        help=f"Source notation (default: $EQNCONV_SOURCE or {DEFAULT_SOURCE}).",
    )
    parser.add_argument(
        "--to",
        dest="target",
        help=f"Target notation (default: $EQNCONV_TARGET or {DEFAULT_TARGET}).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of recovering from malformed input.",
    )
    output_mode = parser.add_mutually_exclusive_group()
    output_mode.add_argument("--json", action="store_true", help="Print the parsed AST as JSON.")
    output_mode.add_argument(
        "--sexpr", action="store_true", help="Print the parsed AST as an S-expression."
    )
    parser.add_argument("--out", help="Write results to this file instead of stdout.")
    parser.add_argument("--trace", help="Append one JSONL trace event per conversion here.")
    args = parser.parse_args(argv)

    trace_logger: _SafeTraceLogger | None = None
    try:
        source, target = resolve_notations(args.source, args.target)
        inputs = _read_inputs(args.expr, args.file)
        if args.trace:
            trace_logger = _SafeTraceLogger(Path(args.trace))

        lines: list[str] = []
        for text in inputs:
            result = convert_with_report(text, source, target, strict=args.strict)
            if trace_logger is not None:
                trace_logger.append(
                    conversion_event(result, source=source.value, target=target.value)
                )
            for diagnostic in result.diagnostics:
                print(f"WARNING: {diagnostic.message}", file=sys.stderr)
            lines.append(_format_result(result, as_json=args.json, as_sexpr=args.sexpr))

        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
            print(f"OK: {len(lines)} expression(s) -> {out_path}")
        else:
            for line in lines:
                print(line)
        return 0
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1
    finally:
        if trace_logger is not None:
            trace_logger.close()


if __name__ == "__main__":
    raise SystemExit(main())
