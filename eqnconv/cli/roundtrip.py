"""Regression check: cases must be canonical and convert into each other."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from eqnconv.convert import convert
from eqnconv.core.notation import Notation
from eqnconv.utils.canonicalize import canonicalize, cross_round_trip


def load_cases(path: Path) -> list[dict[str, Any]]:
    """Read a case list, either a bare JSON array or ``{"cases": [...]}``."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("cases")
    if not isinstance(payload, list):
        raise ValueError(f"expected a list of cases in {path}")
    cases: list[dict[str, Any]] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"case #{index} is not an object")
        if not isinstance(item.get("latex"), str) and not isinstance(item.get("legacy"), str):
            raise ValueError(f"case #{index} has neither 'latex' nor 'legacy'")
        cases.append(item)
    return cases


def check_case(case: dict[str, Any]) -> list[str]:
    """Return the failure reasons for one case; empty when it passes."""

    latex = case.get("latex")
    legacy = case.get("legacy")
    problems: list[str] = []
    forms = [(Notation.LATEX, latex, Notation.LEGACY), (Notation.LEGACY, legacy, Notation.LATEX)]
    for notation, text, other in forms:
        if not isinstance(text, str):
            continue
        canonical = canonicalize(text, notation)
        if canonical != text:
            problems.append(f"{notation.value} is not canonical: {canonical!r}")
        _, back = cross_round_trip(text, notation, other)
        if back != canonical:
            problems.append(f"{notation.value} does not survive {other.value}: {back!r}")
    if isinstance(latex, str) and isinstance(legacy, str):
        to_legacy = convert(latex, Notation.LATEX, Notation.LEGACY)
        if to_legacy != legacy:
            problems.append(f"latex -> legacy gave {to_legacy!r}")
        to_latex = convert(legacy, Notation.LEGACY, Notation.LATEX)
        if to_latex != latex:
            problems.append(f"legacy -> latex gave {to_latex!r}")
    return problems


def main(argv: list[str] | None = None) -> int:
    """Run round-trip checks over a JSON case file."""

    parser = argparse.ArgumentParser(
        description="Check that equation cases are canonical and convert into each other."
    )
    parser.add_argument("path", help="Path to the JSON case file.")
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first failing case.",
    )
    args = parser.parse_args(argv)

    try:
        cases = load_cases(Path(args.path))
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1

    failures: list[str] = []
    for index, case in enumerate(cases):
        case_id = str(case.get("id") or f"case-{index}")
        problems = check_case(case)
        if not problems:
            print(f"PASS: {case_id}")
            continue
        failures.append(case_id)
        for problem in problems:
            print(f"FAIL: {case_id}: {problem}")
        if args.fail_fast:
            break

    if failures:
        print(f"ERROR: {len(failures)} of {len(cases)} case(s) failed")
        return 1
    print(f"OK: {len(cases)} case(s) passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
