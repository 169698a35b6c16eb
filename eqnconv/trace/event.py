"""Trace event records for conversion runs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from eqnconv.convert import ConversionResult


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def new_event(kind: str, message: str, *, data: dict | None = None) -> dict:
    """Create a trace event dict with a fresh id and UTC timestamp."""

    return {
        "event_id": uuid4().hex,
        "ts": _utc_now(),
        "kind": kind,
        "message": message,
        "data": data,
    }


def conversion_event(result: "ConversionResult", *, source: str, target: str) -> dict:
    """Summarize one conversion as a ``convert`` event."""

    return new_event(
        "convert",
        f"{source} -> {target}: {result.status}",
        data={
            "source": source,
            "target": target,
            "status": result.status,
            "input": result.source_text,
            "output": result.output,
            "diagnostics": [item.to_dict() for item in result.diagnostics],
        },
    )
