"""Append-only JSONL trace logger."""

from __future__ import annotations

import json
from pathlib import Path


class TraceLogger:
    """Writes one compact JSON object per line; the file is only appended to."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("a", encoding="utf-8")

    def append(self, event: dict) -> None:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
        self._fh.write(line + "\n")

    def flush(self) -> None:
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> "TraceLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
