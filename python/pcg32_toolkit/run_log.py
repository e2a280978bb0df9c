from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def append_jsonl(path: Path, row: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(row, separators=(",", ":")))
        handle.write("\n")


class JsonlRunLogger:
    """Appends one timestamped JSON record per call."""

    def __init__(self, *, path: Path) -> None:
        self.path = path

    def log_run(self, payload: dict[str, Any]) -> None:
        append_jsonl(self.path, {"logged_at": now_iso(), **payload})
