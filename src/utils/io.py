"""I/O helpers for puzzles, traces, and run summaries."""

import json
from pathlib import Path
from typing import Any, Iterator


def load_json(path: Path) -> Any:
    """Load a JSON document from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def iter_json_lines(path: Path) -> Iterator[Any]:
    """Yield one decoded object per non-empty line; undecodable lines are skipped."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def save_json(path: Path, payload: Any) -> None:
    """Write JSON to disk, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)
