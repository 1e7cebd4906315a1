"""Local history of completed workout sessions."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

from fittrack.config import get_settings
from fittrack.workout.model import SessionSummary


logger = logging.getLogger(__name__)


def _default_sessions_path() -> Path:
    return get_settings().data_dir / "sessions.jsonl"


def append_summary(summary: SessionSummary, path: Path | None = None) -> None:
    target = path or _default_sessions_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(asdict(summary), ensure_ascii=True) + "\n")


def load_recent_summaries(
    limit: int = 20, path: Path | None = None
) -> list[SessionSummary]:
    target = path or _default_sessions_path()
    if not target.exists():
        return []

    lines = target.read_text(encoding="utf-8").splitlines()
    out: list[SessionSummary] = []
    for raw in reversed(lines):
        if not raw.strip():
            continue
        try:
            item = json.loads(raw)
            out.append(SessionSummary(**item))
        except (json.JSONDecodeError, TypeError):
            logger.warning("Skipping unreadable session line in %s", target)
            continue
        if len(out) >= limit:
            break
    return out
