from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .contracts import RunSummary


def serialize_run_summary(summary: RunSummary) -> str:
    payload: dict[str, Any] = summary.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_run_summary_json(*, summary: RunSummary, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_run_summary(summary), encoding="utf-8")
