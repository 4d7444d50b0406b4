"""Output and run report writers used by the CLI."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any

from extraction.models import ReaderConfig, ReadResult


def build_run_report(result: ReadResult, config: ReaderConfig, root_dir: str) -> dict[str, Any]:
    """Summarize a read for the run report."""
    return {
        "root_dir": os.path.abspath(root_dir),
        "mode": "comments" if config.only_comments else "full",
        "stats": result.stats.to_dict(),
        "prefixes": list(result.functions),
        "warnings": [w.to_dict() for w in result.warnings],
    }


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path


def write_json_output(payload: dict[str, Any], path: str) -> str:
    """Write the extracted mapping as JSON.

    Keys are not re-sorted; the mapping's own prefix order is kept.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return path
