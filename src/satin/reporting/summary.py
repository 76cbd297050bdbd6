from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from satin.pipeline import RunSummary


def build_run_summary_payload(summary: RunSummary) -> dict[str, Any]:
    return {
        "schema_version": "satin.run.v1",
        "status": summary.status,
        "elapsed_s": round(summary.elapsed_s, 3),
        "lasers": [
            {
                "output_file": outcome.laser.output_file,
                "small_signal_gain": outcome.laser.small_signal_gain,
                "discharge_pressure": outcome.laser.discharge_pressure,
                "carbon_dioxide": outcome.laser.carbon_dioxide.value,
                "ok": outcome.ok,
                "path": None if outcome.path is None else str(outcome.path),
                "error": None if outcome.error is None else str(outcome.error),
            }
            for outcome in summary.outcomes
        ],
    }


def write_json(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
