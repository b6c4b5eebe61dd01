from __future__ import annotations

import pandas as pd

from bed_app.database import dump_json, execute, load_json, query_all, query_one
from bed_app.models import CalculationResult, ValidatedRequest

RUN_TABLE_COLUMNS = [
    "id",
    "run_ts",
    "status",
    "gap_mode",
    "totalDose",
    "totalBeamOn",
    "isocentres",
    "BED",
    "A9",
    "rel_diff",
    "warning",
    "error",
]


def record_run(
    request: ValidatedRequest,
    result: CalculationResult | None,
    error: str | None = None,
) -> int:
    return execute(
        """
        INSERT INTO calculation_runs (gap_mode, request_json, result_json, status, error)
        VALUES (?, ?, ?, ?, ?)
        """,
        (
            request.gap_mode.value,
            dump_json(request.to_payload()),
            dump_json(result.to_dict() if result else {}),
            "success" if result else "failed",
            error,
        ),
    )


def _hydrate(row: dict) -> dict:
    row["request"] = load_json(row.get("request_json"), {})
    row["result"] = load_json(row.get("result_json"), {})
    return row


def list_runs(limit: int = 200) -> list[dict]:
    rows = query_all(
        """
        SELECT *
        FROM calculation_runs
        ORDER BY run_ts DESC, id DESC
        LIMIT ?
        """,
        (limit,),
    )
    return [_hydrate(row) for row in rows]


def get_run(run_id: int) -> dict | None:
    row = query_one("SELECT * FROM calculation_runs WHERE id = ?", (run_id,))
    if not row:
        return None
    return _hydrate(row)


def runs_frame(limit: int = 200) -> pd.DataFrame:
    table_rows = []
    for row in list_runs(limit=limit):
        request = row["request"]
        result = row["result"]
        table_rows.append(
            {
                "id": row["id"],
                "run_ts": row["run_ts"],
                "status": row["status"],
                "gap_mode": row["gap_mode"],
                "totalDose": request.get("totalDose"),
                "totalBeamOn": request.get("totalBeamOn"),
                "isocentres": request.get("isocentres"),
                "BED": result.get("BED"),
                "A9": result.get("A9"),
                "rel_diff": result.get("rel_diff"),
                "warning": result.get("warning"),
                "error": row.get("error"),
            }
        )
    return pd.DataFrame(table_rows, columns=RUN_TABLE_COLUMNS)
