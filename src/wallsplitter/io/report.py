"""Tabular export of the room wall report."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from ..config import REPORT_FLOAT_FORMAT, REPORT_HEADER
from ..core.model import Room
from ..engine.aggregate import RoomReport, iter_rows


def report_frame(report: RoomReport, rooms: Iterable[Room] = ()) -> pd.DataFrame:
    """Build a DataFrame with one row per report row, in report order.

    Rooms given in ``rooms`` that have no rows get a placeholder line with an
    empty wall id and zero measurements.
    """
    records = [
        (row.room_number, row.room_name, row.wall_id, row.length, row.area, row.orientation)
        for row in iter_rows(report, rooms)
    ]
    return pd.DataFrame.from_records(records, columns=list(REPORT_HEADER))


def write_report(report: RoomReport, out_csv_path: Path, rooms: Iterable[Room] = ()) -> Path:
    """Write the report as CSV with numeric fields to two decimals.

    Args:
        report: Rows grouped by room.
        out_csv_path: Destination file; parent directories are created.
        rooms: Rooms the report was built from. A placed room with no
            reportable wall is written as a placeholder line. Without them
            such rooms are omitted.

    Returns:
        The path written.
    """
    out_csv_path = Path(out_csv_path)
    out_csv_path.parent.mkdir(parents=True, exist_ok=True)
    report_frame(report, rooms).to_csv(out_csv_path, index=False, float_format=REPORT_FLOAT_FORMAT)
    return out_csv_path
