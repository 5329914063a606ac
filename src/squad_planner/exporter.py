"""Export one squad's sessions to a flat single-sheet workbook.

Sheet layout written:
    row 1   [squad_id]
    row 2   slot_number, date, from, to, course_id, lu_id, mentor_id
    row 3+  sessions sorted by date then start time, slot_number restarting at 1 each day
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

import pandas as pd

from .schedule import Session, SquadId, sessions_for_squad

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "slot_number",
    "date",
    "from",
    "to",
    "course_id",
    "lu_id",
    "mentor_id",
]
SHEET_NAME = "Schedule"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def sort_sessions(sessions: Iterable[Session]) -> List[Session]:
    return sorted(sessions, key=lambda s: s.sort_key)


def export_rows(sessions: Iterable[Session], squad_id: SquadId) -> List[List[Any]]:
    ordered = sort_sessions(sessions_for_squad(sessions, squad_id))
    rows: List[List[Any]] = [[squad_id], list(EXPORT_COLUMNS)]
    current_date = None
    slot_number = 0
    for s in ordered:
        if s.date != current_date:
            current_date = s.date
            slot_number = 1
        else:
            slot_number += 1
        rows.append(
            [slot_number, s.date, s.from_, s.to, s.course_id, s.lu_id, s.mentor_id]
        )
    return rows


def export_filename(squad_id: SquadId, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"{squad_id}_updated_on_{now:%Y-%m-%d}_{now:%H%M}.xlsx".lower()


def write_schedule(rows: List[List[Any]]) -> bytes:
    bio = io.BytesIO()
    # date/time columns stay text so "0830" keeps its leading zero
    df = pd.DataFrame(rows, dtype=object)
    with pd.ExcelWriter(bio, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, header=False, sheet_name=SHEET_NAME)
    return bio.getvalue()


def export_schedule(
    sessions: Iterable[Session], squad_id: SquadId, now: Optional[datetime] = None
) -> Tuple[str, bytes]:
    """Return (file name, xlsx bytes) for one squad."""
    rows = export_rows(sessions, squad_id)
    filename = export_filename(squad_id, now)
    logger.info("Exporting %d sessions for squad %s to %s", len(rows) - 2, squad_id, filename)
    return filename, write_schedule(rows)
