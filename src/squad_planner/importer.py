"""Workbook import: raw sheet rows -> flat list of Session records.

Sheet layout:
    A1            squad label ("Squad 4", "SQ-12", 4 ...)
    row 2+        [label, date, from, to, course_id?, lu_id?, mentor_id?]

Rows whose first cell looks like a header ("slot", "date", "squad") are skipped.
A blank date cell continues the date of the row above within the same sheet.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Any, BinaryIO, Dict, List, Mapping, Sequence, Union

import pandas as pd

from .cells import EmptyCell, cell_text, classify_cell
from .errors import EmptyImportError, WorkbookReadError
from .normalization import extract_squad, normalize_date, normalize_time
from .schedule import UNASSIGNED_MENTOR, UNTITLED_COURSE, Session

logger = logging.getLogger(__name__)

HEADER_KEYWORDS = ["slot", "date", "squad"]
MIN_ROW_CELLS = 3
# openpyxl reads the xlsx container only; legacy .xls is refused up front
SUPPORTED_EXTENSIONS = (".xlsx",)

# column positions within a data row
COL_DATE = 1
COL_FROM = 2
COL_TO = 3
COL_COURSE = 4
COL_LU = 5
COL_MENTOR = 6

WorkbookSource = Union[str, os.PathLike, bytes, BinaryIO]
SheetRows = List[List[Any]]


# ----------------- reading -----------------


def is_supported_workbook(filename: str) -> bool:
    return filename.lower().endswith(SUPPORTED_EXTENSIONS)


def _trim_row(values: Sequence[Any]) -> List[Any]:
    row = list(values)
    while row and isinstance(classify_cell(row[-1]), EmptyCell):
        row.pop()
    return row


def read_workbook(source: WorkbookSource) -> Dict[str, SheetRows]:
    """Read every sheet as raw row arrays (no header decoding), in sheet order.

    Cell text is taken literally: labels such as "NA" or "None" stay text
    instead of becoming missing values. Trailing empty cells are trimmed from
    each row so row length reflects the last filled column. Any read or parse
    failure raises WorkbookReadError.
    """
    if isinstance(source, (str, os.PathLike)) and not is_supported_workbook(
        os.fspath(source)
    ):
        raise WorkbookReadError(f"Unsupported file type: {os.fspath(source)}")
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        frames = pd.read_excel(
            source,
            sheet_name=None,
            header=None,
            dtype=object,
            keep_default_na=False,
            engine="openpyxl",
        )
    except Exception as e:
        raise WorkbookReadError(f"Could not read workbook: {e}") from e
    sheets: Dict[str, SheetRows] = {}
    for name, df in frames.items():
        sheets[str(name)] = [
            _trim_row(r) for r in df.itertuples(index=False, name=None)
        ]
    return sheets


# ----------------- import -----------------


def _cell(row: Sequence[Any], idx: int) -> str:
    if idx >= len(row):
        return ""
    return cell_text(classify_cell(row[idx]))


def _is_label_row(row: Sequence[Any]) -> bool:
    first = _cell(row, 0).lower()
    return any(k in first for k in HEADER_KEYWORDS)


def import_sheet(name: str, rows: Sequence[Sequence[Any]]) -> List[Session]:
    if not rows:
        logger.debug(f"Skipping sheet '{name}': no rows")
        return []
    squad = extract_squad(rows[0][0] if rows[0] else None)
    if not squad:
        logger.debug(f"Skipping sheet '{name}': no squad label in A1")
        return []
    sessions: List[Session] = []
    last_date = ""
    dropped = 0
    for row in rows[1:]:
        if len(row) < MIN_ROW_CELLS or _is_label_row(row):
            continue
        session_date = normalize_date(row[COL_DATE]) or last_date
        from_time = normalize_time(row[COL_FROM])
        to_time = normalize_time(row[COL_TO]) if len(row) > COL_TO else ""
        if not (from_time and session_date):
            dropped += 1
            continue
        sessions.append(
            Session.create(
                squad_number=squad,
                date=session_date,
                from_=from_time,
                to=to_time,
                course_id=_cell(row, COL_COURSE) or UNTITLED_COURSE,
                lu_id=_cell(row, COL_LU),
                mentor_id=_cell(row, COL_MENTOR) or UNASSIGNED_MENTOR,
            )
        )
        last_date = session_date
    logger.info(
        "Sheet '%s': squad %s, %d sessions (%d rows dropped)",
        name,
        squad,
        len(sessions),
        dropped,
    )
    return sessions


def import_workbook(sheets: Mapping[str, Sequence[Sequence[Any]]]) -> List[Session]:
    """Build sessions from every sheet in order; sheets never share state."""
    sessions: List[Session] = []
    for name, rows in sheets.items():
        sessions.extend(import_sheet(name, rows))
    return sessions


def import_file(source: WorkbookSource) -> List[Session]:
    """Read and import a workbook; a workbook with no usable sessions is an error."""
    sessions = import_workbook(read_workbook(source))
    if not sessions:
        raise EmptyImportError("Import failed: No valid session data found.")
    return sessions
