"""Typed view of raw spreadsheet cell values.

A cell read from a sheet may arrive as text, a number, a date-time, or
nothing at all depending on how the spreadsheet was formatted. classify_cell
collapses those into a closed set of variants so the normalizers can branch
on the variant instead of probing runtime types.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Union

import pandas as pd

# Day zero of the 1900 date system; time-only cells are anchored here.
SHEET_EPOCH = datetime(1899, 12, 30)


@dataclass(frozen=True)
class EmptyCell:
    pass


@dataclass(frozen=True)
class TextCell:
    text: str


@dataclass(frozen=True)
class NumberCell:
    number: float


@dataclass(frozen=True)
class DateTimeCell:
    moment: datetime


Cell = Union[EmptyCell, TextCell, NumberCell, DateTimeCell]
CELL_TYPES = (EmptyCell, TextCell, NumberCell, DateTimeCell)

EMPTY = EmptyCell()


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def classify_cell(value: Any) -> Cell:
    if isinstance(value, CELL_TYPES):
        return value
    if _is_missing(value):
        return EMPTY
    if isinstance(value, datetime):
        # pandas.Timestamp is a datetime subclass; hand back a plain datetime
        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()
        return DateTimeCell(value)
    if isinstance(value, date):
        return DateTimeCell(datetime(value.year, value.month, value.day))
    if isinstance(value, time):
        return DateTimeCell(
            SHEET_EPOCH.replace(
                hour=value.hour, minute=value.minute, second=value.second
            )
        )
    if isinstance(value, bool):
        # spreadsheet TRUE/FALSE is a label, not 0/1
        return TextCell(str(value))
    if isinstance(value, numbers.Real):
        return NumberCell(value)
    text = str(value)
    if not text.strip():
        return EMPTY
    return TextCell(text)


def cell_text(cell: Cell) -> str:
    """String form of a cell, the way it would print in the sheet."""
    if isinstance(cell, EmptyCell):
        return ""
    if isinstance(cell, TextCell):
        return cell.text
    if isinstance(cell, NumberCell):
        n = cell.number
        if isinstance(n, float) and n.is_integer():
            return str(int(n))
        return str(n)
    return cell.moment.isoformat()
