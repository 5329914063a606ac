"""Normalization of loosely formatted timetable cells.

Expose normalize_time, normalize_date and extract_squad. All three accept a raw
cell value (or an already classified cell) and never raise: malformed input
degrades to "" or to the original text so a messy sheet imports partially.
"""

from __future__ import annotations

import logging
import math
import re
import warnings
from datetime import timedelta, timezone
from typing import Any, Tuple

import pandas as pd

from .cells import (
    SHEET_EPOCH,
    DateTimeCell,
    EmptyCell,
    NumberCell,
    cell_text,
    classify_cell,
)

logger = logging.getLogger(__name__)

AMPM_RE = re.compile(r"(am|pm)", re.IGNORECASE)
LETTERS_RE = re.compile(r"[a-z]", re.IGNORECASE)
NON_DIGIT_RE = re.compile(r"[^0-9]")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
SQUAD_DIGITS_RE = re.compile(r"[0-9]+")

# Numbers above this are date serials; below it they are time fractions or HHmm.
DATE_SERIAL_THRESHOLD = 30000
MINUTES_PER_DAY = 1440


# ----------------- helpers -----------------


def _digits_to_int(part: str) -> int:
    digits = NON_DIGIT_RE.sub("", part)
    return int(digits) if digits else 0


def _split_hhmm(raw: str) -> Tuple[int, int]:
    """Split a compact HHmm / Hmm token into hours and minutes."""
    padded = NON_DIGIT_RE.sub("", raw).zfill(4)
    return _digits_to_int(padded[:2]), _digits_to_int(padded[2:4])


def _railway(hours: int, minutes: int) -> str:
    return f"{hours % 24:02d}{minutes % 60:02d}"


def _time_from_text(text: str) -> str:
    text = text.strip()
    if not NON_DIGIT_RE.sub("", text):
        # nothing numeric to read (e.g. "TBD")
        return ""
    marker = AMPM_RE.search(text)
    parts = [p.strip() for p in LETTERS_RE.sub("", text).split(":")]
    parts = [p for p in parts if p]
    hours = minutes = 0
    if len(parts) >= 2:
        hours, minutes = _digits_to_int(parts[0]), _digits_to_int(parts[1])
    elif len(parts) == 1:
        hours, minutes = _split_hhmm(parts[0])
    if marker:
        is_pm = marker.group(1).lower() == "pm"
        if is_pm and hours < 12:
            hours += 12
        if not is_pm and hours == 12:
            hours = 0
    return _railway(hours, minutes)


def _time_from_number(number: float) -> str:
    if not math.isfinite(number):
        return ""
    if 0 <= number < 1:
        total = int(math.floor(number * MINUTES_PER_DAY + 0.5))
        return _railway(total // 60, total % 60)
    hours, minutes = _split_hhmm(str(int(number)))
    return _railway(hours, minutes)


def _date_from_serial(serial: float) -> str:
    d = SHEET_EPOCH + timedelta(days=int(serial))
    return f"{d.year}-{d.month:02d}-{d.day:02d}"


def _date_from_text(text: str) -> str:
    text = text.strip()
    if ISO_DATE_RE.match(text):
        return text
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug("Unparseable date %r kept verbatim: %s", text, e)
        return text
    if pd.isna(parsed):
        return text
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert("UTC")
    return parsed.date().isoformat()


# ----------------- public API -----------------


def normalize_time(value: Any) -> str:
    """Return 4-digit railway time ("1330") for a time-like cell, "" if absent."""
    cell = classify_cell(value)
    if isinstance(cell, EmptyCell):
        return ""
    if isinstance(cell, DateTimeCell):
        return _railway(cell.moment.hour, cell.moment.minute)
    if isinstance(cell, NumberCell):
        return _time_from_number(cell.number)
    return _time_from_text(cell.text)


def normalize_date(value: Any) -> str:
    """Return YYYY-MM-DD for a date-like cell, "" if absent.

    Unparseable text comes back trimmed but otherwise unchanged.
    """
    cell = classify_cell(value)
    if isinstance(cell, EmptyCell):
        return ""
    if isinstance(cell, NumberCell) and cell.number > DATE_SERIAL_THRESHOLD:
        try:
            return _date_from_serial(cell.number)
        except (OverflowError, ValueError):
            return cell_text(cell).strip()
    if isinstance(cell, DateTimeCell):
        moment = cell.moment
        if moment.tzinfo is not None:
            moment = moment.astimezone(timezone.utc)
        return moment.date().isoformat()
    return _date_from_text(cell_text(cell))


def extract_squad(value: Any) -> str:
    """Pull the squad identifier out of a header cell like "Squad 4" or "SQ-12"."""
    cell = classify_cell(value)
    if isinstance(cell, EmptyCell):
        return ""
    text = cell_text(cell).strip()
    m = SQUAD_DIGITS_RE.search(text)
    return m.group(0) if m else text

