"""Session model and grid derivation.

Features:
 - Session records with process-unique ids
 - Slot columns derived from the sessions actually present, always chronological
 - Squad selector and per-squad date rows for the grid surface
"""

from __future__ import annotations

import itertools
import logging
import secrets
from dataclasses import asdict, dataclass, replace
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from .errors import InvalidSessionError

logger = logging.getLogger(__name__)

SquadId = Union[str, int]

BASE_SQUADS = [1, 2, 3, 4, 5, 6]
UNTITLED_COURSE = "Untitled Course"
UNASSIGNED_MENTOR = "Unassigned"

# one prefix per process, counter afterwards: unique for the life of the collection
_ID_PREFIX = secrets.token_hex(3)
_id_counter = itertools.count(1)


def new_session_id() -> str:
    return f"s{_ID_PREFIX}-{next(_id_counter)}"


def same_squad(a: Optional[SquadId], b: Optional[SquadId]) -> bool:
    return str(a).lower() == str(b).lower()


def _time_key(hhmm: str) -> int:
    try:
        return int(hhmm)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class SlotDefinition:
    from_: str
    to: str

    @property
    def label(self) -> str:
        return f"{self.from_} - {self.to}"

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.from_, "to": self.to}


DEFAULT_SLOTS = [
    SlotDefinition("0830", "1030"),
    SlotDefinition("1030", "1230"),
    SlotDefinition("1330", "1530"),
    SlotDefinition("1530", "1730"),
]


@dataclass(frozen=True)
class Session:
    id: str
    squad_number: SquadId
    date: str
    from_: str
    to: str
    course_id: str
    lu_id: str
    mentor_id: str

    @classmethod
    def create(
        cls,
        squad_number: SquadId,
        date: str,
        from_: str,
        to: str = "",
        course_id: str = UNTITLED_COURSE,
        lu_id: str = "",
        mentor_id: str = UNASSIGNED_MENTOR,
        id: Optional[str] = None,
    ) -> "Session":
        if not from_ or not date:
            raise InvalidSessionError(
                f"Session needs a start time and a date (from={from_!r}, date={date!r})"
            )
        return cls(
            id or new_session_id(),
            squad_number,
            date,
            from_,
            to,
            course_id,
            lu_id,
            mentor_id,
        )

    def moved(
        self, target_date: str, slot: SlotDefinition, squad: SquadId
    ) -> "Session":
        return replace(
            self, squad_number=squad, date=target_date, from_=slot.from_, to=slot.to
        )

    @property
    def sort_key(self):
        return (self.date, _time_key(self.from_))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["from"] = d.pop("from_")
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls.create(
            squad_number=data.get("squad_number", ""),
            date=data.get("date", ""),
            from_=data.get("from", ""),
            to=data.get("to", ""),
            course_id=data.get("course_id", UNTITLED_COURSE),
            lu_id=data.get("lu_id", ""),
            mentor_id=data.get("mentor_id", UNASSIGNED_MENTOR),
            id=data.get("id"),
        )


# ----------------- slot columns -----------------


def derive_slots(sessions: Iterable[Session]) -> List[SlotDefinition]:
    """Distinct grid columns keyed by start time, sorted chronologically.

    When two sessions share a start time with different end times the later one
    in the collection wins. With no sessions the default day layout is returned.
    """
    slot_map: Dict[str, str] = {}
    for s in sessions:
        if s.from_:
            slot_map[s.from_] = s.to
    if not slot_map:
        return list(DEFAULT_SLOTS)
    return [
        SlotDefinition(f, slot_map[f]) for f in sorted(slot_map, key=_time_key)
    ]


# ----------------- grid helpers -----------------


def sessions_for_squad(sessions: Iterable[Session], squad: SquadId) -> List[Session]:
    return [s for s in sessions if same_squad(s.squad_number, squad)]


def squad_options(sessions: Iterable[Session]) -> List[int]:
    found = set()
    for s in sessions:
        try:
            found.add(int(str(s.squad_number)))
        except ValueError:
            continue
    return sorted(set(BASE_SQUADS) | found)


def cycle_squad(squads: List[int], current: SquadId, step: int) -> int:
    if not squads:
        raise ValueError("No squads to cycle through")
    try:
        idx = squads.index(int(str(current)))
    except ValueError:
        idx = -1
    return squads[(idx + step) % len(squads)]


def visible_dates(
    sessions: Iterable[Session], squad: SquadId, today: Optional[date] = None
) -> List[str]:
    dates = sorted({s.date for s in sessions_for_squad(sessions, squad)})
    if not dates:
        return [(today or date.today()).isoformat()]
    return dates


def grid_cell(
    sessions: Iterable[Session], squad: SquadId, day: str, slot: SlotDefinition
) -> Optional[Session]:
    for s in sessions:
        if same_squad(s.squad_number, squad) and s.date == day and s.from_ == slot.from_:
            return s
    return None


def build_grid(sessions: List[Session], squad: SquadId) -> Dict[str, Any]:
    slots = derive_slots(sessions)
    dates = visible_dates(sessions, squad)
    rows = []
    for d in dates:
        cells = []
        for slot in slots:
            s = grid_cell(sessions, squad, d, slot)
            cells.append(s.to_dict() if s else None)
        rows.append({"date": d, "cells": cells})
    logger.debug(
        f"Grid for squad {squad}: {len(dates)} dates x {len(slots)} slots"
    )
    return {
        "squad": str(squad),
        "slots": [s.to_dict() for s in slots],
        "dates": dates,
        "rows": rows,
    }
