"""Placement state: which sessions sit on the grid and which are staged.

A single mapping from session id to (session, status) is the source of truth,
so a session is always in exactly one of the two sets. Moves are status
transitions:

    place    placed|staged -> placed   (clone with new squad/date/slot, same id)
    stage    placed        -> staged   (record kept unmodified)
    discard  staged        -> removed

Collision policy for a drop onto an occupied (squad, date, from) cell:
    "replace"  previous occupant is moved to staging (default)
    "reject"   SlotOccupiedError is raised and nothing changes
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .errors import InvalidTransitionError, SlotOccupiedError, UnknownSessionError
from .schedule import Session, SlotDefinition, SquadId, same_squad

logger = logging.getLogger(__name__)

COLLISION_POLICIES = ("replace", "reject")


class PlacementStatus(str, enum.Enum):
    PLACED = "placed"
    STAGED = "staged"


@dataclass
class PlacementEntry:
    session: Session
    status: PlacementStatus


class PlacementState:
    def __init__(
        self, sessions: Iterable[Session] = (), on_collision: str = "replace"
    ):
        if on_collision not in COLLISION_POLICIES:
            raise ValueError(
                f"on_collision must be one of {COLLISION_POLICIES}, got {on_collision!r}"
            )
        self.on_collision = on_collision
        self._entries: Dict[str, PlacementEntry] = {}
        self.load(sessions)

    # ----------------- queries -----------------

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._entries

    def _with_status(self, status: PlacementStatus) -> List[Session]:
        return [e.session for e in self._entries.values() if e.status is status]

    def placed(self) -> List[Session]:
        return self._with_status(PlacementStatus.PLACED)

    def staged(self) -> List[Session]:
        return self._with_status(PlacementStatus.STAGED)

    def get(self, session_id: str) -> Session:
        return self._entry(session_id).session

    def status_of(self, session_id: str) -> PlacementStatus:
        return self._entry(session_id).status

    def occupant(self, squad: SquadId, date: str, from_: str) -> Optional[Session]:
        for s in self.placed():
            if same_squad(s.squad_number, squad) and s.date == date and s.from_ == from_:
                return s
        return None

    def _entry(self, session_id: str) -> PlacementEntry:
        try:
            return self._entries[session_id]
        except KeyError:
            raise UnknownSessionError(session_id) from None

    # ----------------- transitions -----------------

    def load(self, sessions: Iterable[Session]) -> None:
        """Replace everything with a freshly imported collection, all placed."""
        self._entries = {
            s.id: PlacementEntry(s, PlacementStatus.PLACED) for s in sessions
        }
        logger.debug(f"Loaded {len(self._entries)} sessions into placement state")

    def place(
        self,
        session_id: str,
        target_date: str,
        target_slot: SlotDefinition,
        target_squad: SquadId,
    ) -> Session:
        entry = self._entry(session_id)
        occupant = self.occupant(target_squad, target_date, target_slot.from_)
        if occupant is not None and occupant.id != session_id:
            if self.on_collision == "reject":
                raise SlotOccupiedError(
                    str(target_squad), target_date, target_slot.from_, occupant.id
                )
            self._entries[occupant.id].status = PlacementStatus.STAGED
            logger.debug(f"Session {occupant.id} displaced to staging")
        updated = entry.session.moved(target_date, target_slot, target_squad)
        if entry.status is PlacementStatus.STAGED:
            # leaves staging and joins the end of the placed collection
            del self._entries[session_id]
        self._entries[session_id] = PlacementEntry(updated, PlacementStatus.PLACED)
        logger.debug(
            f"Session {session_id} placed at squad={target_squad} date={target_date} from={target_slot.from_}"
        )
        return updated

    def stage(self, session_id: str) -> Session:
        entry = self._entry(session_id)
        if entry.status is not PlacementStatus.PLACED:
            raise InvalidTransitionError(f"Session {session_id} is already staged")
        entry.status = PlacementStatus.STAGED
        logger.debug(f"Session {session_id} staged")
        return entry.session

    def discard(self, session_id: str) -> Session:
        entry = self._entry(session_id)
        if entry.status is not PlacementStatus.STAGED:
            raise InvalidTransitionError(
                f"Session {session_id} is on the grid; stage it before discarding"
            )
        del self._entries[session_id]
        logger.debug(f"Session {session_id} discarded")
        return entry.session
