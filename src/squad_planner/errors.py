"""Exception types raised by squad_planner.

Cell normalizers never raise; everything here belongs to the workbook
boundary, the Session invariant, or placement transitions.
"""


class SquadPlannerError(Exception):
    """Base class for all squad_planner errors."""


class WorkbookReadError(SquadPlannerError):
    """The workbook bytes could not be read or parsed."""


class EmptyImportError(SquadPlannerError):
    """The workbook parsed but produced no sessions."""


class InvalidSessionError(SquadPlannerError):
    """A Session was built without a start time or a date."""


class PlacementError(SquadPlannerError):
    """Base class for rejected placement transitions."""


class UnknownSessionError(PlacementError):
    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class InvalidTransitionError(PlacementError):
    pass


class SlotOccupiedError(PlacementError):
    def __init__(self, squad: str, date: str, from_: str, occupant_id: str):
        super().__init__(
            f"Slot {from_} on {date} for squad {squad} is occupied by {occupant_id}"
        )
        self.occupant_id = occupant_id
