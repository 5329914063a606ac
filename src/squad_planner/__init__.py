"""squad_planner package initialization.

Public API surface:
 - import_file / import_workbook: spreadsheet timetables -> Session records
 - derive_slots: chronological grid columns from a session collection
 - PlacementState: grid/staging moves for sessions
 - export_schedule: one squad's sessions -> renumbered single-sheet workbook

Normalizers and grid helpers live in their modules.
"""
from .exporter import export_schedule
from .importer import import_file, import_workbook
from .placement import PlacementState
from .schedule import Session, SlotDefinition, derive_slots

__all__ = [
    "import_file",
    "import_workbook",
    "derive_slots",
    "PlacementState",
    "export_schedule",
    "Session",
    "SlotDefinition",
]
