from datetime import datetime, time

import pytest

from squad_planner.errors import EmptyImportError, WorkbookReadError
from squad_planner.importer import import_file, import_workbook, read_workbook

SQUAD_4_ROWS = [
    ["Squad 4"],
    ["slot", "date", "from", "to"],
    ["", "2024-01-01", "0830", "1030", "Intro"],
    ["", "", "1030", "1230", "Advanced"],
]


def test_blank_date_continues_previous_row():
    sessions = import_workbook({"Sheet1": SQUAD_4_ROWS})
    assert len(sessions) == 2
    assert [s.date for s in sessions] == ["2024-01-01", "2024-01-01"]
    assert {s.squad_number for s in sessions} == {"4"}
    assert [s.course_id for s in sessions] == ["Intro", "Advanced"]
    assert [(s.from_, s.to) for s in sessions] == [("0830", "1030"), ("1030", "1230")]


def test_defaults_for_missing_columns():
    rows = [["SQ-2"], ["", "2024-02-01", "9:00", "11:00"]]
    (s,) = import_workbook({"a": rows})
    assert s.course_id == "Untitled Course"
    assert s.lu_id == ""
    assert s.mentor_id == "Unassigned"


def test_optional_columns_are_kept():
    rows = [["Squad 1"], ["1", "2024-02-01", 900, 1100, "Math", "LU-7", "Ms Lee"]]
    (s,) = import_workbook({"a": rows})
    assert (s.course_id, s.lu_id, s.mentor_id) == ("Math", "LU-7", "Ms Lee")


def test_sheet_without_squad_label_contributes_nothing():
    rows = [[None], ["", "2024-01-01", "0830", "1030", "Intro"]]
    assert import_workbook({"empty": rows}) == []
    assert import_workbook({"no rows": []}) == []


def test_alphabetic_squad_label_round_trips():
    rows = [["  Falcons "], ["", "2024-01-01", "0830", "1030"]]
    (s,) = import_workbook({"a": rows})
    assert s.squad_number == "Falcons"


def test_short_rows_label_rows_and_unusable_rows_are_skipped():
    rows = [
        ["Squad 3"],
        ["", "2024-01-01"],
        ["Date", "2024-01-01", "0830", "1030"],
        ["SQUAD schedule", "2024-01-01", "0830", "1030"],
        ["", "2024-01-01", "", "1030", "No start"],
        ["", "2024-01-02", "TBD", "1030", "Unknown start"],
        ["", "2024-01-03", "1330", "", "No end"],
    ]
    sessions = import_workbook({"a": rows})
    assert len(sessions) == 1
    assert sessions[0].date == "2024-01-03"
    assert sessions[0].to == ""


def test_dropped_row_does_not_advance_date_tracker():
    rows = [
        ["Squad 5"],
        ["", "2024-01-01", "0830", "1030"],
        ["", "2024-01-09", "", "1030"],
        ["", "", "1330", "1530"],
    ]
    sessions = import_workbook({"a": rows})
    assert [s.date for s in sessions] == ["2024-01-01", "2024-01-01"]


def test_sheets_do_not_share_squad_or_last_date():
    first = [["Squad 1"], ["", "2024-01-01", "0830", "1030"]]
    second = [["Squad 2"], ["", "", "0830", "1030"], ["", "2024-05-05", "1030", "1230"]]
    sessions = import_workbook({"one": first, "two": second})
    assert [(s.squad_number, s.date) for s in sessions] == [
        ("1", "2024-01-01"),
        ("2", "2024-05-05"),
    ]


def test_ids_are_unique():
    sessions = import_workbook({"a": SQUAD_4_ROWS, "b": SQUAD_4_ROWS})
    assert len({s.id for s in sessions}) == 4


def test_read_real_workbook_with_typed_cells(workbook_file):
    path = workbook_file(
        [
            (
                "Squad 7",
                [
                    ["Squad 7"],
                    ["Slot", "Date", "From", "To", "Course", "LU", "Mentor"],
                    [1, datetime(2024, 3, 4), time(8, 30), time(10, 30), "Math", None, "Ms X"],
                    [2, None, "1:30 PM", "3:30 PM", "Science"],
                ],
            ),
            ("Notes", [["free text only"]]),
            ("Squad 8", [["Squad 8"], [None, 45292, 1330, 1530, "Art", "LU-1"]]),
        ]
    )
    sheets = read_workbook(str(path))
    assert list(sheets) == ["Squad 7", "Notes", "Squad 8"]
    assert sheets["Squad 7"][0] == ["Squad 7"]
    sessions = import_file(str(path))
    summary = [
        (s.squad_number, s.date, s.from_, s.to, s.course_id, s.lu_id, s.mentor_id)
        for s in sessions
    ]
    assert summary == [
        ("7", "2024-03-04", "0830", "1030", "Math", "", "Ms X"),
        ("7", "2024-03-04", "1330", "1530", "Science", "", "Unassigned"),
        ("8", "2024-01-01", "1330", "1530", "Art", "LU-1", "Unassigned"),
    ]


def test_import_file_accepts_bytes(workbook_file):
    path = workbook_file([("s", SQUAD_4_ROWS)])
    sessions = import_file(path.read_bytes())
    assert len(sessions) == 2


def test_unreadable_workbook_raises():
    with pytest.raises(WorkbookReadError):
        import_file(b"this is not a spreadsheet")


def test_workbook_without_sessions_raises(workbook_file):
    path = workbook_file([("s", [["Squad 1"], ["slot", "date", "from", "to"]])])
    with pytest.raises(EmptyImportError):
        import_file(str(path))


def test_literal_na_like_labels_stay_text(workbook_file):
    path = workbook_file(
        [
            ("Squad 2", [["Squad 2"], ["", "2024-01-01", "0830", "1030", "None", "NA", "N/A"]]),
            ("NA", [["NA"], ["", "2024-01-02", "1330", "1530", "null", "nan", "n/a"]]),
        ]
    )
    sessions = import_file(str(path))
    summary = [(s.squad_number, s.course_id, s.lu_id, s.mentor_id) for s in sessions]
    assert summary == [
        ("2", "None", "NA", "N/A"),
        ("NA", "null", "nan", "n/a"),
    ]


def test_legacy_xls_path_is_refused(tmp_path):
    path = tmp_path / "timetable.xls"
    path.write_bytes(b"legacy")
    with pytest.raises(WorkbookReadError, match="Unsupported file type"):
        read_workbook(str(path))
