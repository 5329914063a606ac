"""Pytest configuration.

Disables the hosted analysis call for every test unless a test removes
ANALYSIS_SKIP_REMOTE itself, and provides a helper that writes real .xlsx
timetables with openpyxl.
"""

import io
import os

import pytest
from openpyxl import Workbook

os.environ.setdefault("ANALYSIS_SKIP_REMOTE", "1")


def build_workbook(sheets):
    """sheets: list of (title, rows) -> xlsx bytes."""
    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets:
        ws = wb.create_sheet(title)
        for row in rows:
            ws.append(list(row))
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()


@pytest.fixture
def workbook_file(tmp_path):
    def _write(sheets, name="timetable.xlsx"):
        path = tmp_path / name
        path.write_bytes(build_workbook(sheets))
        return path

    return _write
