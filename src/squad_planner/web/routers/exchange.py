import io
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse, StreamingResponse

from ...analysis import analyze_squad
from ...errors import EmptyImportError, WorkbookReadError
from ...exporter import XLSX_MEDIA_TYPE, export_schedule
from ...importer import import_file, is_supported_workbook
from ...schedule import squad_options
from ..state import get_state

router = APIRouter()
logger = logging.getLogger("squad_planner.web")


@router.post("/import", response_class=JSONResponse)
def import_timetable(file: UploadFile = File(...)):
    """Upload an XLSX timetable; replaces the current grid and clears staging."""
    filename = file.filename or "uploaded.xlsx"
    if not is_supported_workbook(filename):
        raise HTTPException(400, "Unsupported file type")
    contents = file.file.read()
    try:
        sessions = import_file(contents)
    except (WorkbookReadError, EmptyImportError) as e:
        logger.warning("Import of %s failed: %s", filename, e)
        raise HTTPException(400, str(e))
    state = get_state()
    state.load(sessions)
    logger.info("Imported %d sessions from %s", len(sessions), filename)
    return {
        "count": len(sessions),
        "squads": squad_options(sessions),
        "first_squad": str(sessions[0].squad_number),
    }


@router.get("/export/{squad}")
def export_xlsx(squad: str):
    # staged sessions are never exported
    filename, content = export_schedule(get_state().placed(), squad)
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/analysis/{squad}", response_class=JSONResponse)
def analyze(squad: str):
    return {"squad": squad, "analysis": analyze_squad(get_state().placed(), squad)}
