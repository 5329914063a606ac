import re

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from ...errors import PlacementError, UnknownSessionError
from ...normalization import normalize_date, normalize_time
from ...schedule import SlotDefinition
from ..schemas import PlaceRequest, StageRequest
from ..state import get_state

router = APIRouter()

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _placement_error(e: PlacementError) -> HTTPException:
    if isinstance(e, UnknownSessionError):
        return HTTPException(404, str(e))
    return HTTPException(409, str(e))


@router.post("/placement/place", response_class=JSONResponse)
def place_session(payload: PlaceRequest):
    target_date = normalize_date(payload.date)
    if not ISO_DATE_RE.match(target_date):
        raise HTTPException(400, f"Invalid date: {payload.date!r}")
    slot = SlotDefinition(normalize_time(payload.from_), normalize_time(payload.to))
    if not slot.from_:
        raise HTTPException(400, "Slot start time required")
    try:
        session = get_state().place(
            payload.session_id, target_date, slot, str(payload.squad)
        )
    except PlacementError as e:
        raise _placement_error(e)
    return {"status": "placed", "session": session.to_dict()}


@router.post("/placement/stage", response_class=JSONResponse)
def stage_session(payload: StageRequest):
    try:
        session = get_state().stage(payload.session_id)
    except PlacementError as e:
        raise _placement_error(e)
    return {"status": "staged", "session": session.to_dict()}


@router.delete("/staging/{session_id}", response_class=JSONResponse)
def discard_session(session_id: str):
    try:
        session = get_state().discard(session_id)
    except PlacementError as e:
        raise _placement_error(e)
    return {"deleted": True, "id": session.id}
