from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ...schedule import build_grid, cycle_squad, derive_slots, squad_options
from ..state import get_state

router = APIRouter()


@router.get("/sessions", response_class=JSONResponse)
def list_sessions():
    state = get_state()
    return {
        "placed": [s.to_dict() for s in state.placed()],
        "staged": [s.to_dict() for s in state.staged()],
    }


@router.get("/squads", response_class=JSONResponse)
def list_squads():
    return {"squads": squad_options(get_state().placed())}


@router.get("/squads/{squad}/next", response_class=JSONResponse)
def next_squad(squad: str, step: int = Query(1)):
    """Previous (step=-1) or next squad, wrapping around the option list."""
    return {"squad": cycle_squad(squad_options(get_state().placed()), squad, step)}


@router.get("/slots", response_class=JSONResponse)
def list_slots():
    return {"slots": [s.to_dict() for s in derive_slots(get_state().placed())]}


@router.get("/grid/{squad}", response_class=JSONResponse)
def get_grid(squad: str):
    return build_grid(get_state().placed(), squad)
