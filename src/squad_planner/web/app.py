"""FastAPI web application for interactive timetable editing.

Endpoints:
  POST /import -> upload a timetable workbook, replacing the current grid
  GET /sessions -> placed and staged sessions
  GET /squads -> squad selector options
  GET /slots -> slot columns derived from placed sessions
  GET /grid/{squad} -> dates x slots grid for one squad
  POST /placement/place {session_id, date, from, to, squad} -> drop onto a cell
  POST /placement/stage {session_id} -> move a placed session to staging
  DELETE /staging/{session_id} -> discard a staged session
  GET /export/{squad} -> xlsx download for one squad
  POST /analysis/{squad} -> hosted-model audit of one squad's schedule

State is held in memory for the life of the process.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..config import get_log_level
from .routers import exchange, placement, sessions

app = FastAPI(title="Squad Planner API", version="0.1.0")
logger = logging.getLogger("squad_planner")
if not logger.handlers:
    _h = logging.StreamHandler()
    _h.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(message)s"))
    logger.addHandler(_h)
logger.setLevel(get_log_level())

app.include_router(exchange.router)
app.include_router(sessions.router)
app.include_router(placement.router)


@app.get("/health")
def health():
    return {"ok": True}
