"""Schedule audit through a hosted text-generation model.

The core only hands over a plain-text summary and gets text back. Every
failure collapses to ANALYSIS_FALLBACK; there are no retries.
"""

from __future__ import annotations

import logging
from typing import Iterable

import requests

from . import config
from .schedule import Session, SquadId, sessions_for_squad

logger = logging.getLogger(__name__)

ANALYSIS_FALLBACK = "Error analyzing schedule."
EMPTY_ANSWER = "Audit completed."
NO_SESSIONS = "No sessions recorded."
PROMPT = (
    "Analyze this squad schedule and identify any obvious overlaps or mentor "
    "conflicts. Suggest optimizations if possible.\nSchedule data: {schedule}"
)
TEMPERATURE = 0.7


def build_analysis_text(sessions: Iterable[Session], squad: SquadId) -> str:
    squad_sessions = sessions_for_squad(sessions, squad)
    if squad_sessions:
        summary = "\n".join(
            f"Date: {s.date} @ {s.from_}: {s.course_id}" for s in squad_sessions
        )
    else:
        summary = NO_SESSIONS
    return f"Squad: {squad}\nSchedule:\n{summary}"


def _extract_text(data) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        raise ValueError("response has no candidates")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


def analyze_schedule(schedule_text: str) -> str:
    if config.analysis_remote_disabled():
        logger.warning("ANALYSIS_SKIP_REMOTE=1; returning fallback analysis")
        return ANALYSIS_FALLBACK
    api_key = config.get_gemini_api_key()
    if not api_key:
        logger.error("Schedule analysis unavailable: GEMINI_API_KEY not set")
        return ANALYSIS_FALLBACK
    url = f"{config.get_gemini_api_url()}/models/{config.get_gemini_model()}:generateContent"
    payload = {
        "contents": [{"parts": [{"text": PROMPT.format(schedule=schedule_text)}]}],
        "generationConfig": {"temperature": TEMPERATURE},
    }
    try:
        resp = requests.post(
            url,
            params={"key": api_key},
            json=payload,
            timeout=config.get_analysis_timeout(),
        )
        if resp.status_code != 200:
            logger.error(
                "Schedule analysis HTTP %s: %s", resp.status_code, resp.text[:200]
            )
            return ANALYSIS_FALLBACK
        text = _extract_text(resp.json())
    except (requests.RequestException, ValueError, AttributeError) as e:
        logger.error("Schedule analysis error: %s", e)
        return ANALYSIS_FALLBACK
    return text or EMPTY_ANSWER


def analyze_squad(sessions: Iterable[Session], squad: SquadId) -> str:
    return analyze_schedule(build_analysis_text(sessions, squad))
