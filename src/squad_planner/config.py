"""Environment-driven settings.

Values are read through getters rather than cached at import so a changed
environment (or a .env loaded later) is picked up.
"""

import os

from dotenv import load_dotenv

from .placement import COLLISION_POLICIES

load_dotenv()

DEFAULT_GEMINI_MODEL = "gemini-1.5-pro"
DEFAULT_GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta"


def get_gemini_api_key():
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")


def get_gemini_model() -> str:
    return os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)


def get_gemini_api_url() -> str:
    return os.environ.get("GEMINI_API_URL", DEFAULT_GEMINI_API_URL).rstrip("/")


def get_analysis_timeout() -> float:
    try:
        return float(os.environ.get("ANALYSIS_TIMEOUT", "30"))
    except ValueError:
        return 30.0


def analysis_remote_disabled() -> bool:
    return os.environ.get("ANALYSIS_SKIP_REMOTE") == "1"


def get_collision_policy() -> str:
    policy = os.environ.get("SQUAD_PLANNER_COLLISION", "replace").strip().lower()
    if policy not in COLLISION_POLICIES:
        raise ValueError(
            f"SQUAD_PLANNER_COLLISION must be one of {COLLISION_POLICIES}, got {policy!r}"
        )
    return policy


def get_log_level() -> str:
    return os.environ.get("SQUAD_PLANNER_LOG_LEVEL", "INFO").upper()
