"""In-memory placement state shared by the routers (no persistence)."""

from ..config import get_collision_policy
from ..placement import PlacementState

_state = PlacementState(on_collision=get_collision_policy())


def get_state() -> PlacementState:
    return _state


def reset_state(on_collision=None) -> PlacementState:
    global _state
    _state = PlacementState(on_collision=on_collision or get_collision_policy())
    return _state
