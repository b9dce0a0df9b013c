"""
Abstract input actions and the held-key state the session queries each tick
"""

from enum import Enum
from typing import Iterable, Set


class Action(str, Enum):
    P1_UP = "p1_up"
    P1_DOWN = "p1_down"
    P1_FIRE = "p1_fire"
    P2_UP = "p2_up"
    P2_DOWN = "p2_down"
    P2_FIRE = "p2_fire"
    PAUSE = "pause"


# (up, down, fire) per player
PLAYER_ACTIONS = {
    1: (Action.P1_UP, Action.P1_DOWN, Action.P1_FIRE),
    2: (Action.P2_UP, Action.P2_DOWN, Action.P2_FIRE),
}

FIRE_ACTIONS = {Action.P1_FIRE: 1, Action.P2_FIRE: 2}


class InputState:
    """Set of currently held actions"""

    def __init__(self, held: Iterable[Action] = ()):
        self._held: Set[Action] = set(held)

    def press(self, action: Action) -> None:
        self._held.add(action)

    def release(self, action: Action) -> None:
        self._held.discard(action)

    def is_held(self, action: Action) -> bool:
        return action in self._held

    def set_held(self, actions: Iterable[Action]) -> None:
        self._held = set(actions)

    def clear(self) -> None:
        self._held.clear()

    @property
    def held(self) -> frozenset:
        return frozenset(self._held)
