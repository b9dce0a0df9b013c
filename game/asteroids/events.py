"""
Typed game events and a small observer bus.
The simulation emits these; presentation and agent code subscribe.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List, Type

from .entities import Color


@dataclass(frozen=True)
class ShipHit:
    """A ship lost a life to an asteroid"""
    player: int
    lives: int  # lives left after the hit
    time: float  # game time (ms)


@dataclass(frozen=True)
class AsteroidDestroyed:
    """A bullet destroyed an asteroid"""
    player: int
    x: float  # asteroid center
    y: float
    size: float
    points: int


@dataclass(frozen=True)
class HeartCollected:
    """A ship picked up a heart"""
    player: int
    x: float  # heart center
    y: float
    lives: int  # lives after pickup
    color: Color


@dataclass(frozen=True)
class GameOver:
    score: int
    frame: int


Handler = Callable[[object], None]


class EventBus:
    """Dispatch events to handlers subscribed by event type"""

    def __init__(self):
        self._handlers: DefaultDict[Type, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: Type, handler: Handler) -> None:
        self._handlers[event_type].remove(handler)

    def emit(self, event) -> None:
        for handler in list(self._handlers[type(event)]):
            handler(event)
