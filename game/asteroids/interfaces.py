"""
Collaborator interfaces the session calls into.
Hosts provide a render sink and a HUD sink; headless hosts use the null ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from .session import Session


class RenderSink(Protocol):
    def present(self, session: "Session", now: float) -> None:
        """Draw the current session state (called every tick, paused or not)"""


class HudSink(Protocol):
    def update_hud(self, score: int, lives: Sequence[int]) -> None:
        """Show score and per-ship lives"""


class NullRenderSink:
    def present(self, session, now):
        pass


class NullHudSink:
    def update_hud(self, score, lives):
        pass
