"""Collaborators of the controller that live outside of it (rendering, notices, UI settings)."""

from typing import Callable, Protocol

from src.core.models import DrawRequest
from src.core.shared_types import EngineAssignment


class Renderer(Protocol):
    def redraw(self, request: DrawRequest) -> None:
        """Called after every state-affecting event (move applied, selection changed, game (re)loaded)."""
        ...


class Notifier(Protocol):
    def notify_error(self, message: str) -> None:
        """Show a transient, non-fatal notice to the user."""
        ...


# Re-read on every click, the user may change it in between.
EngineAssignmentSource = Callable[[], EngineAssignment]
