"""Screen base class shared by the console's views.

Viewers are stacked as Textual screens; walking back through them is a pop.
The app's default screen sits at the bottom of the stack and is never shown
again once the first viewer is pushed.
"""

from __future__ import annotations

from typing import TypeVar

import structlog
from textual.screen import Screen

T = TypeVar("T")

logger = structlog.get_logger()


class BaseScreen(Screen[T]):
    """Screen with back navigation through the viewer history."""

    @property
    def on_stack(self) -> bool:
        """Whether the screen is still part of the app's screen stack."""
        return self.is_attached and self in self.app.screen_stack

    @property
    def in_front(self) -> bool:
        """Whether the screen is on the stack and is the one receiving keys."""
        return self.on_stack and self.app.screen is self

    @property
    def has_history(self) -> bool:
        """Whether another console screen lies below this one."""
        return len(self.app.screen_stack) > 2

    def go_back(self) -> None:
        """Return to the previous screen; the first screen stays put."""
        if not self.has_history:
            logger.debug("back_at_first_screen", screen=type(self).__name__)
            return
        self.app.pop_screen()
