"""Contract between the viewer core and the application hosting it."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from kube_console.tui.components.modal import ConfirmDialog
    from kube_console.tui.viewer.browser import ResourceViewer

R = TypeVar("R")


class ViewerHost(Protocol):
    """Services a host application provides to viewers.

    All methods are called on the UI message loop. ``run_remote`` is the only
    way the core reaches the cluster: ``call`` runs off the loop, and exactly
    one of ``on_success`` / ``on_error`` is delivered back on the loop, possibly
    after the requesting viewer has been closed. A callback that raises is
    reported, not propagated.
    """

    def create_viewer(
        self,
        kind: str,
        *,
        instance: str | None = None,
        label_selector: str | None = None,
        namespace: str | None = None,
    ) -> ResourceViewer: ...

    def set_active_viewer(self, viewer: ResourceViewer, *, add_to_history: bool = True) -> None: ...

    def notify_info(self, text: str) -> None: ...

    def notify_error(self, error: Exception | str) -> None: ...

    def show_modal(self, dialog: ConfirmDialog) -> None: ...

    def dismiss_modal(self) -> None: ...

    def run_remote(
        self,
        call: Callable[[], R],
        on_success: Callable[[R], None],
        on_error: Callable[[Exception], None],
    ) -> Any: ...
