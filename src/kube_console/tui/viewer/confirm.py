"""Single-slot confirmation workflow.

A viewer holds at most one outstanding confirmation. The request is a
suspended continuation: ``on_done`` runs once with the user's choice, after
which the slot is cleared and the dialog dismissed whatever happened.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from kube_console.tui.components.modal import CANCEL, CONFIRM, ConfirmDialog
from kube_console.tui.viewer.host import ViewerHost

logger = structlog.get_logger()

__all__ = [
    "CANCEL",
    "CONFIRM",
    "ConfirmationPendingError",
    "ConfirmationRequest",
    "ConfirmationWorkflow",
]


class ConfirmationPendingError(RuntimeError):
    """Raised when a confirmation is requested while another is outstanding."""

    def __init__(self, pending: str) -> None:
        super().__init__(f"a confirmation is already pending: {pending}")
        self.pending = pending


@dataclass
class ConfirmationRequest:
    """An outstanding question and the continuation waiting for its answer."""

    message: str
    on_done: Callable[[str], None]
    dialog: ConfirmDialog


class ConfirmationWorkflow:
    """Asks the user to confirm one action at a time."""

    def __init__(self, host: ViewerHost) -> None:
        self._host = host
        self._pending: ConfirmationRequest | None = None

    @property
    def pending(self) -> ConfirmationRequest | None:
        return self._pending

    def request(
        self,
        message: str,
        on_done: Callable[[str], None],
        *,
        title: str = "Confirm",
        confirm_label: str = "OK",
    ) -> ConfirmationRequest:
        """Show a confirmation dialog.

        Args:
            message: Question shown to the user.
            on_done: Receives CONFIRM or CANCEL once the user answers.
            title: Dialog title.
            confirm_label: Label of the confirm button.

        Raises:
            ConfirmationPendingError: If a request is already outstanding.
                The outstanding request is left untouched.
        """
        if self._pending is not None:
            logger.warning(
                "confirmation_rejected",
                pending=self._pending.message,
                rejected=message,
            )
            raise ConfirmationPendingError(self._pending.message)

        dialog = ConfirmDialog(title, message, self.resolve, confirm_label=confirm_label)
        request = ConfirmationRequest(message=message, on_done=on_done, dialog=dialog)
        self._pending = request
        try:
            self._host.show_modal(dialog)
        except Exception:
            self._pending = None
            raise
        logger.debug("confirmation_requested", message=message)
        return request

    def resolve(self, choice: str) -> None:
        """Deliver the user's choice to the pending request.

        A no-op when nothing is pending.
        """
        request = self._pending
        if request is None:
            return
        logger.debug("confirmation_resolved", message=request.message, choice=choice)
        try:
            request.on_done(choice)
        finally:
            self._pending = None
            self._host.dismiss_modal()
