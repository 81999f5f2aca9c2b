"""Confirm-then-mutate commands.

A ``MutatingCommand`` is a key handler: it reads the selection, asks for
confirmation and, once confirmed, runs the mutation off the UI thread. The
outcome is reported once and the viewer is refreshed once, whether the
mutation succeeded or failed. A cancelled command does nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

import structlog

from kube_console.tui.viewer.confirm import (
    CONFIRM,
    ConfirmationPendingError,
    ConfirmationWorkflow,
)
from kube_console.tui.viewer.host import ViewerHost
from kube_console.tui.viewer.selection import Selection

logger = structlog.get_logger()

SuccessMessage = Callable[[str, Any], str]


class CommandState(Enum):
    """Lifecycle of a mutating command."""

    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CANCELLED = "cancelled"
    CONFIRMED = "confirmed"
    MUTATING = "mutating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class MutatingCommand:
    """Key handler guarding a remote mutation behind a confirmation.

    Args:
        host: Application providing notifications and remote execution.
        selection: Source of the target path and the refresh hook.
        confirmation: The viewer's confirmation slot.
        verb: Imperative shown in the question, e.g. "Rollback".
        progress: Shown while the mutation runs, e.g. "Rolling back".
        done: Past participle for the default success message.
        kind_label: Kind name shown in messages.
        mutate: Performs the mutation for a path. Its return value is passed
            to ``success_message``.
        success_message: Builds the success text from (path, result).
    """

    def __init__(
        self,
        host: ViewerHost,
        selection: Selection,
        confirmation: ConfirmationWorkflow,
        *,
        verb: str,
        kind_label: str,
        mutate: Callable[[str], Any],
        progress: str | None = None,
        done: str | None = None,
        success_message: SuccessMessage | None = None,
    ) -> None:
        self._host = host
        self._selection = selection
        self._confirmation = confirmation
        self._verb = verb
        self._kind_label = kind_label
        self._mutate = mutate
        self._progress = progress or f"{verb.rstrip('e')}ing"
        self._done = done or f"{verb.lower().rstrip('e')}ed"
        self._success_message = success_message
        self._state = CommandState.IDLE
        self._last_outcome: CommandState | None = None

    @property
    def state(self) -> CommandState:
        return self._state

    @property
    def last_outcome(self) -> CommandState | None:
        """CANCELLED, SUCCEEDED or FAILED for the most recent run."""
        return self._last_outcome

    def __call__(self, key: str) -> bool:
        path = self._selection.current_identity()
        if not path:
            return False

        message = f"{self._verb} {self._kind_label} {path}?"
        try:
            self._confirmation.request(
                message,
                lambda choice: self._on_answer(path, choice),
                title=f"Confirm {self._verb}",
                confirm_label=self._verb,
            )
        except ConfirmationPendingError as e:
            logger.warning("mutation_not_started", verb=self._verb, path=path, reason=str(e))
            return True

        self._state = CommandState.AWAITING_CONFIRMATION
        return True

    def _on_answer(self, path: str, choice: str) -> None:
        if choice != CONFIRM:
            self._state = CommandState.CANCELLED
            self._last_outcome = CommandState.CANCELLED
            logger.info("mutation_cancelled", verb=self._verb, kind=self._kind_label, path=path)
            self._state = CommandState.IDLE
            return

        self._state = CommandState.CONFIRMED
        self._host.notify_info(f"{self._progress} {self._kind_label} {path}")
        logger.info("mutation_started", verb=self._verb, kind=self._kind_label, path=path)
        self._state = CommandState.MUTATING
        self._host.run_remote(
            lambda: self._mutate(path),
            lambda result: self._on_success(path, result),
            lambda error: self._on_failure(path, error),
        )

    def _on_success(self, path: str, result: Any) -> None:
        self._state = CommandState.SUCCEEDED
        logger.info("mutation_succeeded", verb=self._verb, kind=self._kind_label, path=path)
        self._finish(self._success_text(path, result), None)

    def _success_text(self, path: str, result: Any) -> str:
        """The success notification; the plain form if the formatter raises."""
        text = f"{path} successfully {self._done}"
        if self._success_message is None:
            return text
        try:
            return self._success_message(path, result)
        except Exception as e:
            logger.error("success_message_failed", verb=self._verb, path=path, error=str(e))
            return text

    def _on_failure(self, path: str, error: Exception) -> None:
        self._state = CommandState.FAILED
        logger.error(
            "mutation_failed",
            verb=self._verb,
            kind=self._kind_label,
            path=path,
            error=str(error),
        )
        self._finish(None, error)

    def _finish(self, text: str | None, error: Exception | None) -> None:
        self._last_outcome = self._state
        try:
            if error is not None:
                self._host.notify_error(error)
            elif text is not None:
                self._host.notify_info(text)
        finally:
            self._selection.refresh()
            self._state = CommandState.IDLE
