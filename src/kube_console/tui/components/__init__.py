"""Reusable TUI components.

Usage:
    from kube_console.tui.components import ConfirmDialog

    dialog = ConfirmDialog(
        title="Confirm Rollback",
        message="Rollback ReplicaSet default/web-5d8f?",
        on_answer=handle_answer,
    )
    app.push_screen(dialog)
"""

from kube_console.tui.components.modal import CANCEL, CONFIRM, ConfirmDialog

__all__ = [
    "CANCEL",
    "CONFIRM",
    "ConfirmDialog",
]
