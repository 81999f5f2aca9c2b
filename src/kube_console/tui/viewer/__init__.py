"""Generic resource viewer framework.

Shared by every resource kind: key action registry, selection model,
relationship resolvers, the confirmation workflow and mutating commands.
"""

from kube_console.tui.viewer.actions import ActionHandler, KeyAction, KeyActions
from kube_console.tui.viewer.browser import ResourceViewer, build_viewer
from kube_console.tui.viewer.commands import CommandState, MutatingCommand
from kube_console.tui.viewer.confirm import (
    CANCEL,
    CONFIRM,
    ConfirmationPendingError,
    ConfirmationRequest,
    ConfirmationWorkflow,
)
from kube_console.tui.viewer.host import ViewerHost
from kube_console.tui.viewer.kinds import KindRegistry, ResourceKind
from kube_console.tui.viewer.relationships import (
    OwnerResolver,
    RelationshipNotFoundError,
    SelectorResolver,
)
from kube_console.tui.viewer.selection import Selection, TableSelection

__all__ = [
    "CANCEL",
    "CONFIRM",
    "ActionHandler",
    "CommandState",
    "ConfirmationPendingError",
    "ConfirmationRequest",
    "ConfirmationWorkflow",
    "KeyAction",
    "KeyActions",
    "KindRegistry",
    "MutatingCommand",
    "OwnerResolver",
    "RelationshipNotFoundError",
    "ResourceKind",
    "ResourceViewer",
    "SelectorResolver",
    "Selection",
    "TableSelection",
    "ViewerHost",
    "build_viewer",
]
