"""Generic resource viewer screen.

``ResourceViewer`` renders one resource kind as a table and routes key
presses through its ``KeyActions``. Every viewer gets the base actions
(refresh, delete, back); the kind's ``bind_keys`` hook and any extra hooks
registered with ``add_bind_keys_fn`` bind on top of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import structlog
from textual import events, on
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Label, Static

from kube_console.integrations.kubernetes.models import ResourceObject, decode_resource
from kube_console.tui.base import BaseScreen
from kube_console.tui.viewer.actions import KeyAction, KeyActions, format_hints
from kube_console.tui.viewer.commands import MutatingCommand, SuccessMessage
from kube_console.tui.viewer.confirm import ConfirmationWorkflow
from kube_console.tui.viewer.host import ViewerHost
from kube_console.tui.viewer.kinds import BindKeysHook, KindRegistry, ResourceKind
from kube_console.tui.viewer.relationships import OwnerResolver, SelectorResolver
from kube_console.tui.viewer.selection import TableSelection

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from kube_console.services.kubernetes import ResourceManager

logger = structlog.get_logger()


class ResourceViewer(BaseScreen[None]):
    """Table of resources of one kind with key driven actions.

    Args:
        kind: Kind rendered by this viewer.
        resources: Remote collaborator for get/list/delete.
        kinds: Registry of kinds the host can open.
        namespace: Namespace to list. None lists all namespaces.
        instance: Show only the object at this ``namespace/name`` path.
        label_selector: Show only objects matching this selector.
        show_hints: Render the key hint bar.
    """

    DEFAULT_CSS = """
    ResourceViewer #viewer-container {
        height: 1fr;
    }

    ResourceViewer #viewer-title {
        text-style: bold;
        padding: 0 1;
        width: 100%;
    }

    ResourceViewer #resource-table {
        height: 1fr;
    }

    ResourceViewer #action-hints {
        color: $text-muted;
        padding: 0 1;
        height: auto;
    }

    ResourceViewer #status-bar {
        padding: 0 1;
        width: 100%;
    }
    """

    def __init__(
        self,
        kind: ResourceKind,
        resources: ResourceManager,
        kinds: KindRegistry,
        *,
        namespace: str | None = None,
        instance: str | None = None,
        label_selector: str | None = None,
        show_hints: bool = True,
    ) -> None:
        super().__init__()
        self.kind = kind
        self._resources = resources
        self._kinds = kinds
        self.namespace = namespace
        self.instance = instance
        self.label_selector = label_selector
        self._show_hints = show_hints
        self.actions = KeyActions()
        self._bind_key_fns: list[BindKeysHook] = []
        if kind.bind_keys is not None:
            self._bind_key_fns.append(kind.bind_keys)
        self._objects: dict[str, ResourceObject] = {}
        self._selection: TableSelection | None = None
        self._confirmation: ConfirmationWorkflow | None = None

    # =========================================================================
    # Collaborators
    # =========================================================================

    @property
    def host(self) -> ViewerHost:
        return cast(ViewerHost, self.app)

    @property
    def kinds(self) -> KindRegistry:
        return self._kinds

    @property
    def selection(self) -> TableSelection:
        if self._selection is None:
            self._selection = TableSelection(
                self.query_one("#resource-table", DataTable), self.refresh_resources
            )
        return self._selection

    @property
    def confirmation(self) -> ConfirmationWorkflow:
        if self._confirmation is None:
            self._confirmation = ConfirmationWorkflow(self.host)
        return self._confirmation

    @property
    def objects(self) -> dict[str, ResourceObject]:
        """Objects currently shown, by path."""
        return dict(self._objects)

    @property
    def title_text(self) -> str:
        scope = self.instance or (self.namespace if self.namespace else "all")
        title = f"{self.kind.title}({scope})"
        if self.label_selector:
            title += f" [{self.label_selector}]"
        return title

    # =========================================================================
    # Layout
    # =========================================================================

    def compose(self) -> ComposeResult:
        yield Container(
            Label(self.title_text, id="viewer-title", markup=False),
            DataTable(id="resource-table"),
            Static("", id="action-hints"),
            Label("", id="status-bar"),
            id="viewer-container",
        )

    def on_mount(self) -> None:
        table = self.query_one("#resource-table", DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        for label, width in self.kind.columns:
            table.add_column(label, width=width, key=label)

        self.bind_keys()
        self.refresh_resources()

    # =========================================================================
    # Key actions
    # =========================================================================

    def add_bind_keys_fn(self, fn: BindKeysHook) -> None:
        """Register an extra hook contributing key actions."""
        self._bind_key_fns.append(fn)
        if self.is_mounted:
            self.bind_keys()

    def base_actions(self) -> dict[str, KeyAction]:
        return {
            "r": KeyAction("Refresh", self._refresh_cmd),
            "ctrl+d": KeyAction(
                "Delete", self.command(verb="Delete", done="deleted", mutate=self._delete)
            ),
            "escape": KeyAction("Back", self._back_cmd),
        }

    def bind_keys(self) -> None:
        """Rebuild the action table from the base actions and the hooks."""
        self.actions.clear()
        self.actions.bind(self.base_actions())
        for fn in self._bind_key_fns:
            fn(self, self.actions)
        self._render_hints()

    def on_key(self, event: events.Key) -> None:
        if self.actions.dispatch(event.key):
            event.stop()
            event.prevent_default()

    def _render_hints(self) -> None:
        hints = self.query_one("#action-hints", Static)
        hints.display = self._show_hints
        hints.update(format_hints(self.actions.hints()))

    def _refresh_cmd(self, _key: str) -> bool:
        self.refresh_resources()
        return True

    def _back_cmd(self, _key: str) -> bool:
        self.go_back()
        return True

    def _delete(self, path: str) -> None:
        self._resources.delete(self.kind.gvr, path)

    # Builders used by kind hooks

    def command(
        self,
        *,
        verb: str,
        mutate: Callable[[str], Any],
        progress: str | None = None,
        done: str | None = None,
        success_message: SuccessMessage | None = None,
    ) -> MutatingCommand:
        """Build a confirm-then-mutate handler targeting this viewer's selection."""
        return MutatingCommand(
            self.host,
            self.selection,
            self.confirmation,
            verb=verb,
            kind_label=self.kind.kind,
            mutate=mutate,
            progress=progress,
            done=done,
            success_message=success_message,
        )

    def owner_resolver(self, owner_kinds: Sequence[str] | None = None) -> OwnerResolver:
        """Build a handler that opens the owner of the selected object."""
        return OwnerResolver(
            self.host,
            self._kinds,
            self.selection,
            self.fetch,
            owner_kinds if owner_kinds is not None else self.kind.owner_kinds,
            active=lambda: self.in_front,
        )

    def selector_resolver(self, target_kind: str = "Pod") -> SelectorResolver:
        """Build a handler that opens the objects selected by the selected object."""
        return SelectorResolver(
            self.host, self.selection, self.fetch, target_kind, active=lambda: self.in_front
        )

    # =========================================================================
    # Data
    # =========================================================================

    def fetch(self, path: str) -> ResourceObject:
        """Load and decode one object of this kind. Blocking."""
        raw = self._resources.get(self.kind.gvr, path)
        return decode_resource(raw, self.kind.kind)

    def refresh_resources(self) -> None:
        """Reload the table off the UI thread."""
        if not self.on_stack:
            logger.debug("refresh_skipped", kind=self.kind.kind, reason="viewer closed")
            return
        self.query_one("#status-bar", Label).update("[dim]Loading...[/dim]")
        self.host.run_remote(self._load, self._populate, self._show_load_error)

    def _load(self) -> list[ResourceObject]:
        if self.instance:
            raw = self._resources.get(
                self.kind.gvr, self.instance, label_selector=self.label_selector
            )
            return [decode_resource(raw, self.kind.kind)]

        items = self._resources.list(
            self.kind.gvr,
            self.namespace,
            all_namespaces=self.kind.namespaced and self.namespace is None,
            label_selector=self.label_selector,
        )
        return [decode_resource(item, self.kind.kind) for item in items]

    def _populate(self, objects: list[ResourceObject]) -> None:
        if not self.on_stack:
            return
        table = self.query_one("#resource-table", DataTable)
        previous = self.selection.current_identity()
        table.clear()
        self._objects = {}
        for obj in objects:
            if obj.path in self._objects:
                continue
            self._objects[obj.path] = obj
            table.add_row(*self.kind.row(obj), key=obj.path)
        self.selection.apply_sort()
        if previous:
            self.selection.select(previous)

        count = len(self._objects)
        self.query_one("#status-bar", Label).update(f"[dim]{count} {self.kind.title}[/dim]")
        logger.debug("resources_loaded", kind=self.kind.kind, count=count)

    def _show_load_error(self, error: Exception) -> None:
        logger.error("failed_to_load_resources", kind=self.kind.kind, error=str(error))
        if not self.on_stack:
            return
        self.query_one("#status-bar", Label).update(f"[red]Error loading {self.kind.title}[/red]")
        self.host.notify_error(error)

    @on(DataTable.RowSelected, "#resource-table")
    def _on_row_selected(self, event: DataTable.RowSelected) -> None:
        path = str(event.row_key.value or "")
        if path and self.kind.on_enter is not None:
            event.stop()
            self.kind.on_enter(self, path)


def build_viewer(
    kinds: KindRegistry,
    resources: ResourceManager,
    kind: str,
    *,
    namespace: str | None = None,
    instance: str | None = None,
    label_selector: str | None = None,
    show_hints: bool = True,
    extra_bind_keys: Sequence[BindKeysHook] = (),
) -> ResourceViewer:
    """Create a viewer for a registered kind."""
    viewer = ResourceViewer(
        kinds.get(kind),
        resources,
        kinds,
        namespace=namespace,
        instance=instance,
        label_selector=label_selector,
        show_hints=show_hints,
    )
    for fn in extra_bind_keys:
        viewer.add_bind_keys_fn(fn)
    return viewer
