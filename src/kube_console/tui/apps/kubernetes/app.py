"""Main Textual application for Kubernetes resource browsing.

``KubernetesApp`` hosts the resource viewers: it creates them from the kind
catalogue, swaps them in and out of the screen stack, shows notifications
and modals for them, and runs their remote calls on worker threads.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from kube_console.integrations.kubernetes.models import split_path
from kube_console.services.kubernetes import ResourceManager, WorkloadManager
from kube_console.tui.apps.kubernetes.kinds import build_kind_registry
from kube_console.tui.components.modal import ConfirmDialog
from kube_console.tui.viewer import KindRegistry, ResourceViewer, build_viewer

if TYPE_CHECKING:
    from kube_console.integrations.kubernetes.client import KubernetesClient
    from kube_console.integrations.kubernetes.config import KubernetesConsoleConfig

logger = structlog.get_logger()

R = TypeVar("R")

# Namespace value meaning "every namespace"
ALL_NAMESPACES = "all"

DEFAULT_START_KIND = "ReplicaSet"


class KubernetesApp(App[None]):
    """TUI application for browsing Kubernetes workloads.

    Args:
        client: Kubernetes API client.
        config: Console configuration; supplies the start kind and hint
            visibility.
        namespace: Namespace the first viewer lists. Defaults to the
            client's namespace; ``"all"`` lists every namespace.
        start_kind: Kind (or alias) shown first.
        kinds: Kind catalogue. Defaults to the workload kinds.
    """

    TITLE = "Kubernetes Console"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "help", "Help", show=True),
    ]

    def __init__(
        self,
        client: KubernetesClient,
        config: KubernetesConsoleConfig | None = None,
        *,
        namespace: str | None = None,
        start_kind: str | None = None,
        kinds: KindRegistry | None = None,
    ) -> None:
        super().__init__()
        self._client = client
        self._resources = ResourceManager(client)
        self._workloads = WorkloadManager(client)
        self._kinds = kinds if kinds is not None else build_kind_registry(self._workloads)

        self._show_hints = config.ui.show_hints if config is not None else True
        requested = start_kind or (config.ui.start_kind if config is not None else None)
        kind = self._kinds.lookup(requested or DEFAULT_START_KIND)
        if kind is None:
            raise ValueError(
                f"unknown resource kind {requested!r}, expected one of: "
                + ", ".join(self._kinds.names)
            )
        self._start_kind = kind.kind

        namespace = namespace or client.default_namespace
        self._namespace: str | None = None if namespace == ALL_NAMESPACES else namespace

    @property
    def kinds(self) -> KindRegistry:
        return self._kinds

    @property
    def start_kind(self) -> str:
        return self._start_kind

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        """Open the start viewer on mount."""
        self.set_active_viewer(self.create_viewer(self._start_kind))

    # =========================================================================
    # Viewer host
    # =========================================================================

    def create_viewer(
        self,
        kind: str,
        *,
        instance: str | None = None,
        label_selector: str | None = None,
        namespace: str | None = None,
    ) -> ResourceViewer:
        """Create a viewer for a registered kind.

        Raises:
            KeyError: If the kind is not registered.
        """
        if namespace is None:
            namespace = split_path(instance)[0] if instance else self._namespace
        logger.debug(
            "viewer_created",
            kind=kind,
            instance=instance,
            label_selector=label_selector,
            namespace=namespace,
        )
        return build_viewer(
            self._kinds,
            self._resources,
            kind,
            namespace=namespace,
            instance=instance,
            label_selector=label_selector,
            show_hints=self._show_hints,
        )

    def set_active_viewer(self, viewer: ResourceViewer, *, add_to_history: bool = True) -> None:
        """Make a viewer current, keeping the previous one reachable with Back."""
        if add_to_history or len(self.screen_stack) <= 1:
            self.push_screen(viewer)
        else:
            self.switch_screen(viewer)

    def notify_info(self, text: str) -> None:
        self.notify(text)

    def notify_error(self, error: Exception | str) -> None:
        logger.debug("error_notified", error=str(error))
        self.notify(str(error), severity="error")

    def show_modal(self, dialog: ConfirmDialog) -> None:
        self.push_screen(dialog)

    def dismiss_modal(self) -> None:
        if isinstance(self.screen, ConfirmDialog):
            self.pop_screen()

    @work(thread=True, group="remote", exit_on_error=False)
    def run_remote(
        self,
        call: Callable[[], R],
        on_success: Callable[[R], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        """Run ``call`` on a worker thread and deliver the outcome on the UI loop.

        A callback that raises is reported as an error notification; it never
        takes the application down.
        """
        try:
            result: Any = call()
        except Exception as e:
            logger.debug("remote_call_failed", error=str(e))
            self.call_from_thread(self._deliver, on_error, e)
            return
        self.call_from_thread(self._deliver, on_success, result)

    def _deliver(self, callback: Callable[[Any], None], value: Any) -> None:
        try:
            callback(value)
        except Exception as e:
            logger.error("remote_callback_failed", callback=repr(callback), error=str(e))
            self.notify_error(e)

    # =========================================================================
    # Actions
    # =========================================================================

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def action_help(self) -> None:
        """Show the key actions of the current viewer."""
        screen = self.screen
        if not isinstance(screen, ResourceViewer):
            return
        actions = sorted(screen.actions.snapshot().items())
        hints = " | ".join(f"{key}: {action.description}" for key, action in actions)
        self.notify(f"{hints} | q: quit")
