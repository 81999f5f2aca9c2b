"""Navigation between related resources.

``OwnerResolver`` walks owner references from a child to its controller
(Pod to ReplicaSet, ReplicaSet to Deployment). ``SelectorResolver`` goes the
other way, from a controller to the Pods its label selector matches. Both
fetch the selected object off the UI thread and ask the host to activate the
target viewer; they never mutate anything.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from kube_console.integrations.kubernetes.models import (
    OwnerReference,
    ResourceObject,
    join_path,
)
from kube_console.services.kubernetes.resource_manager import selector_from_labels
from kube_console.tui.viewer.host import ViewerHost
from kube_console.tui.viewer.kinds import KindRegistry
from kube_console.tui.viewer.selection import Selection

logger = structlog.get_logger()

# Fetches and decodes the object at a path. Runs off the UI thread.
Fetcher = Callable[[str], ResourceObject]

# Tells whether the requesting viewer still receives keys.
ActiveCheck = Callable[[], bool]


class RelationshipNotFoundError(LookupError):
    """Raised when an object has no related object of the wanted kind."""


def _still_active(active: ActiveCheck | None, path: str, target: str) -> bool:
    if active is None or active():
        return True
    logger.info("navigation_dropped", path=path, target=target, reason="viewer not in front")
    return False


class OwnerResolver:
    """Key handler opening a viewer on the owner of the selected resource.

    Args:
        host: Application hosting the viewers.
        kinds: Kinds the host can open viewers for.
        selection: Source of the selected path.
        fetch: Loads the selected object.
        owner_kinds: Owner kinds to look for, e.g. ("Deployment",).
        active: Whether the requesting viewer is still in front. A result
            arriving after the user moved on is dropped.
    """

    def __init__(
        self,
        host: ViewerHost,
        kinds: KindRegistry,
        selection: Selection,
        fetch: Fetcher,
        owner_kinds: Sequence[str],
        active: ActiveCheck | None = None,
    ) -> None:
        self._host = host
        self._kinds = kinds
        self._selection = selection
        self._fetch = fetch
        self._owner_kinds = tuple(owner_kinds)
        self._active = active

    def __call__(self, key: str) -> bool:
        path = self._selection.current_identity()
        if not path:
            return False
        self._host.run_remote(
            lambda: self._fetch(path),
            self._on_fetched,
            lambda error: self._on_fetch_failed(path, error),
        )
        return True

    def find_owner(self, resource: ResourceObject) -> OwnerReference:
        """Pick the owner reference to navigate to.

        References are considered in the order the API returned them; the
        first one of a wanted kind that the registry knows wins.

        Raises:
            RelationshipNotFoundError: If the object has no owner references,
                or none of a wanted kind.
        """
        refs = resource.owner_references
        if not refs:
            raise RelationshipNotFoundError("no owner reference found")
        for ref in refs:
            if ref.kind in self._owner_kinds and ref.kind in self._kinds and ref.name:
                return ref
        raise RelationshipNotFoundError(f"no {'/'.join(self._owner_kinds)} owner reference found")

    def _on_fetched(self, resource: ResourceObject) -> None:
        if not _still_active(self._active, resource.path, "owner"):
            return
        try:
            owner = self.find_owner(resource)
        except RelationshipNotFoundError as e:
            logger.info("owner_not_found", path=resource.path, reason=str(e))
            self._host.notify_error(e)
            return

        owner_kind, instance = str(owner.kind), join_path(resource.namespace, str(owner.name))
        logger.info("owner_resolved", path=resource.path, owner_kind=owner_kind, owner=instance)
        try:
            viewer = self._host.create_viewer(owner_kind, instance=instance)
            self._host.set_active_viewer(viewer, add_to_history=True)
        except Exception as e:
            logger.error("owner_view_failed", owner_kind=owner_kind, owner=instance, error=str(e))
            self._host.notify_error(e)

    def _on_fetch_failed(self, path: str, error: Exception) -> None:
        logger.error("owner_lookup_failed", path=path, error=str(error))
        self._host.notify_error(error)


class SelectorResolver:
    """Opens a viewer on the objects matched by the selected resource's selector.

    Args:
        host: Application hosting the viewers.
        selection: Source of the selected path.
        fetch: Loads the selected object.
        target_kind: Kind of the matched objects, usually "Pod".
        active: Whether the requesting viewer is still in front.
    """

    def __init__(
        self,
        host: ViewerHost,
        selection: Selection,
        fetch: Fetcher,
        target_kind: str = "Pod",
        active: ActiveCheck | None = None,
    ) -> None:
        self._host = host
        self._selection = selection
        self._fetch = fetch
        self._target_kind = target_kind
        self._active = active

    def __call__(self, key: str) -> bool:
        path = self._selection.current_identity()
        if not path:
            return False
        self.show(path)
        return True

    def show(self, path: str) -> None:
        """Resolve the selector of the object at ``path`` and open the target viewer."""
        self._host.run_remote(
            lambda: self._fetch(path),
            self._on_fetched,
            lambda error: self._on_fetch_failed(path, error),
        )

    def _on_fetched(self, resource: ResourceObject) -> None:
        if not _still_active(self._active, resource.path, self._target_kind):
            return
        match_labels = resource.spec_field("selector", "matchLabels", default={})
        if not match_labels:
            self._host.notify_error(f"no selector found on {resource.path}")
            return

        selector = selector_from_labels(match_labels)
        logger.info(
            "selector_resolved",
            path=resource.path,
            target_kind=self._target_kind,
            label_selector=selector,
        )
        try:
            viewer = self._host.create_viewer(
                self._target_kind,
                label_selector=selector,
                namespace=resource.namespace,
            )
            self._host.set_active_viewer(viewer, add_to_history=True)
        except Exception as e:
            logger.error("selector_view_failed", target_kind=self._target_kind, error=str(e))
            self._host.notify_error(e)

    def _on_fetch_failed(self, path: str, error: Exception) -> None:
        logger.error("selector_lookup_failed", path=path, error=str(error))
        self._host.notify_error(error)
