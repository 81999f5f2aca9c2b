"""Resource kind descriptors.

A ``ResourceKind`` carries everything the generic viewer needs to know about
a kind: where it lives in the API, how to render it and which extra key
bindings it contributes. Kind specific behaviour is supplied as closures at
construction, so the viewer never imports concrete kinds.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kube_console.integrations.kubernetes.gvr import GVR
from kube_console.integrations.kubernetes.models import ResourceObject

if TYPE_CHECKING:
    from kube_console.tui.viewer.actions import KeyActions
    from kube_console.tui.viewer.browser import ResourceViewer

RowRenderer = Callable[[ResourceObject], tuple[str, ...]]
BindKeysHook = Callable[["ResourceViewer", "KeyActions"], None]
EnterHook = Callable[["ResourceViewer", str], None]


@dataclass(frozen=True)
class ResourceKind:
    """Immutable description of a browsable resource kind.

    Attributes:
        kind: Kind name as reported by the API, e.g. "ReplicaSet".
        gvr: Group/version/resource used to reach the API.
        columns: (label, width) pairs in display order.
        row: Renders a decoded object into cells matching ``columns``.
        namespaced: Whether objects live in a namespace.
        owner_kinds: Kinds an object may be owned by, in preference order.
        aliases: Extra names accepted by ``KindRegistry.lookup``.
        bind_keys: Adds kind specific actions to a viewer.
        on_enter: Runs when a row is selected with Enter.
    """

    kind: str
    gvr: GVR
    columns: tuple[tuple[str, int], ...]
    row: RowRenderer
    namespaced: bool = True
    owner_kinds: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    bind_keys: BindKeysHook | None = None
    on_enter: EnterHook | None = None

    @property
    def title(self) -> str:
        """Plural display name, e.g. "ReplicaSets"."""
        return f"{self.kind}s"


class KindRegistry:
    """Lookup of resource kinds by kind name."""

    def __init__(self, kinds: Iterable[ResourceKind] = ()) -> None:
        self._kinds: dict[str, ResourceKind] = {}
        for kind in kinds:
            self.register(kind)

    def register(self, kind: ResourceKind) -> None:
        """Add a kind.

        Raises:
            ValueError: If a kind with the same name is already registered.
        """
        if kind.kind in self._kinds:
            raise ValueError(f"kind {kind.kind!r} is already registered")
        self._kinds[kind.kind] = kind

    def get(self, name: str) -> ResourceKind:
        """Return the kind with the exact given name.

        Raises:
            KeyError: If the kind is unknown.
        """
        try:
            return self._kinds[name]
        except KeyError:
            raise KeyError(f"unknown resource kind {name!r}") from None

    def lookup(self, name: str) -> ResourceKind | None:
        """Find a kind by kind name, plural resource name or alias, ignoring case."""
        wanted = name.strip().lower()
        for kind in self._kinds.values():
            names = {kind.kind.lower(), kind.gvr.resource.lower()}
            names.update(alias.lower() for alias in kind.aliases)
            if wanted in names:
                return kind
        return None

    @property
    def names(self) -> list[str]:
        return list(self._kinds)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[ResourceKind]:
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)
