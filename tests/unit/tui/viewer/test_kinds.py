"""Unit tests for resource kind descriptors and the registry."""

from __future__ import annotations

import pytest

from kube_console.integrations.kubernetes.gvr import GVR
from kube_console.tui.viewer.kinds import KindRegistry, ResourceKind


def _kind(name: str, gvr: str, aliases: tuple[str, ...] = ()) -> ResourceKind:
    return ResourceKind(
        name, GVR.parse(gvr), (("Name", 30),), lambda obj: (obj.name,), aliases=aliases
    )


@pytest.mark.unit
class TestResourceKind:
    """Tests for ResourceKind."""

    def test_title_is_plural(self) -> None:
        assert _kind("ReplicaSet", "apps/v1/replicasets").title == "ReplicaSets"

    def test_defaults(self) -> None:
        kind = _kind("Pod", "v1/pods")

        assert kind.namespaced is True
        assert kind.owner_kinds == ()
        assert kind.bind_keys is None
        assert kind.on_enter is None


@pytest.mark.unit
class TestKindRegistry:
    """Tests for KindRegistry."""

    @pytest.fixture
    def registry(self) -> KindRegistry:
        return KindRegistry(
            [
                _kind("Pod", "v1/pods", ("po",)),
                _kind("ReplicaSet", "apps/v1/replicasets", ("rs",)),
            ]
        )

    def test_preserves_registration_order(self, registry: KindRegistry) -> None:
        assert registry.names == ["Pod", "ReplicaSet"]
        assert [k.kind for k in registry] == ["Pod", "ReplicaSet"]
        assert len(registry) == 2

    def test_contains(self, registry: KindRegistry) -> None:
        assert "Pod" in registry
        assert "Deployment" not in registry

    def test_get(self, registry: KindRegistry) -> None:
        assert registry.get("ReplicaSet").gvr.resource == "replicasets"

    def test_get_unknown_raises(self, registry: KindRegistry) -> None:
        with pytest.raises(KeyError, match="unknown resource kind"):
            registry.get("Deployment")

    def test_register_duplicate_raises(self, registry: KindRegistry) -> None:
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_kind("Pod", "v1/pods"))

    @pytest.mark.parametrize("name", ["ReplicaSet", "replicaset", "replicasets", "RS", " rs "])
    def test_lookup_matches_names_and_aliases(self, registry: KindRegistry, name: str) -> None:
        kind = registry.lookup(name)

        assert kind is not None
        assert kind.kind == "ReplicaSet"

    def test_lookup_unknown_returns_none(self, registry: KindRegistry) -> None:
        assert registry.lookup("deploy") is None
