"""Unit tests for WorkloadManager."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from kubernetes.client import (
    ApiException,
    V1Container,
    V1Deployment,
    V1DeploymentSpec,
    V1LabelSelector,
    V1ObjectMeta,
    V1OwnerReference,
    V1PodSpec,
    V1PodTemplateSpec,
    V1ReplicaSet,
    V1ReplicaSetSpec,
)

from kube_console.integrations.kubernetes.exceptions import (
    KubernetesNotFoundError,
    KubernetesRollbackError,
)
from kube_console.services.kubernetes.workload_manager import (
    POD_TEMPLATE_HASH_LABEL,
    RESTARTED_AT_ANNOTATION,
    REVISION_ANNOTATION,
    WorkloadManager,
)


def _template(image: str, *, hash_label: str | None = None) -> V1PodTemplateSpec:
    labels = {"app": "web"}
    if hash_label:
        labels[POD_TEMPLATE_HASH_LABEL] = hash_label
    return V1PodTemplateSpec(
        metadata=V1ObjectMeta(labels=labels),
        spec=V1PodSpec(containers=[V1Container(name="web", image=image)]),
    )


def _replica_set(
    *,
    image: str = "web:1",
    revision: str | None = "2",
    owners: list[V1OwnerReference] | None = None,
) -> V1ReplicaSet:
    annotations = {"team": "payments"}
    if revision is not None:
        annotations[REVISION_ANNOTATION] = revision
    return V1ReplicaSet(
        metadata=V1ObjectMeta(
            name="web-6f7c",
            namespace="prod",
            annotations=annotations,
            owner_references=owners
            if owners is not None
            else [
                V1OwnerReference(api_version="apps/v1", kind="Deployment", name="web", uid="d1")
            ],
        ),
        spec=V1ReplicaSetSpec(
            selector=V1LabelSelector(match_labels={"app": "web"}),
            template=_template(image, hash_label="6f7c"),
        ),
    )


def _deployment(*, image: str = "web:2", paused: bool | None = None) -> V1Deployment:
    return V1Deployment(
        metadata=V1ObjectMeta(
            name="web",
            namespace="prod",
            annotations={
                REVISION_ANNOTATION: "3",
                "kubectl.kubernetes.io/last-applied-configuration": "{}",
            },
        ),
        spec=V1DeploymentSpec(
            selector=V1LabelSelector(match_labels={"app": "web"}),
            template=_template(image),
            paused=paused,
        ),
    )


@pytest.fixture
def workload_manager(mock_k8s_client: MagicMock) -> WorkloadManager:
    """Create a WorkloadManager instance with mocked client."""
    return WorkloadManager(mock_k8s_client)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestRollbackReplicaSet:
    """Tests for rolling a Deployment back to a ReplicaSet revision."""

    def test_patches_deployment_with_replica_set_template(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        apps = mock_k8s_client.apps_v1
        apps.read_namespaced_replica_set.return_value = _replica_set()
        apps.read_namespaced_deployment.return_value = _deployment()

        assert workload_manager.rollback_replica_set("prod/web-6f7c") is True

        apps.read_namespaced_replica_set.assert_called_once_with(
            name="web-6f7c", namespace="prod", _request_timeout=30
        )
        apps.read_namespaced_deployment.assert_called_once_with(
            name="web", namespace="prod", _request_timeout=30
        )
        kwargs = apps.patch_namespaced_deployment.call_args.kwargs
        assert kwargs["name"] == "web"
        assert kwargs["namespace"] == "prod"

        template_op, annotations_op = kwargs["body"]
        assert template_op["op"] == "replace"
        assert template_op["path"] == "/spec/template"
        template = template_op["value"]
        assert template.spec.containers[0].image == "web:1"
        assert POD_TEMPLATE_HASH_LABEL not in template.metadata.labels

        assert annotations_op["path"] == "/metadata/annotations"
        assert annotations_op["value"] == {
            REVISION_ANNOTATION: "3",
            "kubectl.kubernetes.io/last-applied-configuration": "{}",
            "team": "payments",
        }

    def test_does_not_modify_fetched_replica_set(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        rs = _replica_set()
        mock_k8s_client.apps_v1.read_namespaced_replica_set.return_value = rs
        mock_k8s_client.apps_v1.read_namespaced_deployment.return_value = _deployment()

        workload_manager.rollback_replica_set("prod/web-6f7c")

        assert rs.spec.template.metadata.labels[POD_TEMPLATE_HASH_LABEL] == "6f7c"

    def test_skips_when_template_already_current(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.apps_v1.read_namespaced_replica_set.return_value = _replica_set()
        mock_k8s_client.apps_v1.read_namespaced_deployment.return_value = _deployment(
            image="web:1"
        )

        assert workload_manager.rollback_replica_set("prod/web-6f7c") is False
        mock_k8s_client.apps_v1.patch_namespaced_deployment.assert_not_called()

    def test_requires_deployment_owner(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.apps_v1.read_namespaced_replica_set.return_value = _replica_set(
            owners=[V1OwnerReference(api_version="v1", kind="Service", name="x", uid="s1")]
        )

        with pytest.raises(KubernetesRollbackError, match="no Deployment owner reference found"):
            workload_manager.rollback_replica_set("prod/web-6f7c")

        mock_k8s_client.apps_v1.read_namespaced_deployment.assert_not_called()

    def test_requires_revision(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.apps_v1.read_namespaced_replica_set.return_value = _replica_set(
            revision=None
        )

        with pytest.raises(KubernetesRollbackError, match=REVISION_ANNOTATION):
            workload_manager.rollback_replica_set("prod/web-6f7c")

    def test_refuses_paused_deployment(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.apps_v1.read_namespaced_replica_set.return_value = _replica_set()
        mock_k8s_client.apps_v1.read_namespaced_deployment.return_value = _deployment(paused=True)

        with pytest.raises(KubernetesRollbackError, match="paused"):
            workload_manager.rollback_replica_set("prod/web-6f7c")

        mock_k8s_client.apps_v1.patch_namespaced_deployment.assert_not_called()

    def test_missing_replica_set(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.apps_v1.read_namespaced_replica_set.side_effect = ApiException(status=404)

        with pytest.raises(KubernetesNotFoundError, match="ReplicaSet 'web-6f7c' not found"):
            workload_manager.rollback_replica_set("prod/web-6f7c")


@pytest.mark.unit
@pytest.mark.kubernetes
class TestRestartDeployment:
    """Tests for restart_deployment."""

    def test_patches_restarted_at(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        workload_manager.restart_deployment("prod/web")

        kwargs = mock_k8s_client.apps_v1.patch_namespaced_deployment.call_args.kwargs
        assert kwargs["name"] == "web"
        assert kwargs["namespace"] == "prod"
        annotations = kwargs["body"]["spec"]["template"]["metadata"]["annotations"]
        assert RESTARTED_AT_ANNOTATION in annotations

    def test_restart_error(
        self, workload_manager: WorkloadManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.apps_v1.patch_namespaced_deployment.side_effect = ApiException(
            status=404
        )

        with pytest.raises(KubernetesNotFoundError):
            workload_manager.restart_deployment("web")
