"""Table columns and row renderers per workload kind."""

from __future__ import annotations

from kube_console.integrations.kubernetes.models import ResourceObject

Columns = tuple[tuple[str, int], ...]

POD_COLUMNS: Columns = (
    ("Name", 40),
    ("Namespace", 15),
    ("Status", 12),
    ("Ready", 8),
    ("Restarts", 10),
    ("Node", 20),
    ("Age", 8),
)

DEPLOYMENT_COLUMNS: Columns = (
    ("Name", 30),
    ("Namespace", 15),
    ("Ready", 10),
    ("Up-to-date", 12),
    ("Available", 10),
    ("Age", 8),
)

REPLICASET_COLUMNS: Columns = (
    ("Name", 40),
    ("Namespace", 15),
    ("Desired", 10),
    ("Current", 10),
    ("Ready", 8),
    ("Age", 8),
)

STATEFULSET_COLUMNS: Columns = (
    ("Name", 30),
    ("Namespace", 15),
    ("Ready", 10),
    ("Age", 8),
)

DAEMONSET_COLUMNS: Columns = (
    ("Name", 30),
    ("Namespace", 15),
    ("Desired", 10),
    ("Current", 10),
    ("Ready", 8),
    ("Age", 8),
)

PHASE_COLORS = {
    "Running": "green",
    "Succeeded": "green",
    "Pending": "yellow",
    "Failed": "red",
    "Unknown": "dim",
}


def _count(value: object) -> str:
    return str(value if isinstance(value, int) else 0)


def pod_row(r: ResourceObject) -> tuple[str, ...]:
    statuses = r.status_field("containerStatuses", default=[])
    containers = r.spec_field("containers", default=[])
    ready = sum(1 for s in statuses if s.get("ready"))
    restarts = sum(int(s.get("restartCount") or 0) for s in statuses)
    phase = r.status_field("phase", default="Unknown")
    color = PHASE_COLORS.get(phase, "dim")
    return (
        r.name,
        r.namespace or "",
        f"[{color}]{phase}[/{color}]",
        f"{ready}/{len(containers)}",
        str(restarts),
        r.spec_field("nodeName", default=""),
        r.age,
    )


def deployment_row(r: ResourceObject) -> tuple[str, ...]:
    ready = f"{_count(r.status_field('readyReplicas'))}/{_count(r.spec_field('replicas'))}"
    return (
        r.name,
        r.namespace or "",
        ready,
        _count(r.status_field("updatedReplicas")),
        _count(r.status_field("availableReplicas")),
        r.age,
    )


def replica_set_row(r: ResourceObject) -> tuple[str, ...]:
    return (
        r.name,
        r.namespace or "",
        _count(r.spec_field("replicas")),
        _count(r.status_field("replicas")),
        _count(r.status_field("readyReplicas")),
        r.age,
    )


def stateful_set_row(r: ResourceObject) -> tuple[str, ...]:
    ready = f"{_count(r.status_field('readyReplicas'))}/{_count(r.spec_field('replicas'))}"
    return (r.name, r.namespace or "", ready, r.age)


def daemon_set_row(r: ResourceObject) -> tuple[str, ...]:
    return (
        r.name,
        r.namespace or "",
        _count(r.status_field("desiredNumberScheduled")),
        _count(r.status_field("currentNumberScheduled")),
        _count(r.status_field("numberReady")),
        r.age,
    )
