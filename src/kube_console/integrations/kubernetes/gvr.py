"""Group/version/resource identifiers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GVR:
    """A group/version/resource triple, e.g. ``apps/v1/replicasets``.

    Core group resources are written without a group: ``v1/pods``.
    """

    group: str
    version: str
    resource: str

    @classmethod
    def parse(cls, path: str) -> GVR:
        """Parse a ``[group/]version/resource`` path.

        Raises:
            ValueError: If the path does not have two or three segments.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        if len(parts) == 2:
            return cls(group="", version=parts[0], resource=parts[1])
        if len(parts) == 3:
            return cls(group=parts[0], version=parts[1], resource=parts[2])
        raise ValueError(f"invalid GVR '{path}': expected [group/]version/resource")

    @property
    def api_version(self) -> str:
        """The apiVersion string (``apps/v1`` or ``v1``)."""
        return f"{self.group}/{self.version}" if self.group else self.version

    def __str__(self) -> str:
        return f"{self.api_version}/{self.resource}"
