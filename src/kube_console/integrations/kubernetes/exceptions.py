"""Errors raised by the console's Kubernetes layer.

Everything derives from ``KubernetesError`` so the viewers can show any
failure as a single line in the status area.
"""

from __future__ import annotations

from typing import Any, ClassVar


class KubernetesError(Exception):
    """A failed Kubernetes operation.

    Attributes:
        message: Text shown to the user.
        status_code: HTTP status returned by the API server, if any.
        resource_type: Kind or plural resource the operation targeted.
        resource_name: Name of the targeted object.
        namespace: Namespace of the targeted object.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.namespace = namespace

    @property
    def location(self) -> str | None:
        """``Kind/name in namespace``, when the target object is known."""
        if not (self.resource_type and self.resource_name):
            return None
        where = f"{self.resource_type}/{self.resource_name}"
        return f"{where} in {self.namespace}" if self.namespace else where

    def __str__(self) -> str:
        text = self.message
        if self.status_code:
            text += f" (status: {self.status_code})"
        if location := self.location:
            text += f" [{location}]"
        return text


class KubernetesConnectionError(KubernetesError):
    """The API server could not be reached or no kubeconfig could be loaded."""

    def __init__(
        self,
        message: str = "Failed to connect to Kubernetes cluster",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class KubernetesAuthError(KubernetesError):
    """Credentials were rejected (401) or RBAC denied the request (403)."""

    def __init__(
        self,
        message: str = "Kubernetes authentication/authorization failed",
        status_code: int | None = 401,
        reason: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.reason = reason


class KubernetesObjectError(KubernetesError):
    """Base for errors about one specific object.

    Subclasses fix the HTTP status and describe what happened to the object;
    the message is built from the object's location when it is known.
    """

    status: ClassVar[int]
    outcome: ClassVar[str]
    fallback: ClassVar[str]

    def __init__(
        self,
        message: str | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        if resource_type and resource_name:
            message = f"{resource_type} '{resource_name}' {self.outcome}"
            if namespace:
                message += f" in namespace '{namespace}'"
        super().__init__(
            message or self.fallback,
            status_code=self.status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesNotFoundError(KubernetesObjectError):
    """The object does not exist, or did not match the requested selector."""

    status = 404
    outcome = "not found"
    fallback = "Kubernetes resource not found"


class KubernetesConflictError(KubernetesObjectError):
    """The object changed between read and write (409)."""

    status = 409
    outcome = "was modified concurrently"
    fallback = "Resource conflict"


class KubernetesValidationError(KubernetesError):
    """The API server rejected a patch or request body (400/422).

    Attributes:
        causes: ``details.causes`` entries of the API Status, if it sent any.
    """

    def __init__(
        self,
        message: str = "Invalid resource specification",
        status_code: int | None = 422,
        causes: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.causes = causes or []


class KubernetesTimeoutError(KubernetesError):
    """A request exceeded its deadline, client or server side."""

    def __init__(
        self,
        message: str = "Kubernetes request timed out",
        timeout_seconds: int | None = None,
    ) -> None:
        if timeout_seconds:
            message = f"{message} (after {timeout_seconds}s)"
        super().__init__(message)
        self.timeout_seconds = timeout_seconds


class KubernetesDecodeError(KubernetesError):
    """A raw API object does not fit the typed model of its kind.

    Attributes:
        errors: Field errors reported by pydantic.
    """

    def __init__(
        self,
        message: str = "Unable to decode Kubernetes object",
        resource_type: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        if resource_type:
            message = f"{message} as {resource_type}"
        super().__init__(message, resource_type=resource_type)
        self.errors = errors or []


class KubernetesRollbackError(KubernetesError):
    """A ReplicaSet cannot be rolled back to.

    Raised for a missing owning Deployment, a missing revision annotation or
    a paused Deployment.
    """
