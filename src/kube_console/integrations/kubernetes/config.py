"""Configuration models for the Kubernetes console."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "kcon" / "config.yaml"


class ClusterConfig(BaseModel):
    """Configuration for a single Kubernetes cluster."""

    model_config = ConfigDict(extra="forbid")

    context: str = ""
    kubeconfig: str = "~/.kube/config"
    namespace: str = "default"
    timeout: int = 30

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str) -> str:
        """Expand ~ in kubeconfig path."""
        return str(Path(v).expanduser())


class KubernetesDefaultsConfig(BaseModel):
    """Default settings for Kubernetes operations."""

    model_config = ConfigDict(extra="forbid")

    timeout: int = 30
    retry_attempts: int = 3

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry_attempts is at least one."""
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v


class ConsoleUIConfig(BaseModel):
    """Settings for the terminal console itself."""

    model_config = ConfigDict(extra="forbid")

    start_kind: str = "ReplicaSet"
    show_hints: bool = True

    @field_validator("start_kind")
    @classmethod
    def validate_start_kind(cls, v: str) -> str:
        """Reject an empty start kind."""
        if not v.strip():
            raise ValueError("start_kind must not be empty")
        return v.strip()


class KubernetesConsoleConfig(BaseModel):
    """Complete console configuration."""

    model_config = ConfigDict(extra="forbid")

    clusters: dict[str, ClusterConfig] = {}
    active_cluster: str | None = None
    defaults: KubernetesDefaultsConfig = KubernetesDefaultsConfig()
    ui: ConsoleUIConfig = ConsoleUIConfig()

    @classmethod
    def from_file(cls, path: Path | None = None) -> KubernetesConsoleConfig:
        """Load configuration from a YAML file, then apply environment overrides.

        A missing file is not an error: defaults plus environment apply.

        Args:
            path: Config file path. Defaults to ~/.config/kcon/config.yaml.

        Raises:
            ValueError: If the file is not a YAML mapping.
        """
        config_path = path or DEFAULT_CONFIG_PATH
        base: dict[str, Any] = {}
        if config_path.exists():
            loaded = yaml.safe_load(config_path.read_text()) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file {config_path} must contain a mapping")
            base = loaded
        return cls.from_env(base)

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> KubernetesConsoleConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KCON_K8S_CONTEXT: Override active Kubernetes context
            KCON_K8S_NAMESPACE: Override default namespace
            KCON_K8S_KUBECONFIG: Override kubeconfig path
            KCON_K8S_TIMEOUT: Default request timeout in seconds
            KCON_START_KIND: Resource kind shown on startup
        """
        config_dict = dict(base_config) if base_config else {}
        config_dict["defaults"] = dict(config_dict.get("defaults") or {})
        config_dict["ui"] = dict(config_dict.get("ui") or {})

        if context := os.environ.get("KCON_K8S_CONTEXT"):
            config_dict["active_cluster"] = context

        if timeout := os.environ.get("KCON_K8S_TIMEOUT"):
            config_dict["defaults"]["timeout"] = int(timeout)

        if start_kind := os.environ.get("KCON_START_KIND"):
            config_dict["ui"]["start_kind"] = start_kind

        instance = cls.model_validate(config_dict)

        if kubeconfig := os.environ.get("KCON_K8S_KUBECONFIG"):
            instance.apply_kubeconfig(kubeconfig)

        if namespace := os.environ.get("KCON_K8S_NAMESPACE"):
            instance.apply_namespace(namespace)

        return instance

    def _ensure_active_cluster(self) -> ClusterConfig:
        """Return the active cluster config, creating one for a raw context name."""
        if cluster := self.get_active_cluster():
            return cluster
        name = self.active_cluster or "default"
        cluster = ClusterConfig(context=self.active_cluster or "")
        self.clusters[name] = cluster
        self.active_cluster = name
        return cluster

    def apply_kubeconfig(self, kubeconfig: str) -> None:
        """Point every configured cluster at another kubeconfig file."""
        self._ensure_active_cluster()
        path = str(Path(kubeconfig).expanduser())
        for cluster_cfg in self.clusters.values():
            cluster_cfg.kubeconfig = path

    def apply_namespace(self, namespace: str) -> None:
        """Override the default namespace of the active cluster."""
        self._ensure_active_cluster().namespace = namespace

    def get_active_cluster(self) -> ClusterConfig | None:
        """Return the active cluster config, or the first configured one."""
        if self.active_cluster and self.active_cluster in self.clusters:
            return self.clusters[self.active_cluster]
        if self.clusters and self.active_cluster is None:
            return next(iter(self.clusters.values()))
        return None

    def get_active_context(self) -> str | None:
        """Get the active kubeconfig context name.

        Returns the context of the active named cluster, the active_cluster
        itself when it is a raw context name, or None to use the kubeconfig's
        current context.
        """
        if cluster := self.get_active_cluster():
            return cluster.context or None
        return self.active_cluster

    def get_active_kubeconfig(self) -> str | None:
        """Get the kubeconfig path for the active cluster, if configured."""
        if cluster := self.get_active_cluster():
            return cluster.kubeconfig
        return None

    def get_active_namespace(self) -> str:
        """Get the default namespace for the active cluster."""
        if cluster := self.get_active_cluster():
            return cluster.namespace
        return "default"

    def get_active_timeout(self) -> int:
        """Get the request timeout for the active cluster."""
        if cluster := self.get_active_cluster():
            return cluster.timeout
        return self.defaults.timeout
