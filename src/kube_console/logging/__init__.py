"""Logging configuration for kube_console."""

from kube_console.logging.config import configure_logging, prune_old_logs, resolve_log_file

__all__ = ["configure_logging", "prune_old_logs", "resolve_log_file"]
