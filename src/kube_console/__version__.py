"""Version information for kube_console."""

__version__ = "0.1.0"
