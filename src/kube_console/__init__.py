"""kube-console - a terminal console for browsing and operating on Kubernetes resources."""

from kube_console.__version__ import __version__

__all__ = ["__version__"]
