"""Service layer: resource managers over the Kubernetes client."""
