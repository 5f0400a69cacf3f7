"""Infrastructure layer: constants and the Kubernetes client."""
