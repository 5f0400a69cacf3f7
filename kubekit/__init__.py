"""kubekit: Kubernetes API client and CLI."""

__version__ = "0.1.0"
