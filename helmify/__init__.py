"""Building blocks for generating Helm charts from Kubernetes manifests."""

__version__ = "0.1.0"