"""Facebook Graph API binding."""

from .client import DEFAULT_API_VERSION, DEFAULT_GRAPH_URL, GraphAPIClient


__all__ = ["DEFAULT_API_VERSION", "DEFAULT_GRAPH_URL", "GraphAPIClient"]
