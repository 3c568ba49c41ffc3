"""HTTP convenience layer: retrying GET over httpx."""

from retry_orchestrator.http.client import fetch

__all__ = ["fetch"]
