"""Route modules for the topohealth API."""

from topohealth.web.routes import health, path, topology

__all__ = ["health", "path", "topology"]
