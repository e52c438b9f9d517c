"""HTTP API for topology health and path queries."""

from topohealth.web.app import create_app

__all__ = ["create_app"]
