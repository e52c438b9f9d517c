"""Shared dependencies for web routes."""

import threading

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from topohealth.config import TopoHealthSettings
from topohealth.model.topology import TopologyResult

# Shared rate limiter for the route decorators
limiter = Limiter(key_func=get_remote_address)


class TopologyStore:
    """Holds the most recently processed topology.

    Route handlers replace the result wholesale; readers get the
    reference that was current when they asked.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._result: TopologyResult | None = None

    def get(self) -> TopologyResult | None:
        with self._lock:
            return self._result

    def set(self, result: TopologyResult) -> None:
        with self._lock:
            self._result = result

    def clear(self) -> None:
        with self._lock:
            self._result = None


def get_store(request: Request) -> TopologyStore:
    """Get the topology store from app state."""
    return request.app.state.topology_store


def get_app_settings(request: Request) -> TopoHealthSettings:
    """Get the settings the app was created with."""
    return request.app.state.settings


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON failure envelope used by every API route."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )
