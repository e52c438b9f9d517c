"""Shortest path routes."""

import asyncio

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from topohealth.config import TopoHealthSettings
from topohealth.graph.compute import compute_path
from topohealth.graph.types import WeightingStrategy
from topohealth.web.deps import (
    TopologyStore,
    error_response,
    get_app_settings,
    get_store,
    limiter,
)

router = APIRouter()


class PathRequest(BaseModel):
    """Path query; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_device_id: str | None = None
    destination_device_id: str | None = None
    strategy: WeightingStrategy | None = None
    active_only: bool = False


@router.post("/api/path")
@limiter.limit("60/minute")
async def find_path(
    request: Request,
    query: PathRequest,
    settings: TopoHealthSettings = Depends(get_app_settings),
    store: TopologyStore = Depends(get_store),
):
    """Compute a shortest path over the most recently processed topology.

    A missing or unreachable device is reported in ``error`` with
    ``data`` set to null, not as an HTTP error.
    """
    result = store.get()
    if result is None:
        return error_response(404, "No topology has been processed yet")

    strategy = query.strategy or WeightingStrategy(settings.default_strategy)
    outcome = await asyncio.to_thread(
        compute_path,
        result.topology,
        query.source_device_id,
        query.destination_device_id,
        strategy,
        query.active_only,
    )

    return {
        "success": True,
        "data": outcome.path.model_dump(mode="json", by_alias=True) if outcome.path else None,
        "error": outcome.error,
        "compute_time_ms": outcome.compute_time_ms,
    }
