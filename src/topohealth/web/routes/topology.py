"""Topology processing and link listing routes."""

import asyncio
import time

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from pydantic import ValidationError

from topohealth.analysis.correlator import LinkCorrelator
from topohealth.analysis.filters import DriftRange, FilterCriteria, filter_links, filter_stats
from topohealth.config import TopoHealthSettings
from topohealth.errors import DocumentError, TopoHealthError
from topohealth.logging import get_logger
from topohealth.model.loader import DocumentLoader
from topohealth.model.topology import DataCompleteness, HealthStatus, TopologyResult
from topohealth.web.deps import (
    TopologyStore,
    error_response,
    get_app_settings,
    get_store,
    limiter,
)

logger = get_logger(__name__)

router = APIRouter()

_MB = 1024 * 1024


def _correlate_files(settings: TopoHealthSettings) -> TopologyResult:
    loader = DocumentLoader()
    snapshot, isis = loader.load(settings.snapshot_file, settings.isis_file)
    return LinkCorrelator(settings.drift_threshold_pct).correlate(snapshot, isis)


def _correlate_content(
    snapshot_content: bytes,
    isis_content: bytes,
    settings: TopoHealthSettings,
) -> TopologyResult:
    loader = DocumentLoader()
    snapshot = loader.decode_snapshot(loader.parse_json(snapshot_content, label="Snapshot"))
    isis = loader.decode_isis(loader.parse_json(isis_content, label="ISIS"))
    return LinkCorrelator(settings.drift_threshold_pct).correlate(snapshot, isis)


def _log_summary(result: TopologyResult, started: float) -> None:
    logger.info(
        "Topology processing complete: %d links (%d healthy, %d drift high) in %.0f ms",
        result.summary.total_links,
        result.summary.healthy,
        result.summary.drift_high,
        (time.perf_counter() - started) * 1000,
    )


@router.get("/api/topology")
@limiter.limit("30/minute")
async def get_topology(
    request: Request,
    settings: TopoHealthSettings = Depends(get_app_settings),
    store: TopologyStore = Depends(get_store),
):
    """Process the configured local snapshot and IS-IS files."""
    started = time.perf_counter()
    logger.info("Topology request received (local data files)")

    try:
        result = await asyncio.to_thread(_correlate_files, settings)
    except TopoHealthError as e:
        logger.error("Topology processing failed: %s", e)
        return error_response(500, e.message)

    store.set(result)
    _log_summary(result, started)
    return {"success": True, "data": result.model_dump(mode="json")}


@router.post("/api/upload")
@limiter.limit("10/minute")
async def upload_topology(
    request: Request,
    snapshot: UploadFile | None = File(default=None),
    isis: UploadFile | None = File(default=None),
    settings: TopoHealthSettings = Depends(get_app_settings),
    store: TopologyStore = Depends(get_store),
):
    """Process uploaded snapshot and IS-IS documents.

    Missing files, oversized files and unparseable documents are
    rejected with 400.
    """
    started = time.perf_counter()
    logger.info("Upload request received")

    if snapshot is None or isis is None:
        logger.warning("Upload validation failed: missing files")
        return error_response(400, "Both snapshot and ISIS files are required")

    snapshot_content = await snapshot.read()
    isis_content = await isis.read()
    logger.info(
        "Files received: snapshot %s (%d bytes), isis %s (%d bytes)",
        snapshot.filename,
        len(snapshot_content),
        isis.filename,
        len(isis_content),
    )

    if len(snapshot_content) > settings.max_snapshot_bytes:
        logger.warning("Snapshot file too large: %d bytes", len(snapshot_content))
        return error_response(
            400, f"Snapshot file must be less than {settings.max_snapshot_bytes // _MB}MB"
        )
    if len(isis_content) > settings.max_isis_bytes:
        logger.warning("ISIS file too large: %d bytes", len(isis_content))
        return error_response(
            400, f"ISIS file must be less than {settings.max_isis_bytes // _MB}MB"
        )

    try:
        result = await asyncio.to_thread(
            _correlate_content, snapshot_content, isis_content, settings
        )
    except DocumentError as e:
        logger.warning("Upload rejected: %s", e)
        return error_response(400, e.message)
    except TopoHealthError as e:
        logger.error("Upload processing failed: %s", e)
        return error_response(500, e.message)

    store.set(result)
    _log_summary(result, started)
    return {"success": True, "data": result.model_dump(mode="json")}


@router.get("/api/links")
@limiter.limit("60/minute")
async def list_links(
    request: Request,
    bandwidth_tier: list[int] = Query(default=[]),
    health_status: list[HealthStatus] = Query(default=[]),
    data_status: list[DataCompleteness] = Query(default=[]),
    drift_min: float = Query(default=0, ge=0),
    drift_max: float = Query(default=100, ge=0),
    search: str = "",
    store: TopologyStore = Depends(get_store),
):
    """List links of the current topology that match the filters.

    Repeated query parameters select several values; omitting one
    selects all.
    """
    result = store.get()
    if result is None:
        return error_response(404, "No topology has been processed yet")

    try:
        criteria = FilterCriteria(
            bandwidth_tiers=frozenset(bandwidth_tier),
            health_statuses=frozenset(health_status),
            data_statuses=frozenset(data_status),
            drift_range=DriftRange(min=drift_min, max=drift_max),
            search_query=search,
        )
    except ValidationError as e:
        return error_response(400, f"Invalid filter: {e.errors()[0]['msg']}")
    links = filter_links(result.topology, criteria)

    return {
        "success": True,
        "data": {
            "links": [link.model_dump(mode="json") for link in links],
            "stats": filter_stats(result.topology, links).model_dump(),
        },
    }
