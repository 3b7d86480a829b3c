"""Analytics API: completion counts, supervisor metrics, workload balance.

GET /api/analytics                    — full analytics snapshot
GET /api/analytics/supervisor/{name}  — metrics for one supervisor
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from taskboard.api.deps import DOMAIN_ERRORS, get_services, to_http_error
from taskboard.models.analytics import Analytics, SupervisorMetrics
from taskboard.services.registry import ServiceRegistry

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=Analytics)
async def get_analytics(services: ServiceRegistry = Depends(get_services)) -> Analytics:
    """Summary counts are computed fresh on every call, nothing is cached."""
    try:
        return await services.analytics.get_analytics()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch analytics") from e


@router.get("/supervisor/{name}", response_model=SupervisorMetrics)
async def get_supervisor_metrics(
    name: str,
    services: ServiceRegistry = Depends(get_services),
) -> SupervisorMetrics:
    try:
        metrics = await services.analytics.get_supervisor_metrics(name)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch supervisor metrics") from e
    if metrics is None:
        raise HTTPException(status_code=404, detail="Supervisor not found")
    return metrics
