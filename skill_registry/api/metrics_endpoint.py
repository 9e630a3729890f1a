"""Prometheus metrics endpoint.

Prometheus scrapes this every N seconds and gets plain text in the
exposition format, e.g.:

  # TYPE registry_credentials_issued_total counter
  registry_credentials_issued_total 42.0
  registry_rejections_total{error="NotOriginalIssuer"} 3.0

Restrict access in production; rejection counts by error code reveal
who is probing the registry.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose all Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
