from __future__ import annotations

import logging

from fastapi import FastAPI

from skill_registry.api.credentials import learners_router
from skill_registry.api.credentials import router as credentials_router
from skill_registry.api.events import router as events_router
from skill_registry.api.health import router as health_router
from skill_registry.api.issuers import router as issuers_router
from skill_registry.api.metrics_endpoint import router as metrics_router
from skill_registry.core.config import SETTINGS
from skill_registry.core.logging import setup_logging
from skill_registry.middleware.metrics import MetricsMiddleware
from skill_registry.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="skill-registry",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(issuers_router)
app.include_router(credentials_router)
app.include_router(learners_router)
app.include_router(events_router)

logger.info(
    "skill-registry started  env=%s log_level=%s port=%d owner=%s docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.registry_owner,
    "on" if SETTINGS.is_dev else "off",
)
