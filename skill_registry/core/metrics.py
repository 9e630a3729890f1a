"""Application metrics using the Prometheus client library.

All metrics are defined here so there is a single inventory of what the
service measures.  Other modules import specific metrics and increment
them at the point of action.

HTTP metrics are populated by MetricsMiddleware.  Registry metrics are
populated by the services that own each transition: a counter per
accepted write, a counter of rejections labelled by error code, and a
counter of verification outcomes.

Counters never go down, so "credentials revoked per hour" is
rate(registry_credentials_revoked_total[1h]) in PromQL.  The current
number of credentials is not a counter: it is the ledger's
get_total_credentials(), exposed on /health.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Registry calls are in-memory; anything past 100ms is lock contention
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Registry metrics
# ---------------------------------------------------------------------------

ISSUERS_REGISTERED = Counter(
    "registry_issuers_registered_total",
    "Issuers that completed self-registration",
)

ISSUERS_AUTHORIZED = Counter(
    "registry_issuers_authorized_total",
    "Authorization actions applied by the registry owner",
)

CREDENTIALS_ISSUED = Counter(
    "registry_credentials_issued_total",
    "Credentials issued",
)

CREDENTIALS_REVOKED = Counter(
    "registry_credentials_revoked_total",
    "Credentials revoked by their issuer",
)

VERIFICATIONS = Counter(
    "registry_verifications_total",
    "Verification checks by outcome",
    ["result"],  # "valid" or "invalid"
)

REJECTIONS = Counter(
    "registry_rejections_total",
    "Registry calls rejected, by error code",
    ["error"],  # NotOwner, AlreadyInactive, InvalidSkillName, ...
)
