# ============================================================================
# CLAUDE CONTEXT - PING HTTP TRIGGER
# ============================================================================
# STATUS: HTTP Trigger - Ultra-lightweight liveness probe
# PURPOSE: GET /api/ping for load balancer liveness checks
# EXPORTS: ping_handler
# DEPENDENCIES: azure.functions (no external service dependencies!)
# ============================================================================
"""
Lightweight Ping HTTP Trigger.

Returns plain-text "OK" to confirm the Function App process is running.

CRITICAL: This endpoint must have ZERO external dependencies.
- NO storage checks
- NO config validation

For component status, use /api/health instead.
"""

import azure.functions as func


def ping_handler(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse("OK", status_code=200, mimetype="text/plain")
