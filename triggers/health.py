"""
Health Check HTTP Trigger.

System health endpoint for GET /api/health.

Components Monitored:
    - Orders table (reachable, empty or not)
    - Stage-1 order queue (approximate depth)
    - Stage-2 finalize queue (approximate depth)

Returns 200 when every component is healthy, 503 otherwise.

Exports:
    HealthCheckTrigger: Health check trigger class
"""

import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, List

import azure.functions as func

from config import AppConfig
from infrastructure.interface_repository import IOrderRepository, IQueueRepository
from .http_base import SystemMonitoringTrigger


class HealthCheckTrigger(SystemMonitoringTrigger):
    """Health check HTTP trigger implementation."""

    def __init__(self, order_repo: IOrderRepository, queue_repo: IQueueRepository, config: AppConfig):
        super().__init__("health_check")
        self.order_repo = order_repo
        self.queue_repo = queue_repo
        self.config = config

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        health_data = {
            "status": "healthy",
            "components": {},
            "environment": {
                "environment": self.config.environment,
                "storage_account": self.config.storage_account_name,
                "python_version": sys.version.split()[0],
            },
            "errors": []
        }

        checks = {
            "orders_table": self.check_component_health(
                "orders_table",
                self.order_repo.health_check,
                "Orders table (order relay state)",
            ),
            "orders_queue": self._check_queue(self.config.queues.orders_queue, "Stage-1 order queue"),
            "orders_finalize_queue": self._check_queue(
                self.config.queues.orders_finalize_queue, "Stage-2 finalize queue"
            ),
        }

        for name, result in checks.items():
            health_data["components"][name] = result
            if result["status"] == "unhealthy":
                health_data["status"] = "unhealthy"
                health_data["errors"].append(f"{name}: {result.get('error', 'unhealthy')}")

        return health_data

    def _check_queue(self, queue_name: str, description: str) -> Dict[str, Any]:
        def check_queue():
            return {
                "queue": queue_name,
                "approximate_message_count": self.queue_repo.get_queue_length(queue_name),
            }
        return self.check_component_health(queue_name, check_queue, description)

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Override to provide proper HTTP status codes for health checks.

        Returns:
            - 200 OK when all components are healthy
            - 503 Service Unavailable when any component is unhealthy
        """
        request_id = self._generate_request_id()

        if req.method not in self.get_allowed_methods():
            return self._create_error_response(
                error="Method not allowed",
                message=f"Method {req.method} not allowed. Allowed: GET",
                status_code=405,
                request_id=request_id
            )

        health_data = self.process_request(req)
        status_code = 200 if health_data["status"] == "healthy" else 503
        if status_code != 200:
            self.logger.warning(f"⚠️ [{self.trigger_name}] Unhealthy: {health_data['errors']}")

        response_data = {
            **health_data,
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        return func.HttpResponse(
            json.dumps(response_data, default=str),
            status_code=status_code,
            mimetype="application/json",
            headers={
                "X-Request-ID": request_id,
                "Cache-Control": "no-cache, no-store, must-revalidate"
            }
        )
