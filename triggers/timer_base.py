# ============================================================================
# TIMER HANDLER BASE CLASS
# ============================================================================
# STATUS: Trigger layer - Base class for timer trigger handlers
# PURPOSE: Common timer handling: past-due logging, timing, result logging
# ============================================================================
"""
Timer Handler Base Class.

Usage:
    class MyTimerHandler(TimerHandlerBase):
        name = "MyHandler"

        def execute(self) -> Dict[str, Any]:
            return {"success": True, "health_status": "HEALTHY"}

    # In function_app.py:
    @app.timer_trigger(schedule="0 */10 * * * *", ...)
    def my_timer(timer: func.TimerRequest) -> None:
        my_handler.handle(timer)

A timer has no caller to propagate to, so handle() logs an exception
with its traceback and returns an error dict; the next tick runs again.

Exports:
    TimerHandlerBase: Abstract base class for timer handlers
"""

import time
import traceback
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Any

import azure.functions as func

from util_logger import LoggerFactory, ComponentType


class TimerHandlerBase(ABC):
    """
    Subclasses set `name` and implement `execute()` returning a dict with
    at least a 'success' key, optionally 'health_status' and 'summary'.
    """

    name: str = "UnnamedTimer"

    def __init__(self):
        self._logger = None

    @property
    def logger(self):
        """Lazy-load logger so the subclass name is set first."""
        if self._logger is None:
            self._logger = LoggerFactory.create_logger(ComponentType.TRIGGER, self.name)
        return self._logger

    def handle(self, timer: func.TimerRequest) -> Dict[str, Any]:
        if timer.past_due:
            self.logger.warning(f"⏰ {self.name}: Timer is past due - running immediately")

        self.logger.info(f"⏰ {self.name}: Triggered at {datetime.now(timezone.utc).isoformat()}")

        start = time.monotonic()
        try:
            result = self.execute()
        except Exception as e:
            self.logger.error(f"❌ {self.name}: Unhandled exception: {e}\n{traceback.format_exc()}")
            return {
                "success": False,
                "error": str(e),
                "error_type": type(e).__name__,
            }

        result.setdefault("duration_seconds", round(time.monotonic() - start, 2))
        self._log_result(result)
        return result

    @abstractmethod
    def execute(self) -> Dict[str, Any]:
        raise NotImplementedError("Subclass must implement execute()")

    def _log_result(self, result: Dict[str, Any]) -> None:
        duration = result.get("duration_seconds", 0)
        if not result.get("success", False):
            self.logger.error(f"❌ {self.name}: Failed - {result.get('error', 'Unknown error')}")
            return

        health_status = result.get("health_status", "UNKNOWN")
        summary_str = self._format_summary(result.get("summary", {}))
        message = f"{self.name}: Complete - {health_status} ({duration}s){summary_str}"

        if health_status == "HEALTHY":
            self.logger.info(f"✅ {message}")
        else:
            self.logger.warning(f"⚠️ {message}")

    def _format_summary(self, summary: Dict[str, Any]) -> str:
        parts = [
            f"{key}={value}" for key, value in summary.items()
            if isinstance(value, (int, float, str, bool))
        ]
        return " | " + ", ".join(parts) if parts else ""


__all__ = ['TimerHandlerBase']
