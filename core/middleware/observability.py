"""
Observability middleware.

Correlates each registry request with a correlation ID and the active
OpenTelemetry trace, and writes one structured log line per request.
"""

import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _outcome(status_code: int) -> str:
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Sets request.correlation_id (and request.trace_id while a span is
    recording) and echoes both, with the outcome and duration, as
    response headers.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with correlation headers
        """
        request.correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())  # type: ignore
        context = self._request_context(request)
        logger.debug("Request started", extra=context)

        started = time.monotonic()
        try:
            response = self.get_response(request)
        except Exception as e:
            context.update(
                request_status="exception",
                error_type=type(e).__name__,
                duration_ms=self._elapsed_ms(started),
            )
            logger.error("Request failed: %s", e, extra=context, exc_info=True)
            raise

        elapsed_ms = self._elapsed_ms(started)
        outcome = _outcome(response.status_code)
        context.update(
            request_status=outcome,
            status_code=response.status_code,
            duration_ms=elapsed_ms,
        )
        # The caller is resolved by middleware further down the chain
        caller = getattr(request, "caller_identity", None)
        if caller:
            context["caller_identity"] = caller
        license_id = self._license_id(request)
        if license_id is not None:
            context["license_id"] = license_id

        level = {
            "server_error": logging.ERROR,
            "client_error": logging.WARNING,
        }.get(outcome, logging.INFO)
        logger.log(level, "%s %s -> %d", request.method, request.path, response.status_code, extra=context)

        response[CORRELATION_HEADER] = request.correlation_id  # type: ignore
        response["X-Request-Status"] = outcome
        response["X-Request-Duration"] = f"{elapsed_ms / 1000:.3f}"
        if "trace_id" in context:
            response["X-Trace-ID"] = context["trace_id"]
        return response

    @staticmethod
    def _request_context(request: HttpRequest) -> Dict[str, Any]:
        context: Dict[str, Any] = {
            "correlation_id": request.correlation_id,  # type: ignore
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            context["trace_id"] = format_trace_id(span_context.trace_id)
            context["span_id"] = format_span_id(span_context.span_id)
            request.trace_id = context["trace_id"]  # type: ignore
        return context

    @staticmethod
    def _license_id(request: HttpRequest) -> Optional[int]:
        match = getattr(request, "resolver_match", None)
        if match is None:
            return None
        return match.kwargs.get("license_id")

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.monotonic() - started) * 1000, 2)
