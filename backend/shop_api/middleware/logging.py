"""
Shop API Backend: Request Logging Middleware
=============================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the chain and logs method,
       route, status, duration, request ID and client IP.

What we log vs what we DON'T log:
    Log:       method, route template, status, duration, IP, request ID
    Don't log: request bodies, uploaded file contents, raw paths of routes
               with path parameters (GET /api/users/{email}/{password}
               carries credentials), so the matched template is logged instead.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shop_api.middleware.request_id import request_id_var

logger = logging.getLogger("shop_api.access")


def _route_path(request: Request) -> str:
    """The matched route template (e.g. /api/products/{product_id}), else the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        if request.url.path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        # Route is only known after routing, i.e. after call_next
        path = _route_path(request)
        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
