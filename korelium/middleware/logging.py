# korelium/middleware/logging.py
"""
Request logging for the catalog and admin API.

One line per request, keyed by the matched route template so that
`/api/course/{slug}` aggregates across slugs.
"""

import time

from fastapi import Request

from korelium.core.logging import get_logger

logger = get_logger(__name__)


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


async def logging_middleware(request: Request, call_next):
    start_time = time.perf_counter()
    fields = {
        "method": request.method,
        "path": request.url.path,
        "client": request.client.host if request.client else None,
        "admin": "authorization" in request.headers,
    }

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "request failed",
            route=_route_template(request),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            **fields,
        )
        raise

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    log = logger.error if response.status_code >= 500 else logger.info
    log(
        "request completed",
        route=_route_template(request),
        status_code=response.status_code,
        duration_ms=duration_ms,
        **fields,
    )
    return response
