"""Small request and time helpers shared by middleware, handlers and routes."""

from datetime import datetime

from fastapi import Request
from fastapi.routing import APIRoute
from starlette.routing import Match


def host(request: Request) -> str:
    """Return the client IP address, or "unknown" behind odd transports."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return the current local time as `YYYY-MM-DD HH:MM:SS`."""
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def get_summary(request: Request) -> str | None:
    """Return the OpenAPI summary of the route matching the request, if any."""
    for route in request.app.routes:
        if isinstance(route, APIRoute) and route.matches(request.scope)[0] == Match.FULL:
            return route.summary
    return None
