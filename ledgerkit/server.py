"""A small WSGI application exposing health and readiness endpoints."""

import json
from typing import Callable, Dict, Iterable, List, Tuple

_SERVICE = "ledgerkit"
_VERSION = "0.1.0"
_ALLOWED_METHODS = ("GET", "HEAD")

StartResponse = Callable[[str, List[Tuple[str, str]]], object]


def health_check() -> dict:
    """Liveness information about the service."""
    return {"status": "ok", "service": _SERVICE, "version": _VERSION}


def ready_check() -> dict:
    """Readiness of the service to take traffic."""
    return {"status": "ready"}


_ROUTES: Dict[str, Callable[[], dict]] = {
    "/health": health_check,
    "/ready": ready_check,
}


def _empty(start_response: StartResponse, status: str, extra=()) -> List[bytes]:
    start_response(status, [("Content-Length", "0"), *extra])
    return []


def create_app() -> Callable[[dict, StartResponse], Iterable[bytes]]:
    """The WSGI application serving every route."""

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        handler = _ROUTES.get(environ.get("PATH_INFO") or "/")
        if handler is None:
            return _empty(start_response, "404 Not Found")
        method = environ.get("REQUEST_METHOD", "GET").upper()
        if method not in _ALLOWED_METHODS:
            return _empty(
                start_response,
                "405 Method Not Allowed",
                [("Allow", ",".join(_ALLOWED_METHODS))],
            )
        body = json.dumps(handler()).encode("utf-8")
        start_response(
            "200 OK",
            [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
        )
        return [] if method == "HEAD" else [body]

    return app