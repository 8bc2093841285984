"""Resolve ``Depends()`` parameters of the application lifespan.

The docqa lifespan declares its resources (telemetry, the shared HTTP
client and the service clients) as generator dependencies; ``inject``
resolves them with FastAPI's own solver against a synthetic request and
unwinds them in reverse order on shutdown.

Adapted from https://github.com/fastapi/fastapi/discussions/11742
"""

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from functools import partial
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.dependencies.utils import get_dependant, solve_dependencies

logger = logging.getLogger(__name__)

_LIFESPAN_PATH = "/"
_LIFESPAN_HEADER = (b"x-docqa-scope", b"lifespan")


def get_app(request: Request) -> FastAPI:
    """Dependency returning the running application."""
    return request.app


def _lifespan_request(app: FastAPI) -> Request:
    """A stand-in request so lifespan dependencies can ask for the app."""
    return Request(
        scope={
            "type": "http",
            "http_version": "1.1",
            "method": "GET",
            "scheme": "http",
            "path": _LIFESPAN_PATH,
            "raw_path": _LIFESPAN_PATH.encode(),
            "query_string": b"",
            "root_path": "",
            "headers": (_LIFESPAN_HEADER,),
            "client": ("localhost", 0),
            "server": ("localhost", 0),
            "state": app.state,
            "app": app,
        }
    )


def inject(lifespan: Callable[..., Any]) -> Callable[[FastAPI], Any]:
    """Turn a lifespan with ``Depends()`` parameters into a plain one.

    ``app.dependency_overrides`` is honoured, so tests can replace any
    resource builder.
    """

    @asynccontextmanager
    async def wrapper(app: FastAPI):  # type: ignore[misc]
        dependant = get_dependant(path=_LIFESPAN_PATH, call=partial(lifespan, app))

        async with AsyncExitStack() as stack:
            solved = await solve_dependencies(
                request=_lifespan_request(app),
                dependant=dependant,
                async_exit_stack=stack,
                embed_body_fields=False,
                dependency_overrides_provider=app,
            )
            if solved.errors:
                raise RuntimeError(f"Cannot resolve lifespan dependencies: {solved.errors}")
            logger.debug("Lifespan resources resolved: %s", ", ".join(solved.values))
            async with asynccontextmanager(lifespan)(app, **solved.values):
                yield

    return wrapper
