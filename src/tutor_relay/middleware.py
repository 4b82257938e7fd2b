"""aiohttp error middleware and CORS setup."""

import aiohttp_cors
import structlog
from aiohttp import web

from tutor_relay.errors import InternalError, TutorRelayError

logger = structlog.get_logger()

CORS_ALLOW_METHODS = ("GET", "POST", "PUT", "DELETE")
CORS_ALLOW_HEADERS = ("Content-Type", "Authorization")


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Convert relay errors to JSON responses carrying their status code.

    Request method and path are bound to the log context for the duration
    of the handler, so gateway events carry them too.
    """
    with structlog.contextvars.bound_contextvars(method=request.method, path=request.path):
        try:
            return await handler(request)
        except TutorRelayError as e:
            logger.warning(
                "request_failed",
                status_code=e.status_code,
                error_type=type(e).__name__,
                message=e.message,
            )
            return web.json_response(e.to_dict(), status=e.status_code)
        except web.HTTPException:
            raise
        except Exception:
            logger.exception("unhandled_error")
            error = InternalError()
            return web.json_response(error.to_dict(), status=error.status_code)


def setup_cors(app: web.Application, origin: str) -> None:
    """Allow browser calls from ``origin`` on every registered route."""
    cors = aiohttp_cors.setup(app, defaults={
        origin: aiohttp_cors.ResourceOptions(
            allow_methods=CORS_ALLOW_METHODS,
            allow_headers=CORS_ALLOW_HEADERS,
        ),
    })
    for route in list(app.router.routes()):
        cors.add(route)
    logger.info("cors_enabled", origin=origin)
