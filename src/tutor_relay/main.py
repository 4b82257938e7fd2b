"""Application entrypoint - aiohttp server relaying prompts to Mistral."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog
from aiohttp import web
from aiohttp.web import Application, Request, Response, run_app

from tutor_relay.config import Settings, get_settings
from tutor_relay.middleware import error_middleware, setup_cors
from tutor_relay.mistral import MistralClient
from tutor_relay.prompts import (
    DEFAULT_KEYWORD_GROUPS,
    AskRequest,
    build_prompt,
    load_keyword_groups,
)

SERVICE_NAME = "tutor-relay"

KEYWORD_GROUPS_KEY = web.AppKey("keyword_groups", tuple)
MISTRAL_CLIENT_KEY = web.AppKey("mistral_client", MistralClient)


def _prepare_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(
    log_level: str = "INFO",
    log_file: str = "",
    log_file_max_bytes: int = 10_485_760,
    log_file_backup_count: int = 5,
    service: str = SERVICE_NAME,
) -> None:
    """Route structlog events through stdlib logging.

    Console output is always on. When ``log_file`` is set, events also go to
    a rotating file and are rendered as JSON lines. Every event carries
    ``service`` plus whatever request context is bound via contextvars.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers = [_prepare_handler(logging.StreamHandler(), level)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_prepare_handler(
            RotatingFileHandler(
                filename=log_file,
                maxBytes=log_file_max_bytes,
                backupCount=log_file_backup_count,
                encoding="utf-8",
            ),
            level,
        ))

    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)

    renderer = structlog.processors.JSONRenderer() if log_file else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service)


logger = structlog.get_logger()


async def ask(request: Request) -> Response:
    """Build a prompt from the query string and return Mistral's completion."""
    ask_request = AskRequest.model_validate(dict(request.query))
    prompt = build_prompt(ask_request, keyword_groups=request.app[KEYWORD_GROUPS_KEY])

    logger.info(
        "ask_request",
        subject=ask_request.subject,
        topic=ask_request.topic[:100],
        has_modification=bool(ask_request.modification_request),
        has_previous_answer=bool(ask_request.previous_answer),
    )

    client: MistralClient = request.app[MISTRAL_CLIENT_KEY]
    result = await client.complete(prompt)
    return web.json_response(result.model_dump(mode="json"))


async def health(request: Request) -> Response:
    """Health check endpoint."""
    return web.json_response({"status": "healthy"})


def create_app(
    settings: Settings | None = None,
    mistral_client: MistralClient | None = None,
) -> Application:
    """Create and configure the aiohttp application."""
    settings = settings or get_settings()

    if settings.mistral_api_key:
        logger.info("mistral_api_key_loaded")
    else:
        logger.warning("mistral_api_key_missing", env="MISTRAL_API_KEY")

    keyword_groups = DEFAULT_KEYWORD_GROUPS
    if settings.intent_keywords_path:
        try:
            keyword_groups = load_keyword_groups(settings.intent_keywords_path)
        except Exception:
            logger.error("intent_keywords_invalid", path=settings.intent_keywords_path)
            raise

    app = Application(middlewares=[error_middleware])
    app[KEYWORD_GROUPS_KEY] = keyword_groups
    app[MISTRAL_CLIENT_KEY] = mistral_client or MistralClient(settings)

    async def close_client(app: Application) -> None:
        await app[MISTRAL_CLIENT_KEY].close()

    app.on_cleanup.append(close_client)

    app.router.add_get("/mistral/ask", ask)
    app.router.add_get("/health", health)

    if settings.cors_origin:
        setup_cors(app, settings.cors_origin)

    return app


def main() -> None:
    """Run the relay server."""
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_file_max_bytes=settings.log_file_max_bytes,
        log_file_backup_count=settings.log_file_backup_count,
    )

    logger.info(
        "starting_server",
        host=settings.host,
        port=settings.port,
        model=settings.mistral_model,
        log_level=settings.log_level,
    )

    app = create_app(settings)
    run_app(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
