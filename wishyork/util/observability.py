"""Logfire setup for the comments service.

Application code calls ``logfire`` directly for spans and events:

    with logfire.span("comment_service.add_comment", content=str(content)):
        ...
        logfire.info("Comment added", comment_id=str(comment.id))

This module only wires Logfire up at process start and attaches the
FastAPI and SQLAlchemy integrations.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from wishyork.config import Settings

SERVICE_NAME = "wishyork-comments"


def _should_send(settings: Settings) -> bool:
    # An explicit flag wins; otherwise send only when a token is configured
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Without OBSERVABILITY__LOGFIRE_TOKEN everything stays on the console.
    OBSERVABILITY__SEND_TO_LOGFIRE overrides the token-based default.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    options = dict(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(**options)
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    extra = dict(attributes)
    # SSE and plain HTTP requests both carry these; guard anyway
    method = getattr(request, "method", None)
    if method:
        extra["method"] = method
    url = getattr(request, "url", None)
    if url is not None:
        extra["path"] = url.path
    client = getattr(request, "client", None)
    if client:
        extra["client_host"] = client.host
    return extra


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app, headers included."""
    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries, counter updates and batch transactions on ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
