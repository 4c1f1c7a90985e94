"""Logfire setup for the API process and scripts.

Services, repositories and routes log through ``logfire`` directly:

    logfire.info("Comment created", comment_id=comment.id, depth=depth)

    with logfire.span("vote_service.toggle_vote", votable_id=votable_id):
        ...

This module only decides where that output goes and which libraries get
automatic spans.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.config import Settings

SERVICE_NAME = "agora-api"

# Load balancer health checks would otherwise drown out real traffic
UNTRACED_URLS = "/health"


def _should_send(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send whenever a token is configured."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for this process.

    Without OBSERVABILITY__LOGFIRE_TOKEN everything stays on the console.
    The identity cookie is scrubbed from captured headers and attributes.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
        scrubbing=logfire.ScrubbingOptions(
            extra_patterns=[settings.auth.cookie_name]
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI, cookie_name: str) -> None:
    """Trace every API request except health checks.

    Args:
        app: FastAPI application instance
        cookie_name: Identity cookie, reported as present or absent per request
    """

    def _request_attributes(request, attributes: dict) -> dict:
        mapped = {**attributes, "path": request.url.path}
        if hasattr(request, "method"):
            mapped["method"] = request.method
        mapped["identified"] = cookie_name in request.cookies
        return mapped

    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every SQL statement the engine runs.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
