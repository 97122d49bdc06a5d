"""manage-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from manage_service.application.services.set_password_service import SetPasswordService
from manage_service.config.settings import Settings, load_settings
from manage_service.infrastructure.auth.hash_client import AuthHashClient
from manage_service.infrastructure.datastore.writer_client import DatastoreWriterClient
from manage_service.infrastructure.http.manage_router import build_manage_router
from manage_service.infrastructure.http.transport import HttpTransportPort
from manage_service.infrastructure.logging import configure_logging

logger = logging.getLogger(__name__)


def build_set_password_service(
    settings: Settings,
    *,
    transport: HttpTransportPort | None = None,
) -> SetPasswordService:
    """Build set-password service with HTTP-backed auth and datastore adapters."""

    return SetPasswordService(
        password_hasher=AuthHashClient(auth_url=settings.auth_url, transport=transport),
        datastore_writer=DatastoreWriterClient(
            datastore_writer_url=settings.datastore_writer_url,
            transport=transport,
        ),
    )


def create_app(
    *,
    settings: Settings | None = None,
    set_password_service: SetPasswordService | None = None,
) -> FastAPI:
    """Create FastAPI app for manage operations."""

    if settings is None:
        settings = load_settings()
    configure_logging(level=settings.log_level)
    if set_password_service is None:
        set_password_service = build_set_password_service(settings)

    logger.info(
        "manage_api_configured auth_url=%s datastore_writer_url=%s timeout_seconds=%s",
        settings.auth_url,
        settings.datastore_writer_url,
        settings.manage_timeout_seconds,
    )

    app = FastAPI(title="manage-service")
    app.include_router(
        build_manage_router(
            set_password_service=set_password_service,
            timeout_seconds=settings.manage_timeout_seconds,
        )
    )
    return app


def run_asgi_server(*, host: str, port: int) -> None:
    """Run manage-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.manage_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run manage-api runtime process."""

    settings = load_settings()
    run_asgi_server(host=settings.manage_host, port=settings.manage_port)


if __name__ == "__main__":
    main()
