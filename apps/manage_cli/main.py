"""manage command line entrypoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Optional

import typer

from manage_service.application.dto.set_password_models import MAX_USER_ID, SetPasswordCommand
from manage_service.application.services.set_password_service import SetPasswordService
from manage_service.config.settings import Settings, load_settings
from manage_service.domain.deadline import Deadline
from manage_service.infrastructure.auth.hash_client import AuthHashClient
from manage_service.infrastructure.datastore.writer_client import DatastoreWriterClient
from manage_service.infrastructure.http.manage_client import ManageApiClient
from manage_service.infrastructure.logging import configure_logging

APP_NAME = "manage"
APP_HELP = "Administrative commands for internal services."

SET_PASSWORD_HELP = """Sets the password of a user.

This command sets the password of a user by a given user id.
"""

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=APP_NAME,
    help=APP_HELP,
    add_completion=False,
    no_args_is_help=True,
)


def build_manage_client(address: str) -> ManageApiClient:
    """Build client talking to a running manage-api process."""

    return ManageApiClient(address=address)


def build_local_service(settings: Settings) -> SetPasswordService:
    """Build in-process set-password service against the configured backends."""

    return SetPasswordService(
        password_hasher=AuthHashClient(auth_url=settings.auth_url),
        datastore_writer=DatastoreWriterClient(
            datastore_writer_url=settings.datastore_writer_url,
        ),
    )


@app.callback()
def main_callback(
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override LOG_LEVEL for this invocation."),
    ] = None,
) -> None:
    """Administrative commands for internal services."""

    settings = load_settings()
    configure_logging(level=log_level or settings.log_level)


@app.command("set-password", help=SET_PASSWORD_HELP, short_help="Sets a user password.")
def set_password(
    user_id: Annotated[
        int,
        typer.Option(
            "--user-id",
            "--user_id",
            "-u",
            min=0,
            max=MAX_USER_ID,
            help="ID of the user account.",
        ),
    ] = 1,
    password: Annotated[
        str,
        typer.Option("--password", "-p", help="New password for the user."),
    ] = "admin",
    address: Annotated[
        Optional[str],
        typer.Option("--address", "-a", help="Address of the manage server."),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", "-t", min=0.0, help="Deadline in seconds for the call."),
    ] = None,
    local: Annotated[
        bool,
        typer.Option("--local", help="Talk to auth and datastore directly."),
    ] = False,
) -> None:
    settings = load_settings()
    command = SetPasswordCommand(user_id=user_id, password=password)
    timeout_seconds = settings.manage_timeout_seconds if timeout is None else timeout

    try:
        asyncio.run(
            _run_set_password(
                command=command,
                settings=settings,
                address=address or settings.manage_address,
                timeout_seconds=timeout_seconds,
                local=local,
            )
        )
    except Exception as error:  # noqa: BLE001
        typer.echo(f"reset password: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"Password of user {user_id} updated.")


async def _run_set_password(
    *,
    command: SetPasswordCommand,
    settings: Settings,
    address: str,
    timeout_seconds: float,
    local: bool,
) -> None:
    deadline = Deadline.after(timeout_seconds)
    if local:
        logger.info("set_password_local user_id=%s", command.user_id)
        await build_local_service(settings).set_password(command, deadline=deadline)
        return
    logger.info("set_password_remote user_id=%s address=%s", command.user_id, address)
    await build_manage_client(address).set_password(command, deadline=deadline)


def main() -> None:
    """Run the manage command line."""

    app()


if __name__ == "__main__":
    main()
