"""Command-line interface for SwimClub.

This module provides the CLI commands for running and managing
the SwimClub invitation service.
"""

import asyncio
from typing import NoReturn

import click
from email_validator import EmailNotValidError, validate_email

from swimclub import __version__
from swimclub.core.config import get_settings
from swimclub.core.logging import configure_logging, get_logger
from swimclub.domain.entities import UserRole


@click.group()
@click.version_option(version=__version__, prog_name="SwimClub")
def cli() -> None:
    """SwimClub - invitation and registration service for a swim club."""


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the SwimClub API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting SwimClub server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "swimclub.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables.

    Use this only in development. In production, run the Alembic
    migrations instead.
    """
    from swimclub.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = get_db_manager()
        try:
            await init_database()
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, default=None, help="Admin email (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Admin password (prompts if not provided)",
)
def create_admin(email: str | None, password: str | None) -> None:
    """Create an administrator account.

    Administrators can send, resend, delete and list invitations.
    """
    from swimclub.infrastructure.persistence.database import get_db_manager
    from swimclub.infrastructure.persistence.repositories import UserRepository

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if email is None:
        email = click.prompt("Admin email", type=str)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        click.echo("Error: Invalid email format", err=True)
        raise SystemExit(1)

    if password is None:
        password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)

    async def create() -> str | None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                users = UserRepository(session)
                if await users.email_exists(email):
                    return None
                user_id = await users.create_account(
                    email=email, password=password, role=UserRole.ADMIN
                )
                await session.commit()
                return user_id
        finally:
            await db.disconnect()

    user_id = asyncio.run(create())
    if user_id is None:
        click.echo(f"Error: User {email} already exists", err=True)
        raise SystemExit(1)
    logger.info("Admin created via CLI", user_id=user_id, email=email)
    click.echo(f"\nAdmin created successfully!\n  User ID: {user_id}\n  Email:   {email}\n")


@cli.command()
@click.argument("email")
@click.argument("role", type=click.Choice([role.value for role in UserRole]))
def set_role(email: str, role: str) -> None:
    """Set the role of an existing account.

    Takes effect on the user's next login, when a new access token is issued.
    """
    from swimclub.infrastructure.persistence.database import get_db_manager
    from swimclub.infrastructure.persistence.repositories import UserRepository

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    async def update() -> bool:
        db = get_db_manager()
        try:
            async with db.session() as session:
                users = UserRepository(session)
                user = await users.get_by_email(email)
                if user is None:
                    return False
                await users.set_role(user, UserRole(role))
                await session.commit()
                logger.info("Role updated via CLI", user_id=user.id, role=role)
                return True
        finally:
            await db.disconnect()

    if not asyncio.run(update()):
        click.echo(f"Error: No user found with email {email}", err=True)
        raise SystemExit(1)
    click.echo(f"Role for {email} set to {role}.")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `swimclub` command is run
    or when using `python -m swimclub`.
    """
    cli()


if __name__ == "__main__":
    main()
