"""CLI error handling helpers."""

import click

from reportit.domain.errors import DomainError
from reportit.logging_config import get_logger

logger = get_logger(__name__)


def fail(ctx: click.Context, message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    logger.debug(
        "command_failed",
        command=ctx.info_name,
        error_type=type(error).__name__,
        error=str(error),
    )
    fail(ctx, str(error))
