"""Category management commands."""

import click
from reportit.cli.error_handling import handle_domain_error
from reportit.domain.category import CategoryService
from reportit.domain.entities import UNSPECIFIED_CATEGORY_NAME
from reportit.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    click.echo("\nCategories:")
    click.echo(f"{UNSPECIFIED_CATEGORY_NAME} (transactions without a category)")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.pass_context
def create_category(ctx, name: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(name=name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
