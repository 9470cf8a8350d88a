"""CLI commands for the platform commission."""

from __future__ import annotations

import click

from settlement.domain.exceptions import DomainException
from settlement.infrastructure.bootstrap import show_commission_handler, update_commission_handler
from settlement.infrastructure.cli.output import operator


@click.command("show")
@click.pass_obj
def commission_show(config) -> None:
    """Show the current commission percent."""
    handler = show_commission_handler(config)

    try:
        percent = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Commission: {percent}%")


@click.command("set")
@click.option("--percent", required=True, help="New commission percent (0-100).")
@click.pass_obj
def commission_set(config, percent: str) -> None:
    """Change the commission percent used for future payouts."""
    handler = update_commission_handler(config)

    try:
        value = handler.handle(operator(), percent)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Commission set to {value}%")
