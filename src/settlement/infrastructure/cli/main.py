import click

from settlement.infrastructure.cli.commission_commands import commission_set, commission_show
from settlement.infrastructure.cli.payout_commands import (
    payouts_list,
    payouts_retry,
    payouts_run,
    payouts_vendor,
)
from settlement.infrastructure.config import SettlementConfig, configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Settle: vendor commission & payout settlement."""
    try:
        config = SettlementConfig.load()
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    configure_logging(config.log_level)
    ctx.obj = config


@cli.group()
def payouts() -> None:
    """Run and inspect vendor payouts."""


@cli.group()
def commission() -> None:
    """Manage the platform commission."""


# Register subcommands
payouts.add_command(payouts_run)
payouts.add_command(payouts_vendor)
payouts.add_command(payouts_list)
payouts.add_command(payouts_retry)
commission.add_command(commission_show)
commission.add_command(commission_set)
