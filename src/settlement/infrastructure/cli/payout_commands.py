"""CLI commands for settlement passes and payout listings."""

from __future__ import annotations

import click

from settlement.application.list_payouts import STATUS_FILTERS, PayoutQuery
from settlement.domain.exceptions import DomainException
from settlement.infrastructure.bootstrap import (
    list_payouts_handler,
    process_payouts_handler,
    retry_payout_handler,
    vendor_payouts_handler,
)
from settlement.infrastructure.cli.output import echo_json, operator


@click.command("run")
@click.option(
    "--vendor-order-id", "vendor_order_ids", multiple=True,
    help="Pay only these vendor orders now (skips the cooldown). Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.pass_obj
def payouts_run(config, vendor_order_ids: tuple[str, ...], as_json: bool) -> None:
    """Run a settlement pass over eligible vendor orders."""
    handler = process_payouts_handler(config)

    try:
        result = handler.handle(operator(), vendor_order_ids=list(vendor_order_ids) or None)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        echo_json(result)
        return

    click.echo(result.message or f"Processed {result.processed} payout(s).")
    for error in result.errors:
        click.echo(f"  error: {error}", err=True)


@click.command("vendor")
@click.option("--vendor-id", required=True, help="Vendor ID.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.pass_obj
def payouts_vendor(config, vendor_id: str, as_json: bool) -> None:
    """Show a vendor's pending and received payouts."""
    handler = vendor_payouts_handler(config)

    try:
        dto = handler.handle(operator(), vendor_id=vendor_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        echo_json(dto)
        return

    click.echo("Pending")
    click.echo(f"  {'Order':<12} {'Total':>10} {'Commission':>11} {'Payout':>10}  Delivered")
    click.echo(f"  {'-'*70}")
    for row in dto.pending:
        click.echo(
            f"  {row.order_number:<12} {row.order_total:>10} {row.commission_amount:>11} "
            f"{row.vendor_amount:>10}  {row.delivered_at}"
        )
    click.echo()
    click.echo("Received")
    click.echo(f"  {'Order':<12} {'Total':>10} {'Commission':>11} {'Payout':>10}  Paid")
    click.echo(f"  {'-'*70}")
    for row in dto.received:
        click.echo(
            f"  {row.order_number:<12} {row.order_total:>10} {row.commission_amount:>11} "
            f"{row.vendor_amount:>10}  {row.paid_at}"
        )


@click.command("list")
@click.option("--search", default=None, help="Match store or vendor name.")
@click.option("--store", "store_name", default=None, help="Filter by store name.")
@click.option("--vendor", "vendor_name", default=None, help="Filter by vendor name.")
@click.option("--status", type=click.Choice(STATUS_FILTERS), default="all", show_default=True)
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--per-page", type=int, default=20, show_default=True)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.pass_obj
def payouts_list(
    config,
    search: str | None,
    store_name: str | None,
    vendor_name: str | None,
    status: str,
    page: int,
    per_page: int,
    as_json: bool,
) -> None:
    """List payouts across all vendors."""
    handler = list_payouts_handler(config)
    query = PayoutQuery(
        search=search,
        store_name=store_name,
        vendor_name=vendor_name,
        status=status,
        page=page,
        per_page=per_page,
    )

    try:
        dto = handler.handle(operator(), query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        echo_json(dto)
        return

    if not dto.payouts:
        click.echo("No payouts found.")
        return

    click.echo(
        f"{'Order':<12} {'Store':<18} {'Vendor':<18} {'Status':<8} "
        f"{'Commission':>11} {'Payout':>10}"
    )
    click.echo("-" * 82)
    for row in dto.payouts:
        click.echo(
            f"{row.order_number:<12} {row.store_name[:18]:<18} {row.vendor_name[:18]:<18} "
            f"{row.payout_status:<8} {row.commission_amount:>11} {row.vendor_amount:>10}"
        )
    click.echo(f"Page {dto.page} ({dto.per_page} per page), {dto.total} total")


@click.command("retry")
@click.option("--id", "vendor_order_id", required=True, help="Failed vendor order ID.")
@click.pass_obj
def payouts_retry(config, vendor_order_id: str) -> None:
    """Reset a failed payout so the next pass retries it."""
    handler = retry_payout_handler(config)

    try:
        handler.handle(operator(), vendor_order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Vendor order {vendor_order_id} reset to pending.")
