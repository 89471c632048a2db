#!/usr/bin/python3

import click
from ape import Contract, chain
from ape.cli import ConnectedProviderCommand, network_option

from crocops.abi import DEX_ABI
from crocops.context import prepare_context
from crocops.options import chain_id_option
from crocops.status import current_status, fetch_status_events
from crocops.types import MinInt


@click.command(cls=ConnectedProviderCommand, name="fetch-operational-status")
@network_option(required=True)
@chain_id_option
@click.option(
    "--from-block",
    "-f",
    help="First block to scan for status events.",
    type=MinInt(0),
    default=5000000,
    show_default=True,
)
def cli(network, chain_id, from_block):
    """
    Reports the SafeMode and HotPathOpen events of the dex, most recent first,
    and the status flags they leave the dex in.
    """
    context = prepare_context(chain_id)
    context.addrs.require("dex")
    dex = Contract(context.addrs.dex, abi=DEX_ABI)

    latest_block = chain.blocks.height
    click.echo(f"\nFetching events from {from_block} to {latest_block}\n")
    events = fetch_status_events(dex, from_block, latest_block, echo=click.echo)

    for event in events:
        click.echo(
            f"block {event.block_number} tx {event.transaction_hash}: "
            f"{event.event_name}={event.value}"
        )

    click.secho("\nCurrent status:", fg="green")
    for event_name, value in current_status(events).items():
        click.echo(f"    {event_name}: {'unknown' if value is None else value}")


if __name__ == "__main__":
    cli()
