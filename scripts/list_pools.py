#!/usr/bin/python3

import click
from ape import Contract, chain
from ape.cli import ConnectedProviderCommand, network_option

from crocops.abi import DEX_ABI
from crocops.context import prepare_context
from crocops.options import chain_id_option
from crocops.pool_ops import fetch_deployed_pools, format_pools_table
from crocops.types import MinInt


@click.command(cls=ConnectedProviderCommand, name="list-pools")
@network_option(required=True)
@chain_id_option
@click.option(
    "--from-block",
    "-f",
    help="First block to scan for PoolInitialized events.",
    type=MinInt(0),
    default=0,
    show_default=True,
)
def cli(network, chain_id, from_block):
    """Lists the pools initialized on the dex, oldest first."""
    context = prepare_context(chain_id)
    context.addrs.require("dex")
    dex = Contract(context.addrs.dex, abi=DEX_ABI)

    latest_block = chain.blocks.height
    click.secho(f"\nFetching initialized pools from {from_block} to {latest_block}\n", fg="blue")
    pools = fetch_deployed_pools(dex, from_block, latest_block, echo=click.echo)

    click.secho(f"\nFound {len(pools)} pool(s)", fg="green")
    for line in format_pools_table(pools):
        click.echo(line)


if __name__ == "__main__":
    cli()
