#!/usr/bin/python3

import click

from crocops.addresses import read_address_registry
from crocops.presenter import format_contracts_table
from crocops.types import ChainId


@click.command(name="list-contracts")
@click.option(
    "--chain-id",
    "-c",
    help="Only list the contracts of this registry record.",
    type=ChainId(),
    required=False,
)
def cli(chain_id):
    """List the deployed contracts of the address registry as markdown tables."""
    registry = read_address_registry()
    for network, addrs in registry:
        if chain_id and chain_id != network:
            continue
        click.secho(f"\n{network.name} ({network.registry_key})", fg="green")
        for line in format_contracts_table(network, addrs):
            click.echo(line)


if __name__ == "__main__":
    cli()
