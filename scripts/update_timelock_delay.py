#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from crocops.context import delay_update_resolution, prepare_context, present_resolutions
from crocops.options import chain_id_option, delay_option, new_delay_option, resolution_type_option


@click.command(cls=ConnectedProviderCommand, name="update-timelock-delay")
@network_option(required=True)
@chain_id_option
@resolution_type_option
@new_delay_option
@delay_option
def cli(network, chain_id, resolution_type, new_delay, delay):
    """
    Resolution changing the minimum delay of the ops or treasury timelock.
    The change is scheduled with the delay the timelock currently enforces
    and may not exceed seven days.

    ape run update_timelock_delay --network ethereum:mainnet:infura -c 0x1 -r ops -nd 86400
    """
    context = prepare_context(chain_id)
    resolution = delay_update_resolution(
        context.addrs, resolution_type, new_delay=new_delay, delay=delay
    )
    present_resolutions(resolution)


if __name__ == "__main__":
    cli()
