#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from crocops.context import prepare_context, present_resolutions, timelock_delay
from crocops.governance import emergency_halt_resolution
from crocops.options import chain_id_option, delay_option


@click.command(cls=ConnectedProviderCommand, name="emergency-halt")
@network_option(required=True)
@chain_id_option
@delay_option
@click.option(
    "--reason",
    help="Reason recorded on-chain with the halt.",
    type=str,
    required=True,
)
def cli(network, chain_id, delay, reason):
    """
    Treasury resolution halting the dex: all proxies but the warm path are
    disabled and the hot path is closed, so LPs can still withdraw.
    Undo with restore_operations.
    """
    context = prepare_context(chain_id)
    current_delay = timelock_delay(context.addrs.govern, "timelock_treasury", delay=delay)
    resolution = emergency_halt_resolution(context.addrs, reason, current_delay)
    present_resolutions(resolution)


if __name__ == "__main__":
    cli()
