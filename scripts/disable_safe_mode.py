#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from crocops.commands import ProtocolCmd, safe_mode_cmd
from crocops.constants import SAFE_MODE_PROXY_PATH
from crocops.context import prepare_context, present_resolutions, timelock_delay
from crocops.governance import treasury_resolution
from crocops.options import chain_id_option, delay_option


@click.command(cls=ConnectedProviderCommand, name="disable-safe-mode")
@network_option(required=True)
@chain_id_option
@delay_option
def cli(network, chain_id, delay):
    """Treasury resolution disabling safe mode on the dex."""
    context = prepare_context(chain_id)
    current_delay = timelock_delay(context.addrs.govern, "timelock_treasury", delay=delay)
    cmd = ProtocolCmd(callpath=SAFE_MODE_PROXY_PATH, payload=safe_mode_cmd(False), sudo=True)
    present_resolutions(treasury_resolution(context.addrs, cmd, current_delay, "Disable Safe Mode"))


if __name__ == "__main__":
    cli()
