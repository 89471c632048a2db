#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from crocops.commands import ProtocolCmd, install_proxy_cmd
from crocops.constants import BOOT_PROXY_IDX, INIT_TIMELOCK_DELAY, LP_PROXY_IDX
from crocops.context import prepare_context, present_resolutions
from crocops.governance import treasury_resolution
from crocops.options import chain_id_option
from crocops.types import MinInt


@click.command(cls=ConnectedProviderCommand, name="install-warm-path")
@network_option(required=True)
@chain_id_option
@click.option(
    "--delay",
    "-dl",
    help="Treasury timelock delay in seconds.",
    type=MinInt(0),
    default=INIT_TIMELOCK_DELAY,
    show_default=True,
)
def cli(network, chain_id, delay):
    """Treasury resolution installing the warm path sidecar at the LP callpath."""
    context = prepare_context(chain_id)
    addrs = context.addrs
    addrs.require("warm")

    cmd = ProtocolCmd(
        callpath=BOOT_PROXY_IDX,
        payload=install_proxy_cmd(addrs.warm, LP_PROXY_IDX),
        sudo=True,
    )
    resolution = treasury_resolution(addrs, cmd, delay, description="Install Warm path sidecar")
    present_resolutions(resolution)


if __name__ == "__main__":
    cli()
