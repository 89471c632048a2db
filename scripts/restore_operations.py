#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option
from eth_utils import encode_hex

from crocops.commands import ProtocolCmd, hot_path_cmd, safe_mode_cmd
from crocops.constants import SAFE_MODE_PROXY_PATH
from crocops.context import prepare_context, present_resolutions, timelock_delay
from crocops.governance import treasury_resolution
from crocops.options import chain_id_option, delay_option
from crocops.timelock import UniqueSaltSource


@click.command(cls=ConnectedProviderCommand, name="restore-operations")
@network_option(required=True)
@chain_id_option
@delay_option
def cli(network, chain_id, delay):
    """
    Treasury resolutions reverting an emergency halt: the hot path is opened
    and safe mode disabled through the safe mode callpath. Both can be
    batched when the timelock delay is zero.

    Check the outcome with fetch_operational_status.
    """
    context = prepare_context(chain_id)
    current_delay = timelock_delay(context.addrs.govern, "timelock_treasury", delay=delay)

    hot_path = ProtocolCmd(callpath=SAFE_MODE_PROXY_PATH, payload=hot_path_cmd(True), sudo=True)
    safe_mode = ProtocolCmd(callpath=SAFE_MODE_PROXY_PATH, payload=safe_mode_cmd(False), sudo=True)
    click.echo(f"Hot path cmd: {encode_hex(hot_path.payload)}")
    click.echo(f"Safe mode cmd: {encode_hex(safe_mode.payload)}")

    salt_source = UniqueSaltSource()
    present_resolutions(
        treasury_resolution(
            context.addrs, hot_path, current_delay, "Enable Hot Path", salt_source=salt_source
        ),
        treasury_resolution(
            context.addrs, safe_mode, current_delay, "Disable Safe Mode", salt_source=salt_source
        ),
    )


if __name__ == "__main__":
    cli()
