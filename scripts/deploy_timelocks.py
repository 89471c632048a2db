#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from crocops.constants import START_TIMELOCK_DELAY
from crocops.context import prepare_context, publish_addresses
from crocops.options import auto_option, chain_id_option, publish_option, update_registry_option
from crocops.params import Deployer
from crocops.sequencer import DeploymentSequencer
from crocops.types import MinInt


@click.command(cls=ConnectedProviderCommand, name="deploy-timelocks")
@network_option(required=True)
@account_option()
@chain_id_option
@auto_option
@publish_option
@update_registry_option
@click.option(
    "--start-delay",
    help="Minimum delay the timelocks are constructed with, in seconds.",
    type=MinInt(0),
    default=START_TIMELOCK_DELAY,
    show_default=True,
)
def cli(network, account, chain_id, auto, publish, update_registry, start_delay):
    """
    Deploys the treasury, ops and emergency timelocks. Each role's multisig
    is the sole proposer and executor of its timelock.
    """
    context = prepare_context(chain_id)
    deployer = Deployer(account=account, autosign=auto, publish=publish)
    sequencer = DeploymentSequencer(deployer=deployer, addrs=context.addrs)
    addrs = sequencer.deploy_timelocks(start_delay=start_delay)
    publish_addresses(context, addrs, update_registry)


if __name__ == "__main__":
    cli()
