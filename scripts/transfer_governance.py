#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from crocops.context import prepare_context, publish_addresses
from crocops.options import auto_option, chain_id_option, update_registry_option
from crocops.params import Deployer
from crocops.sequencer import DeploymentSequencer


@click.command(cls=ConnectedProviderCommand, name="transfer-governance")
@network_option(required=True)
@account_option()
@chain_id_option
@auto_option
@update_registry_option
def cli(network, account, chain_id, auto, update_registry):
    """
    Hands control of CrocPolicy to the ops, treasury and emergency timelocks.
    After this every protocol change is a governance resolution.
    """
    context = prepare_context(chain_id)
    deployer = Deployer(account=account, autosign=auto)
    sequencer = DeploymentSequencer(deployer=deployer, addrs=context.addrs)
    addrs = sequencer.transfer_governance()
    publish_addresses(context, addrs, update_registry)


if __name__ == "__main__":
    cli()
