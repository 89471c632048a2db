#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from crocops.context import prepare_context, publish_addresses
from crocops.options import auto_option, chain_id_option, publish_option, update_registry_option
from crocops.params import Deployer
from crocops.sequencer import DeploymentSequencer


@click.command(cls=ConnectedProviderCommand, name="deploy-governance")
@network_option(required=True)
@account_option()
@chain_id_option
@auto_option
@publish_option
@update_registry_option
def cli(network, account, chain_id, auto, publish, update_registry):
    """
    Deploys ColdPath and CrocPolicy, installs the cold path through the boot
    path and transfers dex authority from CrocDeployer to CrocPolicy.
    """
    context = prepare_context(chain_id)
    deployer = Deployer(account=account, autosign=auto, publish=publish)
    sequencer = DeploymentSequencer(deployer=deployer, addrs=context.addrs)
    addrs = sequencer.deploy_governance()
    publish_addresses(context, addrs, update_registry)


if __name__ == "__main__":
    cli()
