#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from crocops.context import prepare_context, publish_addresses
from crocops.options import auto_option, chain_id_option, update_registry_option
from crocops.params import Deployer
from crocops.sequencer import DeploymentSequencer


@click.command(cls=ConnectedProviderCommand, name="install-sidecars")
@network_option(required=True)
@account_option()
@chain_id_option
@auto_option
@update_registry_option
def cli(network, account, chain_id, auto, update_registry):
    """
    Installs the long, warm, hot, micro, knockout and knockout cross proxies
    with treasury resolutions sent straight to CrocPolicy. Only works while
    the deploying account still governs the policy.
    """
    context = prepare_context(chain_id)
    deployer = Deployer(account=account, autosign=auto)
    sequencer = DeploymentSequencer(deployer=deployer, addrs=context.addrs)
    addrs = sequencer.install_sidecars()
    publish_addresses(context, addrs, update_registry)


if __name__ == "__main__":
    cli()
