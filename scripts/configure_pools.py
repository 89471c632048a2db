#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from crocops.commands import (
    ProtocolCmd,
    init_liquidity_cmd,
    pool_template_cmd,
    revise_pool_cmd,
)
from crocops.constants import COLD_PROXY_IDX, INIT_TIMELOCK_DELAY
from crocops.context import prepare_context, present_resolutions
from crocops.governance import ops_resolution
from crocops.options import chain_id_option
from crocops.pools import read_pool_params
from crocops.timelock import UniqueSaltSource
from crocops.types import ChecksumAddress, MinInt


@click.command(cls=ConnectedProviderCommand, name="configure-pools")
@network_option(required=True)
@chain_id_option
@click.option(
    "--delay",
    "-dl",
    help="Ops timelock delay in seconds.",
    type=MinInt(0),
    default=INIT_TIMELOCK_DELAY,
    show_default=True,
)
@click.option(
    "--revise-token-x",
    help="Also revise the pool of this token pair to the standard template.",
    type=ChecksumAddress(),
    required=False,
)
@click.option(
    "--revise-token-y",
    help="The other token of the pool pair to revise.",
    type=ChecksumAddress(),
    required=False,
)
def cli(network, chain_id, delay, revise_token_x, revise_token_y):
    """
    Ops resolutions setting the initial liquidity lock and the standard pool
    template from the network's pool parameters. Optionally revises an
    existing pool to the template.
    """
    if bool(revise_token_x) != bool(revise_token_y):
        raise click.UsageError("--revise-token-x and --revise-token-y go together.")

    context = prepare_context(chain_id)
    params = read_pool_params(context.network)
    click.echo(f"Pool parameters: {params._asdict()}")

    salt_source = UniqueSaltSource()
    init_cmd = ProtocolCmd(callpath=COLD_PROXY_IDX, payload=init_liquidity_cmd(params))
    template_cmd = ProtocolCmd(callpath=COLD_PROXY_IDX, payload=pool_template_cmd(params))
    resolutions = [
        ops_resolution(
            context.addrs, init_cmd, delay, "Set pool init liquidity", salt_source=salt_source
        ),
        ops_resolution(
            context.addrs, template_cmd, delay, "Set standard pool template", salt_source=salt_source
        ),
    ]

    if revise_token_x:
        revise_cmd = ProtocolCmd(
            callpath=COLD_PROXY_IDX,
            payload=revise_pool_cmd(revise_token_x, revise_token_y, params),
        )
        resolutions.append(
            ops_resolution(
                context.addrs,
                revise_cmd,
                delay,
                f"Revise pool {revise_token_x}/{revise_token_y} to the standard template",
                salt_source=salt_source,
            )
        )

    present_resolutions(*resolutions)


if __name__ == "__main__":
    cli()
