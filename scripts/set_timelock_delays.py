#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from crocops.constants import INIT_TIMELOCK_DELAY, START_TIMELOCK_DELAY
from crocops.context import prepare_context, present_resolutions
from crocops.governance import ResolutionType, timelock_delay_resolution
from crocops.options import chain_id_option
from crocops.timelock import UniqueSaltSource
from crocops.types import MinInt


@click.command(cls=ConnectedProviderCommand, name="set-timelock-delays")
@network_option(required=True)
@chain_id_option
@click.option(
    "--new-delay",
    "-nd",
    help="Minimum delay to set on the ops and treasury timelocks, in seconds.",
    type=MinInt(0),
    default=START_TIMELOCK_DELAY,
    show_default=True,
)
@click.option(
    "--current-delay",
    help="Delay the timelocks currently enforce, in seconds.",
    type=MinInt(0),
    default=INIT_TIMELOCK_DELAY,
    show_default=True,
)
def cli(network, chain_id, new_delay, current_delay):
    """Resolutions setting the delay of the freshly deployed ops and treasury timelocks."""
    context = prepare_context(chain_id)
    salt_source = UniqueSaltSource()
    present_resolutions(
        *(
            timelock_delay_resolution(
                context.addrs,
                resolution_type,
                new_delay=new_delay,
                current_delay=current_delay,
                salt_source=salt_source,
            )
            for resolution_type in (ResolutionType.OPS, ResolutionType.TREASURY)
        )
    )


if __name__ == "__main__":
    cli()
