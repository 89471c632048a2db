import click

from crocops.constants import CHAIN_ID_ENVVAR
from crocops.governance import ResolutionType
from crocops.types import ChainId, MinInt

chain_id_option = click.option(
    "--chain-id",
    "-c",
    help="Address registry record to use; a registry key or chain id.",
    type=ChainId(),
    envvar=CHAIN_ID_ENVVAR,
    show_envvar=True,
    required=True,
)

auto_option = click.option(
    "--auto",
    help="Automatically sign transactions and skip confirmation prompts.",
    is_flag=True,
)

publish_option = click.option(
    "--publish",
    help="Publish deployed contracts to the block explorer.",
    is_flag=True,
)

update_registry_option = click.option(
    "--update-registry",
    help="Write the updated address record back to the address registry file.",
    is_flag=True,
)

delay_option = click.option(
    "--delay",
    "-dl",
    help="Timelock delay in seconds; defaults to the timelock's current minimum delay.",
    type=MinInt(0),
    required=False,
)

new_delay_option = click.option(
    "--new-delay",
    "-nd",
    help="New minimum timelock delay in seconds.",
    type=MinInt(0),
    required=True,
)

resolution_type_option = click.option(
    "--resolution-type",
    "-r",
    help="Governance role whose multisig and timelock carry the resolution.",
    type=click.Choice([resolution_type.value for resolution_type in ResolutionType]),
    callback=lambda ctx, param, value: ResolutionType(value) if value else value,
    required=True,
)
