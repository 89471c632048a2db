from pathlib import Path
from typing import NamedTuple, Optional

import click
from ape import Contract

from crocops.abi import TIMELOCK_ABI
from crocops.addresses import (
    AddressRegistry,
    CrocAddrs,
    GovernAddrs,
    format_addresses,
    read_address_registry,
    write_address_registry,
)
from crocops.constants import ADDRESS_REGISTRY_FILEPATH, MAX_TIMELOCK_DELAY
from crocops.governance import (
    GovernanceResolution,
    ResolutionType,
    govern_address,
    timelock_delay_resolution,
)
from crocops.networks import SupportedNetwork
from crocops.presenter import present_resolution
from crocops.timelock import check_delay
from crocops.utils import check_connected_chain, check_rpc_endpoint


class ScriptContext(NamedTuple):
    """What every script works from: the target network and its registry record."""

    network: SupportedNetwork
    registry: AddressRegistry
    addrs: CrocAddrs
    registry_filepath: Path


def prepare_context(
    network: SupportedNetwork,
    registry_filepath: Path = ADDRESS_REGISTRY_FILEPATH,
    connected: bool = True,
) -> ScriptContext:
    """
    Loads the address registry record of ``network``. Scripts that talk to
    a chain also check that an RPC endpoint is configured and that the
    connected provider serves the same chain as the record.
    """
    if connected:
        check_rpc_endpoint(network)
        check_connected_chain(network)
    registry = read_address_registry(filepath=registry_filepath)
    addrs = registry.get(network)
    click.echo(f"Using address registry record for {network.registry_key} ({network.name}).")
    return ScriptContext(
        network=network, registry=registry, addrs=addrs, registry_filepath=registry_filepath
    )


def publish_addresses(context: ScriptContext, addrs: CrocAddrs, update_registry: bool) -> None:
    """Prints the updated record and optionally writes it back to the registry file."""
    click.secho("\nUpdated address registry record:", fg="green")
    click.echo(format_addresses(context.network, addrs))
    if update_registry:
        registry = context.registry.updated(context.network, addrs)
        output_filepath = write_address_registry(registry, filepath=context.registry_filepath)
        click.echo(f"(i) Address registry written to {output_filepath}!")


def timelock_delay(govern: GovernAddrs, role: str, delay: Optional[int] = None) -> int:
    """
    Returns ``delay`` when given, otherwise reads the minimum delay currently
    enforced by the timelock registered for ``role``.
    """
    timelock_address = govern_address(govern, role)
    if delay is not None:
        return delay
    timelock = Contract(timelock_address, abi=TIMELOCK_ABI)
    current_delay = int(timelock.getMinDelay())
    click.echo(f"Current timelock delay of {timelock_address}: {current_delay}")
    return current_delay


def delay_update_resolution(
    addrs: CrocAddrs,
    resolution_type: ResolutionType,
    new_delay: int,
    delay: Optional[int] = None,
) -> GovernanceResolution:
    """Checks the new delay against the ceiling before touching the chain."""
    check_delay(new_delay, max_delay=MAX_TIMELOCK_DELAY)
    current_delay = timelock_delay(addrs.govern, resolution_type.timelock_role, delay=delay)
    return timelock_delay_resolution(
        addrs, resolution_type, new_delay=new_delay, current_delay=current_delay
    )


def present_resolutions(*resolutions: GovernanceResolution) -> None:
    for resolution in resolutions:
        present_resolution(resolution)
