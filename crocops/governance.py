from enum import Enum
from typing import NamedTuple, Optional

from crocops.abi import (
    POLICY_EMERGENCY_HALT,
    POLICY_OPS_RESOLUTION,
    POLICY_TREASURY_RESOLUTION,
)
from crocops.addresses import CrocAddrs, GovernAddrs
from crocops.commands import ProtocolCmd
from crocops.constants import MAX_TIMELOCK_DELAY
from crocops.exceptions import ConfigurationError, PolicyViolation
from crocops.timelock import (
    SaltSource,
    TimelockCalls,
    build_timelock_calls,
    check_delay,
    update_delay_calldata,
)


class ResolutionType(Enum):
    OPS = "ops"
    TREASURY = "treasury"

    @property
    def multisig_role(self) -> str:
        return f"multisig_{self.value}"

    @property
    def timelock_role(self) -> str:
        return f"timelock_{self.value}"


class GovernanceResolution(NamedTuple):
    resolution_type: ResolutionType
    protocol_cmd: Optional[ProtocolCmd]
    multisig_origin: str
    policy_contract: str
    dex_contract: str
    timelock_call: TimelockCalls
    description: str = ""


def govern_address(govern: GovernAddrs, role: str) -> str:
    """Registered governance address of ``role``; fails when it is missing."""
    if not govern.is_deployed(role):
        raise ConfigurationError(f"Address registry is missing governance address '{role}'")
    return getattr(govern, role)


def _governance_pair(addrs: CrocAddrs, resolution_type: ResolutionType):
    multisig = govern_address(addrs.govern, resolution_type.multisig_role)
    timelock = govern_address(addrs.govern, resolution_type.timelock_role)
    return multisig, timelock


def treasury_resolution(
    addrs: CrocAddrs,
    cmd: ProtocolCmd,
    delay: int,
    description: str = "",
    salt_source: Optional[SaltSource] = None,
) -> GovernanceResolution:
    """A protocol command passed through CrocPolicy by the treasury timelock."""
    addrs.require("dex", "policy")
    multisig, timelock = _governance_pair(addrs, ResolutionType.TREASURY)

    policy_calldata = POLICY_TREASURY_RESOLUTION.encode_input(
        addrs.dex, cmd.callpath, bytes(cmd.payload), bool(cmd.sudo)
    )
    timelock_call = build_timelock_calls(
        timelock, addrs.policy, policy_calldata, delay, salt_source=salt_source
    )
    return GovernanceResolution(
        resolution_type=ResolutionType.TREASURY,
        protocol_cmd=cmd,
        multisig_origin=multisig,
        policy_contract=addrs.policy,
        dex_contract=addrs.dex,
        timelock_call=timelock_call,
        description=description,
    )


def ops_resolution(
    addrs: CrocAddrs,
    cmd: ProtocolCmd,
    delay: int,
    description: str = "",
    salt_source: Optional[SaltSource] = None,
) -> GovernanceResolution:
    """A protocol command passed through CrocPolicy by the ops timelock."""
    if cmd.sudo:
        raise PolicyViolation("Sudo protocol commands require a treasury resolution")
    addrs.require("dex", "policy")
    multisig, timelock = _governance_pair(addrs, ResolutionType.OPS)

    policy_calldata = POLICY_OPS_RESOLUTION.encode_input(
        addrs.dex, cmd.callpath, bytes(cmd.payload)
    )
    timelock_call = build_timelock_calls(
        timelock, addrs.policy, policy_calldata, delay, salt_source=salt_source
    )
    return GovernanceResolution(
        resolution_type=ResolutionType.OPS,
        protocol_cmd=cmd,
        multisig_origin=multisig,
        policy_contract=addrs.policy,
        dex_contract=addrs.dex,
        timelock_call=timelock_call,
        description=description,
    )


def emergency_halt_resolution(
    addrs: CrocAddrs,
    reason: str,
    delay: int,
    salt_source: Optional[SaltSource] = None,
) -> GovernanceResolution:
    """
    Halts the dex: every proxy but the warm path is disabled and swaps on the
    hot path are closed, so LPs can still withdraw at-rest capital.
    """
    addrs.require("dex", "policy")
    multisig, timelock = _governance_pair(addrs, ResolutionType.TREASURY)

    halt_calldata = POLICY_EMERGENCY_HALT.encode_input(addrs.dex, reason)
    timelock_call = build_timelock_calls(
        timelock, addrs.policy, halt_calldata, delay, salt_source=salt_source
    )
    return GovernanceResolution(
        resolution_type=ResolutionType.TREASURY,
        protocol_cmd=None,
        multisig_origin=multisig,
        policy_contract=addrs.policy,
        dex_contract=addrs.dex,
        timelock_call=timelock_call,
        description="Halts the dex and disables proxy interaction",
    )


def timelock_delay_resolution(
    addrs: CrocAddrs,
    resolution_type: ResolutionType,
    new_delay: int,
    current_delay: int,
    salt_source: Optional[SaltSource] = None,
) -> GovernanceResolution:
    """
    Changes the minimum delay of a timelock. The timelock calls itself, and
    the change is scheduled with the delay currently in force.
    """
    check_delay(new_delay, max_delay=MAX_TIMELOCK_DELAY)
    multisig, timelock = _governance_pair(addrs, resolution_type)

    delay_calldata = update_delay_calldata(new_delay)
    timelock_call = build_timelock_calls(
        timelock, timelock, delay_calldata, current_delay, salt_source=salt_source
    )
    return GovernanceResolution(
        resolution_type=resolution_type,
        protocol_cmd=None,
        multisig_origin=multisig,
        policy_contract=addrs.policy,
        dex_contract=addrs.dex,
        timelock_call=timelock_call,
        description=(
            f"Change will update the {resolution_type.value} timelock "
            f"from {current_delay} to {new_delay} seconds"
        ),
    )
