from enum import IntEnum
from typing import Callable, Dict, NamedTuple, Tuple

from ape.contracts.base import ContractContainer

from crocops.addresses import CrocAddrs
from crocops.commands import install_proxy_cmd, transfer_authority_cmd
from crocops.constants import (
    BOOT_PROXY_IDX,
    COLD_PROXY_IDX,
    FLAG_CROSS_PROXY_IDX,
    KNOCKOUT_LP_PROXY_IDX,
    LONG_PROXY_IDX,
    LP_PROXY_IDX,
    MICRO_PROXY_IDX,
    START_TIMELOCK_DELAY,
    SWAP_PROXY_IDX,
)
from crocops.exceptions import ConfigurationError, PolicyViolation
from crocops.params import Deployer
from crocops.salts import SaltRegistry
from crocops.utils import get_contract_container


class ContractState(IntEnum):
    UNREGISTERED = 0
    DEPLOYED = 1
    INSTALLED = 2
    CONTROL_TRANSFERRED = 3


class Sidecar(NamedTuple):
    role: str
    contract_name: str
    takes_dex: bool = False


# deployment order of the standalone contracts
SIDECARS = (
    Sidecar("cold", "ColdPath"),
    Sidecar("hot", "HotProxy"),
    Sidecar("knockout", "KnockoutLiqPath"),
    Sidecar("ko_cross", "KnockoutFlagPath"),
    Sidecar("long", "LongPath"),
    Sidecar("micro", "MicroPaths"),
    Sidecar("warm", "WarmPath"),
    Sidecar("policy", "CrocPolicy", takes_dex=True),
    Sidecar("query", "CrocQuery", takes_dex=True),
    Sidecar("impact", "CrocImpact", takes_dex=True),
)

# proxies installed into the dex through treasury resolutions, in install order
PROXY_INSTALLS: Tuple[Tuple[str, int], ...] = (
    ("long", LONG_PROXY_IDX),
    ("warm", LP_PROXY_IDX),
    ("hot", SWAP_PROXY_IDX),
    ("micro", MICRO_PROXY_IDX),
    ("knockout", KNOCKOUT_LP_PROXY_IDX),
    ("ko_cross", FLAG_CROSS_PROXY_IDX),
)

ROUTERS = (
    Sidecar("router", "CrocSwapRouter", takes_dex=True),
    Sidecar("router_bypass", "CrocSwapRouterBypass", takes_dex=True),
)

TIMELOCKS = (
    ("timelock_treasury", "multisig_treasury"),
    ("timelock_ops", "multisig_ops"),
    ("timelock_emergency", "multisig_emergency"),
)


class DeploymentSequencer:
    """
    Runs the rollout of the dex, its proxies and its governance one step at a
    time. Every step resumes from the address registry record: contracts that
    already have an address are attached to, never redeployed. Steps check
    that the roles they depend on are populated before sending anything.
    """

    def __init__(
        self,
        deployer: Deployer,
        addrs: CrocAddrs,
        containers: Callable[[str], ContractContainer] = get_contract_container,
    ):
        self.deployer = deployer
        self.addrs = addrs
        self._containers = containers
        self.states: Dict[str, ContractState] = dict()
        for role in CrocAddrs._fields:
            if role == "govern":
                continue
            initial = ContractState.DEPLOYED if addrs.is_deployed(role) else ContractState.UNREGISTERED
            self.states[role] = initial

    def advance(self, role: str, state: ContractState) -> None:
        """Moves a contract forward in its lifecycle; going back is refused."""
        current = self.states.get(role, ContractState.UNREGISTERED)
        if state < current:
            raise PolicyViolation(
                f"{role} is {current.name}; it cannot go back to {state.name}. "
                "Reversals are new governance resolutions."
            )
        self.states[role] = state

    def _mark_deployed(self, role: str) -> None:
        if self.states.get(role, ContractState.UNREGISTERED) is ContractState.UNREGISTERED:
            self.advance(role, ContractState.DEPLOYED)

    def _ensure(self, role: str, contract_name: str, *args) -> str:
        container = self._containers(contract_name)
        instance = self.deployer.ensure_deployed(container, getattr(self.addrs, role), *args)
        self.addrs = self.addrs.update(**{role: instance.address})
        self._mark_deployed(role)
        return instance.address

    def _attach(self, contract_name: str, address: str):
        return self._containers(contract_name).at(address)

    #
    # Steps
    #

    def deploy_croc_deployer(self) -> CrocAddrs:
        """CrocDeployer, the CREATE2 factory; the deploying account is its authority."""
        self._ensure("deployer", "CrocDeployer", self.deployer.address)
        return self.addrs

    def deploy_dex(self, salts: SaltRegistry) -> CrocAddrs:
        """CrocSwapDex through CrocDeployer with the deployer's registered salt."""
        self.addrs.require("deployer")
        if self.addrs.is_deployed("dex"):
            print(f"(i) CrocSwapDex already deployed at {self.addrs.dex}; skipping.")
            return self.addrs

        salt = salts.resolve(self.addrs.deployer)
        croc_deployer = self._attach("CrocDeployer", self.addrs.deployer)
        dex = self.deployer.salted_deploy(croc_deployer, self._containers("CrocSwapDex"), salt)
        reported = croc_deployer.dex_()
        if reported.lower() != dex.address.lower():
            raise ConfigurationError(
                f"CrocDeployer reports the dex at {reported}, expected {dex.address}"
            )
        self.addrs = self.addrs.update(dex=dex.address)
        self._mark_deployed("dex")
        return self.addrs

    def deploy_governance(self) -> CrocAddrs:
        """
        Deploys the cold path and the policy, installs the cold path through
        the boot path and hands dex authority to the policy.
        """
        self.addrs.require("deployer", "dex")
        cold = self._ensure("cold", "ColdPath")
        policy = self._ensure("policy", "CrocPolicy", self.addrs.dex)

        croc_deployer = self._attach("CrocDeployer", self.addrs.deployer)
        self.deployer.transact(
            croc_deployer.protocolCmd,
            self.addrs.dex,
            BOOT_PROXY_IDX,
            install_proxy_cmd(cold, COLD_PROXY_IDX),
            True,
        )
        self.advance("cold", ContractState.INSTALLED)

        self.deployer.transact(
            croc_deployer.protocolCmd,
            self.addrs.dex,
            COLD_PROXY_IDX,
            transfer_authority_cmd(policy),
            True,
        )
        self.advance("dex", ContractState.CONTROL_TRANSFERRED)
        return self.addrs

    def deploy_sidecars(self) -> CrocAddrs:
        self.addrs.require("dex")
        for sidecar in SIDECARS:
            args = (self.addrs.dex,) if sidecar.takes_dex else tuple()
            self._ensure(sidecar.role, sidecar.contract_name, *args)
        return self.addrs

    def install_sidecars(self) -> CrocAddrs:
        """
        Installs every proxy through the policy's boot path. Only valid while
        the deploying account still governs the policy.
        """
        self.addrs.require("dex", "policy", *(role for role, _ in PROXY_INSTALLS))
        policy = self._attach("CrocPolicy", self.addrs.policy)
        for role, proxy_idx in PROXY_INSTALLS:
            cmd = install_proxy_cmd(getattr(self.addrs, role), proxy_idx)
            self.deployer.transact(
                policy.treasuryResolution, self.addrs.dex, BOOT_PROXY_IDX, cmd, True
            )
            self.advance(role, ContractState.INSTALLED)
        return self.addrs

    def deploy_timelocks(self, start_delay: int = START_TIMELOCK_DELAY) -> CrocAddrs:
        """One timelock per governance role; its multisig proposes and executes."""
        govern = self.addrs.govern
        missing = [multisig for _, multisig in TIMELOCKS if not govern.is_deployed(multisig)]
        if missing:
            raise ConfigurationError(
                f"Address registry is missing {', '.join(missing)}; multisigs come first."
            )

        container = self._containers("TimelockAccepts")
        for timelock_role, multisig_role in TIMELOCKS:
            multisig = getattr(govern, multisig_role)
            instance = self.deployer.ensure_deployed(
                container, getattr(govern, timelock_role), start_delay, [multisig], [multisig]
            )
            govern = govern.update(**{timelock_role: instance.address})
            self.addrs = self.addrs.update(govern=govern)
        return self.addrs

    def transfer_governance(self) -> CrocAddrs:
        """Hands policy control to the ops, treasury and emergency timelocks."""
        self.addrs.require("policy")
        govern = self.addrs.govern
        missing = [timelock for timelock, _ in TIMELOCKS if not govern.is_deployed(timelock)]
        if missing:
            raise ConfigurationError(
                f"Address registry is missing {', '.join(missing)}; deploy the timelocks first."
            )

        policy = self._attach("CrocPolicy", self.addrs.policy)
        self.deployer.transact(
            policy.transferGovernance,
            govern.timelock_ops,
            govern.timelock_treasury,
            govern.timelock_emergency,
        )
        self.advance("policy", ContractState.CONTROL_TRANSFERRED)
        return self.addrs

    def deploy_routers(self) -> CrocAddrs:
        """Swap routers in front of an already deployed dex."""
        self.addrs.require("dex")
        for router in ROUTERS:
            self._ensure(router.role, router.contract_name, self.addrs.dex)
        return self.addrs
