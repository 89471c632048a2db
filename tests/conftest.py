import itertools
from types import SimpleNamespace

import pytest
from eth_utils import keccak, to_checksum_address

from crocops.abi import (
    DEPLOYER_DEPLOY,
    DEPLOYER_PROTOCOL_CMD,
    DEX_USER_CMD,
    POLICY_TRANSFER_GOVERNANCE,
    POLICY_TREASURY_RESOLUTION,
)
from crocops.addresses import CrocAddrs, GovernAddrs
from crocops.confirm import auto_confirm
from crocops.params import Deployer
from crocops.salts import predict_create2_address

# Common constants
ONE_DAY = 24 * 60 * 60

# Constructor inputs of the contracts the sequencer deploys
CONSTRUCTORS = {
    "CrocDeployer": [("authority", "address")],
    "CrocSwapDex": [],
    "ColdPath": [],
    "HotProxy": [],
    "KnockoutLiqPath": [],
    "KnockoutFlagPath": [],
    "LongPath": [],
    "MicroPaths": [],
    "WarmPath": [],
    "CrocPolicy": [("dex", "address")],
    "CrocQuery": [("dex", "address")],
    "CrocImpact": [("dex", "address")],
    "CrocSwapRouter": [("dex", "address")],
    "CrocSwapRouterBypass": [("dex", "address")],
    "TimelockAccepts": [
        ("minDelay", "uint256"),
        ("proposers", "address[]"),
        ("executors", "address[]"),
    ],
}

# Transactional methods of the faked contracts
METHODS = {
    "CrocDeployer": [DEPLOYER_PROTOCOL_CMD, DEPLOYER_DEPLOY],
    "CrocPolicy": [POLICY_TREASURY_RESOLUTION, POLICY_TRANSFER_GOVERNANCE],
    "CrocSwapDex": [DEX_USER_CMD],
}


# Utility functions
def address(label: str) -> str:
    return to_checksum_address(keccak(text=label)[12:])


def _abi_inputs(inputs):
    return [SimpleNamespace(name=name, type=abi_type) for name, abi_type in inputs]


class FakeMethod:
    """Stands in for an ape ContractTransactionHandler."""

    def __init__(self, contract, method, ledger):
        self.contract = contract
        self.abis = [method.abi]
        self._ledger = ledger

    def __call__(self, *args, sender=None, value=0):
        name = self.abis[0].name
        self._ledger.append(("transact", self.contract.contract_type.name, name, args))
        hook = getattr(self.contract, f"_on_{name}", None)
        if hook:
            hook(*args)
        return SimpleNamespace(sender=sender, value=value)


class FakeInstance:
    def __init__(self, container, address, ledger):
        self.contract_type = container.contract_type
        self.address = address
        self.dex = None
        for method in METHODS.get(container.contract_type.name, ()):
            setattr(self, method.name, FakeMethod(self, method, ledger))

    def _on_deploy(self, init_code, salt):
        self.dex = predict_create2_address(self.address, salt.to_bytes(32, "big"), init_code)

    def dex_(self):
        return self.dex


class FakeContainer:
    """Stands in for an ape ContractContainer."""

    def __init__(self, name, inputs, ledger):
        bytecode = keccak(text=name)
        self.contract_type = SimpleNamespace(name=name, get_deployment_bytecode=lambda: bytecode)
        self.constructor = SimpleNamespace(abi=SimpleNamespace(inputs=_abi_inputs(inputs)))
        self._ledger = ledger
        self._instances = dict()

    def at(self, address):
        if address not in self._instances:
            self._instances[address] = FakeInstance(self, address, self._ledger)
        return self._instances[address]


class FakeProject:
    def __init__(self, ledger):
        self.containers = {
            name: FakeContainer(name, inputs, ledger) for name, inputs in CONSTRUCTORS.items()
        }

    def __call__(self, contract_name):
        return self.containers[contract_name]


class FakeAccount:
    """Stands in for an ape AccountAPI; deploys to deterministic addresses."""

    def __init__(self, ledger):
        self.address = address("deployer-account")
        self.autosign = False
        self._ledger = ledger
        self._nonce = itertools.count()

    def set_autosign(self, enabled):
        self.autosign = enabled

    def deploy(self, container, *args, publish=False):
        name = container.contract_type.name
        self._ledger.append(("deploy", name, args))
        return container.at(address(f"{name}-{next(self._nonce)}"))


# Fixtures
@pytest.fixture
def ledger():
    return list()


@pytest.fixture
def fake_project(ledger):
    return FakeProject(ledger)


@pytest.fixture
def fake_account(ledger):
    return FakeAccount(ledger)


@pytest.fixture
def deployer(fake_account):
    return Deployer(account=fake_account, confirm=auto_confirm)


@pytest.fixture
def multisigs():
    return GovernAddrs(
        multisig_treasury=address("multisig-treasury"),
        multisig_ops=address("multisig-ops"),
        multisig_emergency=address("multisig-emergency"),
    )


@pytest.fixture
def deployed_addrs(multisigs):
    """A fully deployed and governed record."""
    govern = multisigs.update(
        timelock_treasury=address("timelock-treasury"),
        timelock_ops=address("timelock-ops"),
        timelock_emergency=address("timelock-emergency"),
    )
    roles = {
        role: address(role)
        for role in CrocAddrs._fields
        if role not in ("govern", "shell", "policy_shell")
    }
    return CrocAddrs(govern=govern, **roles)
