"""
Calldata encoding for the external contracts this toolkit talks to, plus the
minimal ABIs needed to attach to them through ape.

Resolutions are built offline, without a provider, so calldata is encoded
against the method ABI with eth-abi rather than through a contract handler.
"""

from typing import Any, List, Sequence, Tuple

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address
from ethpm_types.abi import ABIType, EventABI, EventABIType, MethodABI

SELECTOR_LENGTH = 4


def decode_values(types: Sequence[str], data: bytes) -> Tuple[Any, ...]:
    """ABI-decodes ``data``, returning addresses checksummed."""
    values = decode(list(types), bytes(data))
    return tuple(
        to_checksum_address(value) if abi_type == "address" else value
        for abi_type, value in zip(types, values)
    )


class ContractMethod:
    """A single contract function; encodes and decodes its calldata."""

    def __init__(self, name: str, inputs: Sequence[Tuple[str, str]], outputs=(), mutability="nonpayable"):
        self.abi = MethodABI(
            name=name,
            stateMutability=mutability,
            inputs=[ABIType(name=arg_name, type=abi_type) for arg_name, abi_type in inputs],
            outputs=[ABIType(name=arg_name, type=abi_type) for arg_name, abi_type in outputs],
        )

    @property
    def name(self) -> str:
        return self.abi.name

    @property
    def types(self) -> List[str]:
        return [abi_input.canonical_type for abi_input in self.abi.inputs]

    @property
    def signature(self) -> str:
        return self.abi.selector

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_input(self, *args) -> bytes:
        if len(args) != len(self.abi.inputs):
            raise ValueError(f"{self.signature} takes {len(self.abi.inputs)} argument(s), got {len(args)}")
        return self.selector + encode(self.types, list(args))

    def decode_input(self, calldata: bytes) -> Tuple[Any, ...]:
        calldata = bytes(calldata)
        if calldata[:SELECTOR_LENGTH] != self.selector:
            raise ValueError(f"Calldata is not a call to {self.signature}")
        return decode_values(self.types, calldata[SELECTOR_LENGTH:])


def _event_abi(name: str, inputs: Sequence[Tuple[str, str]], indexed: bool = False) -> EventABI:
    return EventABI(
        name=name,
        anonymous=False,
        inputs=[
            EventABIType(name=arg_name, type=abi_type, indexed=indexed)
            for arg_name, abi_type in inputs
        ],
    )


#
# TimelockAccepts (OpenZeppelin TimelockController)
#

TIMELOCK_SCHEDULE = ContractMethod(
    "schedule",
    [
        ("target", "address"),
        ("value", "uint256"),
        ("data", "bytes"),
        ("predecessor", "bytes32"),
        ("salt", "bytes32"),
        ("delay", "uint256"),
    ],
)
TIMELOCK_EXECUTE = ContractMethod(
    "execute",
    [
        ("target", "address"),
        ("value", "uint256"),
        ("payload", "bytes"),
        ("predecessor", "bytes32"),
        ("salt", "bytes32"),
    ],
    mutability="payable",
)
TIMELOCK_UPDATE_DELAY = ContractMethod("updateDelay", [("newDelay", "uint256")])
TIMELOCK_GET_MIN_DELAY = ContractMethod(
    "getMinDelay", [], outputs=[("", "uint256")], mutability="view"
)

#
# CrocPolicy
#

POLICY_TREASURY_RESOLUTION = ContractMethod(
    "treasuryResolution",
    [("minion", "address"), ("proxyPath", "uint16"), ("cmd", "bytes"), ("sudo", "bool")],
)
POLICY_OPS_RESOLUTION = ContractMethod(
    "opsResolution",
    [("minion", "address"), ("proxyPath", "uint16"), ("cmd", "bytes")],
)
POLICY_EMERGENCY_HALT = ContractMethod(
    "emergencyHalt", [("minion", "address"), ("reason", "string")]
)
POLICY_TRANSFER_GOVERNANCE = ContractMethod(
    "transferGovernance",
    [("ops", "address"), ("treasury", "address"), ("emergency", "address")],
)

#
# CrocSwapDex
#

DEX_PROTOCOL_CMD = ContractMethod(
    "protocolCmd",
    [("callpath", "uint16"), ("cmd", "bytes"), ("sudo", "bool")],
    mutability="payable",
)
DEX_USER_CMD = ContractMethod(
    "userCmd",
    [("callpath", "uint16"), ("cmd", "bytes")],
    outputs=[("", "bytes")],
    mutability="payable",
)

#
# CrocDeployer
#

DEPLOYER_PROTOCOL_CMD = ContractMethod(
    "protocolCmd",
    [("dex", "address"), ("proxyPath", "uint16"), ("cmd", "bytes"), ("sudo", "bool")],
)
DEPLOYER_DEPLOY = ContractMethod(
    "deploy",
    [("initCode", "bytes"), ("salt", "uint256")],
    outputs=[("addr", "address")],
)

#
# ERC20
#

ERC20_DECIMALS = ContractMethod("decimals", [], outputs=[("", "uint8")], mutability="view")
ERC20_SYMBOL = ContractMethod("symbol", [], outputs=[("", "string")], mutability="view")

TIMELOCK_ABI = [
    method.abi
    for method in (TIMELOCK_SCHEDULE, TIMELOCK_EXECUTE, TIMELOCK_UPDATE_DELAY, TIMELOCK_GET_MIN_DELAY)
]
DEX_ABI = [
    DEX_PROTOCOL_CMD.abi,
    DEX_USER_CMD.abi,
    _event_abi("SafeMode", [("enabled", "bool")]),
    _event_abi("HotPathOpen", [("open", "bool")]),
    _event_abi(
        "PoolInitialized",
        [("base", "address"), ("quote", "address"), ("poolIdx", "uint256")],
        indexed=True,
    ),
]
ERC20_ABI = [ERC20_DECIMALS.abi, ERC20_SYMBOL.abi]
