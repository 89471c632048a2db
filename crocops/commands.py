"""
Protocol command codec.

A protocol command is the ABI tuple encoding of ``(uint8 code, *args)`` that
the CrocSwapDex dispatcher hands to the proxy installed at a callpath. Only
type and width compliance is checked here; semantic checks (proxy index
ranges, template bounds, ...) are left to the contracts.
"""

from enum import IntEnum
from typing import Any, NamedTuple, Sequence, Tuple

from eth_abi import encode, is_encodable

from crocops.abi import decode_values
from crocops.pools import PoolParams, sort_tokens

CODE_TYPE = "uint8"


class ProtocolCode(IntEnum):
    AUTHORITY_TRANSFER = 20
    UPGRADE = 21
    HOT_OPEN = 22
    SAFE_MODE = 23
    POOL_TEMPLATE = 110
    POOL_REVISE = 111
    INIT_POOL_LIQ = 112


class UserCode(IntEnum):
    """User commands share the protocol command tuple layout."""

    INIT_POOL = 71


class ProtocolCmd(NamedTuple):
    """An encoded protocol command and the callpath it is dispatched to."""

    callpath: int
    payload: bytes
    sudo: bool = False


def encode_protocol_cmd(code: int, types: Sequence[str], args: Sequence[Any]) -> bytes:
    """Encodes an opcode and its typed arguments as an ABI tuple."""
    if len(types) != len(args):
        raise ValueError(f"Protocol command {code} has {len(types)} type(s) but {len(args)} arg(s)")

    abi_types = [CODE_TYPE, *types]
    values = [int(code), *args]
    for position, (abi_type, value) in enumerate(zip(abi_types, values)):
        if not is_encodable(abi_type, value):
            raise ValueError(
                f"Protocol command {code} argument at position {position} has a value "
                f"'{value}' that is not encodable as '{abi_type}'"
            )
    return encode(abi_types, values)


def decode_protocol_cmd(types: Sequence[str], payload: bytes) -> Tuple[Any, ...]:
    """Decodes a protocol command payload back into ``(code, *args)``."""
    return decode_values([CODE_TYPE, *types], payload)


def install_proxy_cmd(proxy_address: str, proxy_idx: int) -> bytes:
    return encode_protocol_cmd(ProtocolCode.UPGRADE, ["address", "uint16"], [proxy_address, proxy_idx])


def transfer_authority_cmd(authority: str) -> bytes:
    return encode_protocol_cmd(ProtocolCode.AUTHORITY_TRANSFER, ["address"], [authority])


def hot_path_cmd(open_hot_path: bool) -> bytes:
    return encode_protocol_cmd(ProtocolCode.HOT_OPEN, ["bool"], [open_hot_path])


def safe_mode_cmd(enabled: bool) -> bytes:
    return encode_protocol_cmd(ProtocolCode.SAFE_MODE, ["bool"], [enabled])


def pool_template_cmd(params: PoolParams) -> bytes:
    return encode_protocol_cmd(
        ProtocolCode.POOL_TEMPLATE,
        ["uint256", "uint16", "uint16", "uint8", "uint8", "uint8"],
        [
            params.pool_idx,
            params.fee_rate,
            params.tick_size,
            params.jit_thresh,
            params.knockout,
            params.oracle_flags,
        ],
    )


def revise_pool_cmd(token_x: str, token_y: str, params: PoolParams) -> bytes:
    base, quote = sort_tokens(token_x, token_y)
    return encode_protocol_cmd(
        ProtocolCode.POOL_REVISE,
        ["address", "address", "uint256", "uint16", "uint16", "uint8", "uint8"],
        [
            base,
            quote,
            params.pool_idx,
            params.fee_rate,
            params.tick_size,
            params.jit_thresh,
            params.knockout,
        ],
    )


def init_liquidity_cmd(params: PoolParams) -> bytes:
    return encode_protocol_cmd(ProtocolCode.INIT_POOL_LIQ, ["uint128"], [params.init_liq])


def init_pool_cmd(token_x: str, token_y: str, pool_idx: int, sqrt_price: int) -> bytes:
    """User command initializing a pool of the ordered pair at a Q64.64 square root price."""
    base, quote = sort_tokens(token_x, token_y)
    return encode_protocol_cmd(
        UserCode.INIT_POOL,
        ["address", "address", "uint256", "uint128"],
        [base, quote, pool_idx, sqrt_price],
    )
