"""
Two-phase timelock calls.

A timelocked action is submitted twice by the same multisig: once to
``schedule`` it, and again to ``execute`` it once the delay has elapsed
on-chain. The timelock identifies the operation by the hash of
``(target, value, data, predecessor, salt)``, so both calls must carry the
exact same tuple, and the salt must be unique per pending operation.
"""

import itertools
import os
import time
from typing import Any, Callable, NamedTuple, Optional, Tuple

from ape.utils import EMPTY_BYTES32
from eth_abi import encode
from eth_typing import ChecksumAddress
from eth_utils import keccak, to_checksum_address
from hexbytes import HexBytes

from crocops.abi import (
    TIMELOCK_EXECUTE,
    TIMELOCK_GET_MIN_DELAY,
    TIMELOCK_SCHEDULE,
    TIMELOCK_UPDATE_DELAY,
)
from crocops.constants import MAX_TIMELOCK_DELAY
from crocops.exceptions import PolicyViolation

# scheduled calls never forward ether
CALL_VALUE = 0
NO_PREDECESSOR = EMPTY_BYTES32


class TimelockCalls(NamedTuple):
    timelock_addr: ChecksumAddress
    schedule_calldata: bytes
    exec_calldata: bytes
    delay: int
    salt: bytes


class TimestampSaltSource:
    """
    Wall clock milliseconds, zero-padded to 32 bytes.

    Two calls built within the same clock tick get the same salt and the
    timelock rejects the second schedule. Use UniqueSaltSource instead;
    this source only exists to reproduce salts of past resolutions.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def __call__(self, target: str, calldata: bytes, delay: int) -> bytes:
        millis = int(self._clock() * 1000)
        return millis.to_bytes(32, "big")


class UniqueSaltSource:
    """
    keccak256 of the full call tuple, a per-source counter and fresh random
    bytes. Distinct for every call regardless of clock resolution.
    """

    def __init__(self, entropy: Callable[[int], bytes] = os.urandom):
        self._entropy = entropy
        self._nonce = itertools.count()

    def __call__(self, target: str, calldata: bytes, delay: int) -> bytes:
        nonce = next(self._nonce)
        preimage = encode(
            ["address", "bytes", "uint256", "uint256", "bytes32"],
            [target, bytes(calldata), delay, nonce, self._entropy(32)],
        )
        return keccak(preimage)


SaltSource = Callable[[str, bytes, int], bytes]


def check_delay(delay: int, max_delay: Optional[int] = None) -> None:
    if isinstance(delay, bool) or not isinstance(delay, int) or delay < 0:
        raise PolicyViolation(f"Timelock delay must be a non-negative integer, got {delay!r}")
    if max_delay is not None and delay > max_delay:
        raise PolicyViolation(f"Timelock delay {delay}s exceeds the {max_delay}s ceiling")


def build_timelock_calls(
    timelock_addr: str,
    target: str,
    calldata: bytes,
    delay: int,
    salt_source: Optional[SaltSource] = None,
    max_delay: Optional[int] = None,
) -> TimelockCalls:
    """
    Builds the paired schedule/execute calldata of a single timelocked call
    of ``target`` with ``calldata``.
    """
    check_delay(delay, max_delay=max_delay)
    salt_source = salt_source or UniqueSaltSource()

    target = to_checksum_address(target)
    calldata = bytes(HexBytes(calldata))
    salt = salt_source(target, calldata, delay)

    operation = (target, CALL_VALUE, calldata, NO_PREDECESSOR, salt)
    schedule_calldata = TIMELOCK_SCHEDULE.encode_input(*operation, delay)
    exec_calldata = TIMELOCK_EXECUTE.encode_input(*operation)

    return TimelockCalls(
        timelock_addr=to_checksum_address(timelock_addr),
        schedule_calldata=schedule_calldata,
        exec_calldata=exec_calldata,
        delay=delay,
        salt=salt,
    )


def update_delay_calldata(new_delay: int) -> bytes:
    """Calldata of ``updateDelay``, rejecting delays over seven days."""
    check_delay(new_delay, max_delay=MAX_TIMELOCK_DELAY)
    return TIMELOCK_UPDATE_DELAY.encode_input(new_delay)


def get_min_delay_calldata() -> bytes:
    return TIMELOCK_GET_MIN_DELAY.encode_input()


def decode_schedule_calldata(calldata: bytes) -> Tuple[Any, ...]:
    """Returns ``(target, value, data, predecessor, salt, delay)``."""
    return TIMELOCK_SCHEDULE.decode_input(calldata)


def decode_execute_calldata(calldata: bytes) -> Tuple[Any, ...]:
    """Returns ``(target, value, data, predecessor, salt)``."""
    return TIMELOCK_EXECUTE.decode_input(calldata)


def operation_id(timelock_calls: TimelockCalls) -> bytes:
    """The id the timelock stores the scheduled operation under (``hashOperation``)."""
    target, value, data, predecessor, salt = decode_execute_calldata(timelock_calls.exec_calldata)
    return keccak(
        encode(
            ["address", "uint256", "bytes", "bytes32", "bytes32"],
            [target, value, data, predecessor, salt],
        )
    )
