"""
Operational status of a dex, read from its SafeMode and HotPathOpen events.
"""

from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from ape.exceptions import ProviderError
from eth_utils import encode_hex
from hexbytes import HexBytes

from crocops.exceptions import NetworkError

# providers commonly cap log queries at 10000 blocks
BLOCK_RANGE = 9900

STATUS_EVENTS = ("SafeMode", "HotPathOpen")


class StatusEvent(NamedTuple):
    block_number: int
    transaction_hash: str
    log_index: int
    event_name: str
    value: bool


def block_ranges(
    from_block: int, latest_block: int, chunk: int = BLOCK_RANGE
) -> Iterator[Tuple[int, int]]:
    """Splits ``[from_block, latest_block]`` into inclusive, non-overlapping chunks."""
    if chunk <= 0:
        raise ValueError("Block range chunk must be positive")
    start = from_block
    while start <= latest_block:
        stop = min(start + chunk - 1, latest_block)
        yield start, stop
        start = stop + 1


def _status_event(log) -> StatusEvent:
    (value,) = log.event_arguments.values()
    return StatusEvent(
        block_number=log.block_number,
        transaction_hash=encode_hex(HexBytes(log.transaction_hash)),
        log_index=log.log_index,
        event_name=log.event_name,
        value=bool(value),
    )


def collect_status_events(logs: Iterable) -> List[StatusEvent]:
    """Deduplicated status events, most recent first."""
    unique = dict()
    for log in logs:
        if log.event_name not in STATUS_EVENTS:
            continue
        event = _status_event(log)
        unique[(event.transaction_hash, event.log_index, event.event_name)] = event
    return sorted(
        unique.values(), key=lambda e: (e.block_number, e.log_index), reverse=True
    )


def fetch_status_events(dex_contract, from_block: int, latest_block: int, echo=print) -> List[StatusEvent]:
    """Scans the dex event log chunk by chunk for status events."""
    logs = list()
    for start, stop in block_ranges(from_block, latest_block):
        try:
            for event_name in STATUS_EVENTS:
                logs.extend(getattr(dex_contract, event_name).range(start, stop + 1))
        except ProviderError as e:
            raise NetworkError(f"Failed fetching events of blocks {start} to {stop}: {e}")
        echo(f"Processed blocks {start} to {stop}")
    return collect_status_events(logs)


def current_status(events: List[StatusEvent]) -> Dict[str, Optional[bool]]:
    """Latest value of each status flag; None when it was never emitted."""
    status = {event_name: None for event_name in STATUS_EVENTS}
    for event in events:
        if status[event.event_name] is None:
            status[event.event_name] = event.value
    return status
