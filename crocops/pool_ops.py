"""
Pool initialization through the dex cold path, and the listing of pools
already initialized on a dex.
"""

from typing import Iterable, List, NamedTuple

from ape.api import ReceiptAPI
from ape.exceptions import ProviderError
from ape.utils import ZERO_ADDRESS
from eth_utils import encode_hex, to_checksum_address
from hexbytes import HexBytes

from crocops.commands import init_pool_cmd
from crocops.constants import COLD_PROXY_IDX
from crocops.exceptions import NetworkError
from crocops.params import Transactor
from crocops.pools import pool_price, sort_tokens, to_sqrt_price
from crocops.status import block_ranges

# native ether forwarded with the init of an ether pool, 0.00001 ETH
NATIVE_INIT_VALUE = 10**13


class PoolInit(NamedTuple):
    base: str
    quote: str
    pool_idx: int
    price: float
    sqrt_price: int
    value: int = 0


class DeployedPool(NamedTuple):
    base: str
    quote: str
    pool_idx: int
    block_number: int
    transaction_hash: str


def plan_pool_init(
    token_x: str,
    token_y: str,
    price: float,
    pool_idx: int,
    x_decimals: int = 18,
    y_decimals: int = 18,
) -> PoolInit:
    """
    Works out the ordered pair and initial square root price of a pool from
    the price of ``token_x`` in whole ``token_y`` units. The zero address
    stands for native ether.
    """
    base, quote = sort_tokens(token_x, token_y)
    init_price = pool_price(price, token_x, token_y, x_decimals, y_decimals)
    return PoolInit(
        base=base,
        quote=quote,
        pool_idx=pool_idx,
        price=init_price,
        sqrt_price=to_sqrt_price(init_price),
        value=NATIVE_INIT_VALUE if base == ZERO_ADDRESS else 0,
    )


def format_pool_init(plan: PoolInit, base_symbol: str = "", quote_symbol: str = "") -> List[str]:
    return [
        "--- Pool Initialization Details ---",
        f"Pool index: {plan.pool_idx}",
        f"Price ratio: {plan.price}",
        f"Sqrt price: {plan.sqrt_price}",
        f"Base token: {base_symbol} ({plan.base})",
        f"Quote token: {quote_symbol} ({plan.quote})",
    ]


def initialize_pool(transactor: Transactor, dex, plan: PoolInit) -> ReceiptAPI:
    """Sends the init pool user command to the dex cold path."""
    cmd = init_pool_cmd(plan.base, plan.quote, plan.pool_idx, plan.sqrt_price)
    return transactor.transact(dex.userCmd, COLD_PROXY_IDX, cmd, value=plan.value)


def collect_deployed_pools(logs: Iterable) -> List[DeployedPool]:
    """Deduplicated PoolInitialized events, oldest first."""
    unique = dict()
    for log in logs:
        if log.event_name != "PoolInitialized":
            continue
        args = log.event_arguments
        transaction_hash = encode_hex(HexBytes(log.transaction_hash))
        unique[(transaction_hash, log.log_index)] = (
            log.log_index,
            DeployedPool(
                base=to_checksum_address(args["base"]),
                quote=to_checksum_address(args["quote"]),
                pool_idx=int(args["poolIdx"]),
                block_number=log.block_number,
                transaction_hash=transaction_hash,
            ),
        )
    ordered = sorted(unique.values(), key=lambda item: (item[1].block_number, item[0]))
    return [pool for _, pool in ordered]


def fetch_deployed_pools(dex_contract, from_block: int, latest_block: int, echo=print) -> List[DeployedPool]:
    logs = list()
    for start, stop in block_ranges(from_block, latest_block):
        try:
            logs.extend(dex_contract.PoolInitialized.range(start, stop + 1))
        except ProviderError as e:
            raise NetworkError(f"Failed fetching pools of blocks {start} to {stop}: {e}")
        echo(f"Processed blocks {start} to {stop}")
    return collect_deployed_pools(logs)


def format_pools_table(pools: List[DeployedPool]) -> List[str]:
    lines = ["| Base | Quote | Pool Index | Block | Transaction |", "|------|-------|------------|-------|-------------|"]
    for pool in pools:
        lines.append(
            f"| {pool.base} | {pool.quote} | {pool.pool_idx} | {pool.block_number} | {pool.transaction_hash} |"
        )
    return lines
