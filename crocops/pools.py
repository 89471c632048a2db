import math
from pathlib import Path
from typing import NamedTuple, Tuple

from crocops.constants import POOL_PARAMS_FILEPATH
from crocops.exceptions import ConfigurationError
from crocops.networks import SupportedNetwork
from crocops.utils import _load_yaml


class PoolParams(NamedTuple):
    """Standard pool template plus the initial liquidity lock of a network."""

    pool_idx: int
    fee_rate: int
    tick_size: int
    jit_thresh: int
    knockout: int
    oracle_flags: int
    init_liq: int


def read_pool_params(
    network: SupportedNetwork, filepath: Path = POOL_PARAMS_FILEPATH
) -> PoolParams:
    """Loads the pool parameters of a network from the pool params YAML."""
    config = _load_yaml(filepath) or dict()
    params = config.get(network.registry_key)
    if params is None:
        raise ConfigurationError(
            f"No pool parameters for network '{network.registry_key}' in {filepath}"
        )
    missing = [field for field in PoolParams._fields if field not in params]
    if missing:
        raise ConfigurationError(
            f"Pool parameters for '{network.registry_key}' are missing {', '.join(missing)}"
        )
    return PoolParams(**{field: int(params[field]) for field in PoolParams._fields})


def sort_tokens(token_x: str, token_y: str) -> Tuple[str, str]:
    """Orders a token pair into (base, quote) the way the dex keys its pools."""
    if token_x.lower() == token_y.lower():
        raise ValueError("Pool tokens must differ")
    if token_x.lower() < token_y.lower():
        return token_x, token_y
    return token_y, token_x


# square roots are taken in floating point and truncated to this precision
SQRT_PRECISION = 10**8
Q_64 = 2**64
MAX_UINT128 = 2**128 - 1


def to_sqrt_price(price: float) -> int:
    """Q64.64 fixed point square root of a price ratio."""
    if not price > 0 or math.isinf(price):
        raise ValueError(f"Pool price must be positive and finite, got {price}")
    sqrt_fixed = round(math.sqrt(price) * SQRT_PRECISION)
    sqrt_price = sqrt_fixed * Q_64 // SQRT_PRECISION
    if sqrt_price == 0 or sqrt_price > MAX_UINT128:
        raise ValueError(f"Price {price} is out of the uint128 square root range")
    return sqrt_price


def pool_price(
    price: float, token_x: str, token_y: str, x_decimals: int = 18, y_decimals: int = 18
) -> float:
    """
    Converts the price of ``token_x`` quoted in whole ``token_y`` units into
    the on-chain ratio of the pool, which is keyed by the lower address as base.
    """
    price_ratio = price * math.pow(10, x_decimals - y_decimals)
    base, _ = sort_tokens(token_x, token_y)
    if base == token_x:
        return price_ratio
    return 1.0 / price_ratio
