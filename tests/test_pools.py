import pytest

from crocops.exceptions import ConfigurationError
from crocops.networks import SupportedNetwork
from crocops.pools import PoolParams, pool_price, read_pool_params, sort_tokens, to_sqrt_price


def test_committed_pool_params():
    for network in SupportedNetwork:
        params = read_pool_params(network)
        assert params.fee_rate == 500
        assert params.tick_size == 64
    assert read_pool_params(SupportedNetwork.MAINNET).pool_idx == 420


def test_incomplete_pool_params(tmp_path):
    filepath = tmp_path / "pools.yml"
    filepath.write_text('"mock":\n  pool_idx: 36000\n  fee_rate: 500\n')
    with pytest.raises(ConfigurationError, match="tick_size"):
        read_pool_params(SupportedNetwork.MOCK, filepath=filepath)
    with pytest.raises(ConfigurationError):
        read_pool_params(SupportedNetwork.MAINNET, filepath=filepath)


def test_pool_params_fields():
    assert PoolParams._fields == (
        "pool_idx",
        "fee_rate",
        "tick_size",
        "jit_thresh",
        "knockout",
        "oracle_flags",
        "init_liq",
    )


def test_sort_tokens():
    low = "0x0000000000000000000000000000000000000001"
    high = "0xFFfFfFffFFfffFFfFFfFFFFFffFFFffffFfFFFfF"
    assert sort_tokens(high, low) == (low, high)
    assert sort_tokens(low, high) == (low, high)
    with pytest.raises(ValueError):
        sort_tokens(low, low)


def test_sqrt_price_is_q64():
    assert to_sqrt_price(1.0) == 2**64
    assert to_sqrt_price(4.0) == 2**65
    assert to_sqrt_price(0.25) == 2**63


@pytest.mark.parametrize("price", [0.0, -1.0, float("nan"), float("inf"), 1e80])
def test_sqrt_price_rejects_out_of_range_prices(price):
    with pytest.raises(ValueError):
        to_sqrt_price(price)


def test_pool_price_follows_address_order():
    low = "0x1111111111111111111111111111111111111111"
    high = "0x2222222222222222222222222222222222222222"
    assert pool_price(2000.0, low, high, 18, 6) == 2000.0 * 10**12
    assert pool_price(2000.0, high, low, 18, 6) == pytest.approx(1 / (2000.0 * 10**12))
