#!/usr/bin/python3

import click
from ape import Contract
from ape.cli import ConnectedProviderCommand, account_option, network_option
from ape.utils import ZERO_ADDRESS

from crocops.abi import DEX_ABI, ERC20_ABI
from crocops.context import prepare_context
from crocops.options import auto_option, chain_id_option
from crocops.params import Transactor
from crocops.pool_ops import format_pool_init, initialize_pool, plan_pool_init
from crocops.pools import read_pool_params
from crocops.types import ChecksumAddress, MinInt

NATIVE_DECIMALS = 18


def _token_details(token):
    if token == ZERO_ADDRESS:
        return "ETH", NATIVE_DECIMALS
    erc20 = Contract(token, abi=ERC20_ABI)
    return erc20.symbol(), int(erc20.decimals())


@click.command(cls=ConnectedProviderCommand, name="init-pool")
@network_option(required=True)
@account_option()
@chain_id_option
@auto_option
@click.option(
    "--token-x",
    help="Token priced by --price; omit with --native-eth.",
    type=ChecksumAddress(),
    required=False,
)
@click.option("--token-y", help="Token --price is quoted in.", type=ChecksumAddress(), required=True)
@click.option(
    "--price",
    help="Price of one token-x in whole token-y units.",
    type=click.FloatRange(min=0, min_open=True),
    required=True,
)
@click.option(
    "--pool-idx",
    help="Pool template index; defaults to the standard template of the network.",
    type=MinInt(0),
    required=False,
)
@click.option("--native-eth", help="token-x is native ether.", is_flag=True)
def cli(network, account, chain_id, auto, token_x, token_y, price, pool_idx, native_eth):
    """
    Initializes a pool on the dex cold path at the given price. The
    initializing account pays the initial liquidity lock of both tokens.
    """
    if native_eth:
        token_x = ZERO_ADDRESS
    elif token_x is None:
        raise click.UsageError("Either --token-x or --native-eth is required.")

    context = prepare_context(chain_id)
    context.addrs.require("dex", "cold")
    if pool_idx is None:
        pool_idx = read_pool_params(context.network).pool_idx

    x_symbol, x_decimals = _token_details(token_x)
    y_symbol, y_decimals = _token_details(token_y)
    plan = plan_pool_init(token_x, token_y, price, pool_idx, x_decimals, y_decimals)
    symbols = {token_x: x_symbol, token_y: y_symbol}

    click.echo()
    for line in format_pool_init(plan, symbols[plan.base], symbols[plan.quote]):
        click.secho(line, fg="blue" if line.startswith("---") else None)

    transactor = Transactor(account=account, autosign=auto)
    dex = Contract(context.addrs.dex, abi=DEX_ABI)
    initialize_pool(transactor, dex, plan)
    click.secho("Pool initialized successfully!", fg="green")


if __name__ == "__main__":
    cli()
