import click
from eth_utils import to_checksum_address

from crocops.networks import SupportedNetwork


class MinInt(click.ParamType):
    name = "minint"

    def __init__(self, min_value, max_value=None):
        self.min_value = min_value
        self.max_value = max_value

    def convert(self, value, param, ctx):
        try:
            ivalue = int(value)
        except ValueError:
            self.fail(f"{value} is not a valid integer", param, ctx)
        if ivalue < self.min_value:
            self.fail(
                f"{value} is less than the minimum allowed value of {self.min_value}", param, ctx
            )
        if self.max_value is not None and ivalue > self.max_value:
            self.fail(
                f"{value} is more than the maximum allowed value of {self.max_value}", param, ctx
            )
        return ivalue


class ChecksumAddress(click.ParamType):
    name = "checksum_address"

    def convert(self, value, param, ctx):
        try:
            value = to_checksum_address(value=value)
        except ValueError:
            self.fail(f"Invalid ethereum address '{value}'", param, ctx)
        else:
            return value


class ChainId(click.ParamType):
    """A registry key ("0x1", "mock") or chain id, resolved to a supported network."""

    name = "chain_id"

    def convert(self, value, param, ctx):
        if isinstance(value, SupportedNetwork):
            return value
        try:
            return SupportedNetwork.from_chain_id(value)
        except click.ClickException as e:
            self.fail(e.message, param, ctx)
