from enum import Enum
from typing import Optional, Union

from crocops.exceptions import ConfigurationError, NotFoundError


class SupportedNetwork(Enum):
    """Networks with a committed address registry record."""

    MAINNET = "0x1"
    GOERLI = "0x5"
    MORPH_TESTNET = "0xafa"
    MOCK = "mock"

    @property
    def registry_key(self) -> str:
        return self.value

    @property
    def chain_id(self) -> int:
        if self is SupportedNetwork.MOCK:
            # local forks
            return 31337
        return int(self.value, 16)

    @property
    def is_local(self) -> bool:
        return self is SupportedNetwork.MOCK

    @property
    def explorer(self) -> Optional[str]:
        if self is SupportedNetwork.MORPH_TESTNET:
            return "https://explorer-holesky.morphl2.io"
        if self is SupportedNetwork.MAINNET:
            return "https://etherscan.io"
        if self is SupportedNetwork.GOERLI:
            return "https://goerli.etherscan.io"
        if self is SupportedNetwork.MOCK:
            return None
        raise AssertionError(f"Unhandled network {self}")

    def explorer_url(self, address: str) -> str:
        """Returns the block explorer URL of an address on this network."""
        if self.explorer is None:
            raise NotFoundError(f"No block explorer for network '{self.registry_key}'")
        return f"{self.explorer}/address/{address}"

    @classmethod
    def from_chain_id(cls, chain_id: Union[str, int]) -> "SupportedNetwork":
        """
        Resolves a network from its registry key ("0x1", "mock"), a decimal or
        hex chain id string, or an integer chain id.
        """
        if isinstance(chain_id, str):
            value = chain_id.strip().lower()
            for network in cls:
                if network.registry_key == value:
                    return network
            try:
                chain_id = int(value, 0)
            except ValueError:
                raise ConfigurationError(f"Unsupported chain id '{chain_id}'")

        for network in cls:
            if network.chain_id == chain_id:
                return network
        raise ConfigurationError(f"Unsupported chain id '{chain_id}'")
