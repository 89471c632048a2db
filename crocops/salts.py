import json
from collections import OrderedDict
from pathlib import Path
from typing import Dict

from eth_typing import ChecksumAddress
from eth_utils import decode_hex, encode_hex, keccak, to_canonical_address, to_checksum_address

from crocops.constants import SALT_REGISTRY_FILEPATH
from crocops.exceptions import ConfigurationError, NotFoundError
from crocops.utils import _load_json

SALT_LENGTH = 32


def _normalize_key(address: str) -> str:
    return address.strip().lower()


def _to_salt(value: str) -> bytes:
    salt = decode_hex(value)
    if len(salt) != SALT_LENGTH:
        raise ConfigurationError(f"CREATE2 salt '{value}' is not {SALT_LENGTH} bytes long")
    return salt


def generate_salt(address: str) -> bytes:
    """
    Derives the CREATE2 salt of a deployer: keccak256 of the 20 address
    bytes, not of the address string.
    """
    try:
        canonical_address = to_canonical_address(address)
    except ValueError:
        raise ConfigurationError(f"Invalid ethereum address '{address}'")
    return keccak(canonical_address)


def predict_create2_address(factory: str, salt: bytes, init_code: bytes) -> ChecksumAddress:
    """Returns the address a CREATE2 deployment from `factory` will land on (EIP-1014)."""
    preimage = b"\xff" + to_canonical_address(factory) + salt + keccak(init_code)
    return to_checksum_address(keccak(preimage)[12:])


class SaltRegistry:
    """
    Precomputed CREATE2 salts keyed by lower-cased deployer address.
    Entries are curated by hand and never change once added.
    """

    def __init__(self, salts: Dict[str, bytes]):
        self._salts = OrderedDict()
        for address, salt in salts.items():
            self.register(address, salt)

    def __contains__(self, address: str) -> bool:
        return _normalize_key(address) in self._salts

    def __len__(self) -> int:
        return len(self._salts)

    def resolve(self, deployer: str) -> bytes:
        """Returns the salt of a deployer address."""
        try:
            return self._salts[_normalize_key(deployer)]
        except KeyError:
            raise NotFoundError(f"No salt found for {deployer}")

    def register(self, address: str, salt: bytes) -> None:
        key = _normalize_key(address)
        if len(salt) != SALT_LENGTH:
            raise ConfigurationError(f"CREATE2 salt for {address} is not {SALT_LENGTH} bytes long")
        existing = self._salts.get(key)
        if existing is not None and existing != salt:
            raise ConfigurationError(f"A different salt is already registered for {address}")
        self._salts[key] = salt

    def to_json(self) -> Dict[str, str]:
        return OrderedDict((address, encode_hex(salt)) for address, salt in self._salts.items())

    @classmethod
    def from_json(cls, data: Dict[str, str]) -> "SaltRegistry":
        return cls({address: _to_salt(value) for address, value in data.items()})


def read_salt_registry(filepath: Path = SALT_REGISTRY_FILEPATH) -> SaltRegistry:
    if not filepath.exists():
        raise ConfigurationError(f"No salt registry found at {filepath}")
    return SaltRegistry.from_json(_load_json(filepath))


def write_salt_registry(registry: SaltRegistry, filepath: Path = SALT_REGISTRY_FILEPATH) -> Path:
    with open(filepath, "w") as file:
        json.dump(registry.to_json(), file, indent=4, separators=(",", ": "))
        file.write("\n")
    return filepath
