import json
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterator, List, NamedTuple, Tuple

from eth_utils import to_checksum_address

from crocops.constants import ADDRESS_REGISTRY_FILEPATH
from crocops.exceptions import ConfigurationError, NotFoundError
from crocops.networks import SupportedNetwork
from crocops.utils import _load_json

STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}

# Convention is to use an empty string for a contract not yet deployed on a chain
NOT_DEPLOYED = ""


def _normalize_address(role: str, address: str) -> str:
    if address == NOT_DEPLOYED:
        return NOT_DEPLOYED
    try:
        return to_checksum_address(address)
    except ValueError:
        raise ConfigurationError(f"Invalid address '{address}' for role '{role}'")


class GovernAddrs(NamedTuple):
    """Multisig and timelock addresses per governance role."""

    multisig_treasury: str = NOT_DEPLOYED
    multisig_ops: str = NOT_DEPLOYED
    multisig_emergency: str = NOT_DEPLOYED
    timelock_treasury: str = NOT_DEPLOYED
    timelock_ops: str = NOT_DEPLOYED
    timelock_emergency: str = NOT_DEPLOYED

    def update(self, **roles: str) -> "GovernAddrs":
        normalized = {role: _normalize_address(role, value) for role, value in roles.items()}
        return self._replace(**normalized)

    def is_deployed(self, role: str) -> bool:
        return getattr(self, role) != NOT_DEPLOYED


class CrocAddrs(NamedTuple):
    """Deployed contract addresses of a single chain, keyed by logical role."""

    dex: str = NOT_DEPLOYED
    cold: str = NOT_DEPLOYED
    warm: str = NOT_DEPLOYED
    long: str = NOT_DEPLOYED
    micro: str = NOT_DEPLOYED
    hot: str = NOT_DEPLOYED
    knockout: str = NOT_DEPLOYED
    ko_cross: str = NOT_DEPLOYED
    policy: str = NOT_DEPLOYED
    query: str = NOT_DEPLOYED
    impact: str = NOT_DEPLOYED
    router: str = NOT_DEPLOYED
    router_bypass: str = NOT_DEPLOYED
    shell: str = NOT_DEPLOYED
    policy_shell: str = NOT_DEPLOYED
    deployer: str = NOT_DEPLOYED
    govern: GovernAddrs = GovernAddrs()

    def update(self, **roles) -> "CrocAddrs":
        normalized = dict()
        for role, value in roles.items():
            if role == "govern":
                normalized[role] = value
            else:
                normalized[role] = _normalize_address(role, value)
        return self._replace(**normalized)

    def is_deployed(self, role: str) -> bool:
        return getattr(self, role) != NOT_DEPLOYED

    def require(self, *roles: str) -> None:
        """Fails if any of the roles has no deployed address yet."""
        missing = [role for role in roles if not self.is_deployed(role)]
        if missing:
            raise ConfigurationError(
                f"Address registry is missing {', '.join(missing)}; run the preceding steps first."
            )

    def to_json(self) -> Dict:
        data = OrderedDict()
        for field in self._fields:
            if field == "govern":
                continue
            data[_ROLE_KEYS[field]] = getattr(self, field)
        data["govern"] = OrderedDict(
            (_GOVERN_KEYS[field], getattr(self.govern, field)) for field in GovernAddrs._fields
        )
        return data

    @classmethod
    def from_json(cls, data: Dict) -> "CrocAddrs":
        roles = dict()
        for key, value in data.items():
            if key == "govern":
                continue
            role = _ROLES_BY_KEY.get(key)
            if role is None:
                raise ConfigurationError(f"Unknown contract role '{key}' in address registry.")
            roles[role] = _normalize_address(role, value)

        govern = dict()
        for key, value in data.get("govern", dict()).items():
            role = _GOVERN_BY_KEY.get(key)
            if role is None:
                raise ConfigurationError(f"Unknown governance role '{key}' in address registry.")
            govern[role] = _normalize_address(role, value)

        return cls(govern=GovernAddrs(**govern), **roles)


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(word.capitalize() for word in tail)


_ROLE_KEYS = {field: _camel_case(field) for field in CrocAddrs._fields}
_ROLES_BY_KEY = {key: field for field, key in _ROLE_KEYS.items()}
_GOVERN_KEYS = {field: _camel_case(field) for field in GovernAddrs._fields}
_GOVERN_BY_KEY = {key: field for field, key in _GOVERN_KEYS.items()}


class AddressRegistry:
    """Per-network address records; the persisted state of a rollout."""

    def __init__(self, records: Dict[SupportedNetwork, CrocAddrs]):
        self._records = dict(records)

    def __contains__(self, network: SupportedNetwork) -> bool:
        return network in self._records

    def __iter__(self) -> Iterator[Tuple[SupportedNetwork, CrocAddrs]]:
        ordered = sorted(self._records.items(), key=lambda item: item[0].registry_key)
        return iter(ordered)

    @property
    def networks(self) -> List[SupportedNetwork]:
        return [network for network, _ in self]

    def get(self, network: SupportedNetwork) -> CrocAddrs:
        try:
            return self._records[network]
        except KeyError:
            raise NotFoundError(f"No address registry record for network '{network.registry_key}'")

    def updated(self, network: SupportedNetwork, addrs: CrocAddrs) -> "AddressRegistry":
        """Returns a copy of the registry with the record of a network replaced."""
        records = dict(self._records)
        records[network] = addrs
        return AddressRegistry(records)

    def to_json(self) -> Dict:
        return OrderedDict((network.registry_key, addrs.to_json()) for network, addrs in self)

    @classmethod
    def from_json(cls, data: Dict) -> "AddressRegistry":
        records = dict()
        for key, record in data.items():
            network = SupportedNetwork.from_chain_id(key)
            if network in records:
                raise ConfigurationError(f"Duplicate address registry record for '{key}'")
            records[network] = CrocAddrs.from_json(record)
        return cls(records)


def read_address_registry(filepath: Path = ADDRESS_REGISTRY_FILEPATH) -> AddressRegistry:
    if not filepath.exists():
        raise ConfigurationError(f"No address registry found at {filepath}")
    return AddressRegistry.from_json(_load_json(filepath))


def write_address_registry(registry: AddressRegistry, filepath: Path) -> Path:
    """Writes the address registry in its normalized format."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as file:
        json.dump(registry.to_json(), file, **STANDARD_REGISTRY_JSON_FORMAT)
        file.write("\n")
    return filepath


def format_addresses(network: SupportedNetwork, addrs: CrocAddrs) -> str:
    """Renders an address record for an operator to transcribe into the registry."""
    record = {network.registry_key: addrs.to_json()}
    return json.dumps(record, **STANDARD_REGISTRY_JSON_FORMAT)
