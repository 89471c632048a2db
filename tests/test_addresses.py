import json

import pytest

from crocops.addresses import (
    AddressRegistry,
    CrocAddrs,
    GovernAddrs,
    format_addresses,
    read_address_registry,
    write_address_registry,
)
from crocops.exceptions import ConfigurationError, NotFoundError
from crocops.networks import SupportedNetwork

from tests.conftest import address

LOWERCASE_DEX = "0xaaaaaaaaa24eeeb8d57d431224f73832bc34f688"


def test_committed_registry_loads():
    registry = read_address_registry()
    assert SupportedNetwork.MAINNET in registry
    mainnet = registry.get(SupportedNetwork.MAINNET)
    assert mainnet.dex == "0xAaAaAAAaA24eEeb8d57D431224f73832bC34f688"
    assert mainnet.is_deployed("policy")
    assert not mainnet.is_deployed("shell")


def test_addresses_are_checksummed_on_load():
    addrs = CrocAddrs.from_json({"dex": LOWERCASE_DEX, "koCross": "", "govern": {}})
    assert addrs.dex == "0xAaAaAAAaA24eEeb8d57D431224f73832bC34f688"
    assert addrs.ko_cross == ""


def test_unknown_role_is_rejected():
    with pytest.raises(ConfigurationError, match="swapRouter"):
        CrocAddrs.from_json({"swapRouter": LOWERCASE_DEX})
    with pytest.raises(ConfigurationError, match="multisigLegal"):
        CrocAddrs.from_json({"govern": {"multisigLegal": LOWERCASE_DEX}})


def test_invalid_address_is_rejected():
    with pytest.raises(ConfigurationError, match="dex"):
        CrocAddrs.from_json({"dex": "0x1234"})


def test_unknown_network_is_rejected():
    with pytest.raises(ConfigurationError):
        AddressRegistry.from_json({"0x89": {"dex": LOWERCASE_DEX}})


def test_missing_record():
    registry = AddressRegistry({SupportedNetwork.MOCK: CrocAddrs()})
    with pytest.raises(NotFoundError):
        registry.get(SupportedNetwork.MAINNET)


def test_update_is_a_new_record():
    addrs = CrocAddrs()
    updated = addrs.update(dex=LOWERCASE_DEX)
    assert addrs.dex == ""
    assert updated.dex == "0xAaAaAAAaA24eEeb8d57D431224f73832bC34f688"


def test_require_names_missing_roles(deployed_addrs):
    deployed_addrs.require("dex", "policy")
    addrs = deployed_addrs.update(warm="", hot="")
    with pytest.raises(ConfigurationError, match="warm, hot"):
        addrs.require("dex", "warm", "hot")


def test_registry_round_trip(deployed_addrs, tmp_path):
    registry = AddressRegistry(
        {SupportedNetwork.MORPH_TESTNET: deployed_addrs, SupportedNetwork.MOCK: CrocAddrs()}
    )
    filepath = write_address_registry(registry, filepath=tmp_path / "addresses.json")
    reloaded = read_address_registry(filepath=filepath)

    assert reloaded.get(SupportedNetwork.MORPH_TESTNET) == deployed_addrs
    assert reloaded.get(SupportedNetwork.MOCK) == CrocAddrs()
    assert list(json.loads(filepath.read_text())) == ["0xafa", "mock"]


def test_registry_update_keeps_other_networks(deployed_addrs):
    registry = AddressRegistry({SupportedNetwork.MOCK: CrocAddrs()})
    updated = registry.updated(SupportedNetwork.MAINNET, deployed_addrs)
    assert updated.networks == [SupportedNetwork.MAINNET, SupportedNetwork.MOCK]
    assert SupportedNetwork.MAINNET not in registry


def test_format_addresses_uses_registry_keys():
    addrs = CrocAddrs().update(ko_cross=address("ko-cross"))
    record = json.loads(format_addresses(SupportedNetwork.MORPH_TESTNET, addrs))
    assert record["0xafa"]["koCross"] == address("ko-cross")
    assert record["0xafa"]["govern"]["timelockOps"] == ""


def test_router_roles_use_registry_keys():
    addrs = CrocAddrs.from_json({"routerBypass": address("router-bypass"), "govern": {}})
    assert addrs.router_bypass == address("router-bypass")
    assert not addrs.is_deployed("router")
    assert addrs.to_json()["routerBypass"] == address("router-bypass")


def test_governance_roles_compare_against_not_deployed(multisigs):
    assert multisigs.is_deployed("multisig_ops")
    assert not multisigs.is_deployed("timelock_ops")
    assert not GovernAddrs().is_deployed("multisig_treasury")
