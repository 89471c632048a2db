import json
import os
from pathlib import Path
from typing import Dict

import yaml
from ape import networks, project
from ape.contracts import ContractContainer

from crocops.constants import RPC_URL_ENVVAR
from crocops.exceptions import ConfigurationError, NotFoundError
from crocops.networks import SupportedNetwork


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def require_env(name: str, environ: Dict[str, str] = None) -> str:
    """Returns the value of a required environment variable."""
    environ = os.environ if environ is None else environ
    value = environ.get(name)
    if not value:
        raise ConfigurationError(f"{name} is not set.")
    return value


def check_rpc_endpoint(network: SupportedNetwork, environ: Dict[str, str] = None) -> None:
    """Live networks need an RPC endpoint before anything is sent."""
    if network.is_local:
        return
    require_env(RPC_URL_ENVVAR, environ=environ)


def check_connected_chain(network: SupportedNetwork) -> None:
    """
    Checks that the provider ape is connected to serves the chain
    of the address registry record in use.
    """
    if network.is_local:
        return
    connected_chain_id = networks.provider.network.chain_id
    if connected_chain_id != network.chain_id:
        raise ConfigurationError(
            f"CHAIN_ID ({network.registry_key}) does not match "
            f"chain_id of current network ({connected_chain_id})."
        )


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise ConfigurationError(f"Ambiguous {dependency_name} dependency for {contract}")
        try:
            dependency_api = list(dependency_versions.values())[0]
            contract_container = getattr(dependency_api, contract)
            return contract_container
        except AttributeError:
            continue
    raise NotFoundError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container
