import sys
from collections import OrderedDict
from typing import Callable

from ape.utils import ZERO_ADDRESS

# Asks the operator a yes/no question; False aborts the script.
Confirm = Callable[[str], bool]


def prompt_confirmation(prompt: str) -> bool:
    """Interactive confirmation read from stdin."""
    answer = input(f"{prompt} Y/N? ")
    return answer.lower().strip() != "n"


def auto_confirm(prompt: str) -> bool:
    """Headless confirmation; accepts everything."""
    return True


def _abort() -> None:
    print("Aborting deployment!")
    sys.exit(-1)


def _continue(confirm: Confirm) -> None:
    """Asks the user to continue."""
    if not confirm("Continue"):
        _abort()


def _confirm_deployment(contract_name: str, confirm: Confirm) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    if not confirm(f"Deploy {contract_name}"):
        _abort()


def _confirm_resolution(resolved_params: OrderedDict, contract_name: str, confirm: Confirm) -> None:
    """Asks the user to confirm the constructor parameters of a single contract."""
    if len(resolved_params) == 0:
        print(f"\n(i) No constructor parameters for {contract_name}")
        _confirm_deployment(contract_name, confirm)
        return

    print(f"\nConstructor parameters for {contract_name}")
    contains_zero_address = False
    for name, resolved_value in resolved_params.items():
        print(f"\t{name}={resolved_value}")
        if not contains_zero_address:
            contains_zero_address = resolved_value == ZERO_ADDRESS
    _confirm_deployment(contract_name, confirm)
    if contains_zero_address and not confirm("Zero Address detected for deployment parameter; Continue?"):
        _abort()
