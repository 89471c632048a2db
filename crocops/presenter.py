from typing import Callable, List, Optional, Sequence, Tuple

import click
from eth_utils import encode_hex

from crocops.addresses import CrocAddrs, NOT_DEPLOYED
from crocops.governance import GovernanceResolution
from crocops.networks import SupportedNetwork

Line = Tuple[str, dict]

HEADLINE_STYLE = {"fg": "yellow", "bold": True}
STEP_STYLE = {"fg": "blue"}
PLAIN = dict()


def _hex(data: bytes) -> str:
    return encode_hex(bytes(data))


def _styled_lines(resolution: GovernanceResolution) -> List[Line]:
    calls = resolution.timelock_call
    lines = [
        ("", PLAIN),
        ("-----", PLAIN),
        ("Presenting instructions for governance resolution", HEADLINE_STYLE),
        ("", PLAIN),
        (f"Description: {resolution.description}", PLAIN),
        (f"Execution instructions for {resolution.resolution_type.value} resolution", PLAIN),
        ("", PLAIN),
    ]

    cmd = resolution.protocol_cmd
    if cmd is not None:
        lines.extend(
            [
                (
                    f"Will execute a protocolCmd() call on CrocSwapDex contract "
                    f"at {resolution.dex_contract}",
                    PLAIN,
                ),
                (
                    f"protocolCmd() will be called with args: callpath={cmd.callpath} "
                    f"cmd={_hex(cmd.payload)} sudo={cmd.sudo}",
                    PLAIN,
                ),
                ("", PLAIN),
            ]
        )

    lines.extend(
        [
            (f"Step 1: Use the Gnosis Safe at {resolution.multisig_origin}", STEP_STYLE),
            (f"Transaction to timelock contract at {calls.timelock_addr}", PLAIN),
            ("(Message value: 0)", PLAIN),
            ("With the following calldata: ", PLAIN),
            (_hex(calls.schedule_calldata), PLAIN),
            ("", PLAIN),
            (f"Step 2: Wait at least {calls.delay} seconds", STEP_STYLE),
            (f"Use same Gnosis Safe at {resolution.multisig_origin}", STEP_STYLE),
            (f"Transaction to timelock contract at {calls.timelock_addr}", PLAIN),
            ("(Message value: 0)", PLAIN),
            ("With the following calldata: ", PLAIN),
            (_hex(calls.exec_calldata), PLAIN),
            ("-----", PLAIN),
        ]
    )
    return lines


def format_resolution(resolution: GovernanceResolution) -> List[str]:
    """Renders a resolution as the ordered instructions a multisig operator follows."""
    return [text for text, _ in _styled_lines(resolution)]


def present_resolution(
    resolution: GovernanceResolution, echo: Callable[..., None] = click.secho
) -> GovernanceResolution:
    """Prints the operator instructions of a resolution."""
    for text, style in _styled_lines(resolution):
        echo(text, **style)
    return resolution


def _table_row(network: SupportedNetwork, name: str, address: str) -> str:
    if network.explorer is None:
        return f"| {name} | {address} |"
    return f"| [{name}]({network.explorer_url(address)}) | {address} |"


def format_contracts_table(
    network: SupportedNetwork, addrs: CrocAddrs, names: Optional[Sequence[str]] = None
) -> List[str]:
    """
    Markdown table of the deployed contracts of a network, with explorer
    links. ``names`` limits the table to those registry keys.
    """
    lines = ["| Contract Name | Address |", "|--------------|---------|"]
    for role, address in addrs.to_json().items():
        if role == "govern" or address == NOT_DEPLOYED:
            continue
        if names is not None and role not in names:
            continue
        lines.append(_table_row(network, role, address))
    if names is not None:
        return lines
    for role, address in addrs.to_json()["govern"].items():
        if address == NOT_DEPLOYED:
            continue
        lines.append(_table_row(network, f"govern.{role}", address))
    return lines
