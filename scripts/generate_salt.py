#!/usr/bin/python3

import click
from eth_utils import encode_hex

from crocops.constants import CHAIN_ID_ENVVAR, SALT_REGISTRY_FILEPATH
from crocops.salts import generate_salt, read_salt_registry, write_salt_registry
from crocops.types import ChecksumAddress


@click.command(name="generate-salt")
@click.option(
    "--address",
    "-a",
    help="CrocDeployer address the CREATE2 salt is derived from.",
    type=ChecksumAddress(),
    required=True,
)
@click.option(
    "--save",
    help="Add the salt to the salt registry.",
    is_flag=True,
)
@click.option(
    "--chain-id",
    "-c",
    help="Chain the salt is generated for; informational only.",
    envvar=CHAIN_ID_ENVVAR,
    required=False,
)
def cli(address, save, chain_id):
    """
    Derives the CREATE2 salt of a CrocDeployer address: keccak256 of the
    address bytes.
    """
    salt = generate_salt(address)
    key = address.lower()

    click.secho("\nGenerated salt entry:", fg="green")
    if chain_id:
        click.echo(f"ChainId: {chain_id}")
    click.echo(f'"{key}": "{encode_hex(salt)}"')

    if save:
        registry = read_salt_registry()
        if key in registry:
            click.echo(f"(i) Salt for {key} is already registered.")
            return
        registry.register(key, salt)
        write_salt_registry(registry, filepath=SALT_REGISTRY_FILEPATH)
        click.echo(f"(i) Salt registry written to {SALT_REGISTRY_FILEPATH}!")


if __name__ == "__main__":
    cli()
