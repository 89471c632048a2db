import pytest
from eth_utils import decode_hex, keccak

from crocops.exceptions import ConfigurationError, NotFoundError
from crocops.salts import (
    SaltRegistry,
    generate_salt,
    predict_create2_address,
    read_salt_registry,
    write_salt_registry,
)

DEPLOYER = "0x73511669fd4dE447feD18BB79bAFeAC93aB7F31f"
SALT = decode_hex("0xaad3f1f1a9bfd6d8bd8d5b82ed2d5b0f8d77bd5c1ab6ef53a8af4ab6c06f7cb1")


@pytest.fixture
def salts():
    return SaltRegistry({DEPLOYER.lower(): SALT})


def test_resolve_is_case_insensitive(salts):
    assert salts.resolve(DEPLOYER) == SALT
    assert salts.resolve(DEPLOYER.lower()) == SALT
    assert salts.resolve(DEPLOYER.upper().replace("0X", "0x")) == SALT


def test_resolve_unknown_deployer(salts):
    with pytest.raises(NotFoundError, match="No salt found"):
        salts.resolve("0x0000000000000000000000000000000000000001")


def test_register_is_append_only(salts):
    salts.register(DEPLOYER, SALT)
    assert len(salts) == 1
    with pytest.raises(ConfigurationError):
        salts.register(DEPLOYER, b"\x01" * 32)


def test_register_rejects_short_salt(salts):
    with pytest.raises(ConfigurationError):
        salts.register("0x0000000000000000000000000000000000000002", b"\x01" * 31)


def test_generate_salt_hashes_address_bytes():
    salt = generate_salt(DEPLOYER)
    assert salt == keccak(decode_hex(DEPLOYER))
    assert salt != keccak(text=DEPLOYER.lower())
    assert generate_salt(DEPLOYER.lower()) == salt


def test_generate_salt_rejects_invalid_address():
    with pytest.raises(ConfigurationError):
        generate_salt("0xnotanaddress")


def test_predict_create2_address_reference_vectors():
    zero_address = "0x0000000000000000000000000000000000000000"
    zero_salt = b"\x00" * 32
    assert (
        predict_create2_address(zero_address, zero_salt, b"\x00")
        == "0x4D1A2e2bB4F88F0250f26Ffff098B0b30B26BF38"
    )
    assert (
        predict_create2_address("0xdeadbeef00000000000000000000000000000000", zero_salt, b"\x00")
        == "0xB928f69Bb1D91Cd65274e3c79d8986362984fDA3"
    )


def test_committed_salt_registry_loads():
    salts = read_salt_registry()
    assert len(salts) > 0
    for deployer, salt in salts.to_json().items():
        assert deployer == deployer.lower()
        assert len(decode_hex(salt)) == 32


def test_salt_registry_write_and_read(salts, tmp_path):
    filepath = write_salt_registry(salts, filepath=tmp_path / "salts.json")
    reloaded = read_salt_registry(filepath=filepath)
    assert reloaded.resolve(DEPLOYER) == SALT


def test_missing_salt_registry(tmp_path):
    with pytest.raises(ConfigurationError):
        read_salt_registry(filepath=tmp_path / "missing.json")
