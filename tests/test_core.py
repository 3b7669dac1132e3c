import hashlib

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from aptvanity.core import (
    ADDRESS_LENGTH,
    derive_multisig_address,
    derive_standard_address,
    generate_and_derive,
    generate_keypair,
    nonce_bytes,
)

PUBKEY = bytes(range(32))


def test_standard_address_layout():
    expected = hashlib.sha3_256(PUBKEY + b"\x00").digest()
    assert derive_standard_address(PUBKEY) == expected


@pytest.mark.parametrize("length", [0, 1, 32, 100])
def test_standard_address_is_deterministic_and_fixed_length(length):
    pk = b"\xab" * length
    first = derive_standard_address(pk)
    assert first == derive_standard_address(pk)
    assert len(first) == ADDRESS_LENGTH


def test_multisig_address_layout():
    creator = derive_standard_address(PUBKEY)
    expected = hashlib.sha3_256(
        creator + b"aptos_framework::multisig_account" + b"\xff"
    ).digest()
    assert derive_multisig_address(creator, 0) == expected
    assert derive_multisig_address(creator) == expected


def test_multisig_address_sensitive_to_seed_and_terminator():
    creator = derive_standard_address(PUBKEY)
    addr = derive_multisig_address(creator, 0)
    other_seed = hashlib.sha3_256(creator + b"aptos_framework::multisig_accounT" + b"\xff").digest()
    other_terminator = hashlib.sha3_256(creator + b"aptos_framework::multisig_account" + b"\xfe").digest()
    assert addr != other_seed
    assert addr != other_terminator
    assert len(addr) == ADDRESS_LENGTH


def test_multisig_address_depends_on_nonce():
    creator = derive_standard_address(PUBKEY)
    assert derive_multisig_address(creator, 0) != derive_multisig_address(creator, 1)


def test_nonce_bytes():
    assert nonce_bytes(0) == b""
    assert nonce_bytes(1) == b"\x01"
    assert nonce_bytes(255) == b"\xff"
    assert nonce_bytes(256) == b"\x01\x00"
    with pytest.raises(ValueError):
        nonce_bytes(-1)


def test_generate_keypair_sizes():
    pair = generate_keypair()
    assert len(pair.public_key) == 32
    assert len(pair.private_key) == 32
    assert pair != generate_keypair()


def test_generate_and_derive_matches_private_key():
    prv_bytes, address = generate_and_derive()
    pub = Ed25519PrivateKey.from_private_bytes(prv_bytes).public_key().public_bytes(
        serialization.Encoding.Raw, serialization.PublicFormat.Raw
    )
    assert address == derive_standard_address(pub)


def test_hex_rendering():
    address = derive_standard_address(PUBKEY)
    rendered = address.hex()
    assert len(rendered) == 64
    assert rendered == rendered.lower()
    assert not rendered.startswith("0x")
