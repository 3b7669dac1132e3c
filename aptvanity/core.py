"""
Core key generation and address derivation for Aptos accounts.

Layouts follow the Aptos framework:
  - authentication key = sha3_256(ed25519_public_key || 0x00)
  - multisig account   = sha3_256(creator || "aptos_framework::multisig_account"
                                  || nonce || 0xFF)
"""

import hashlib
from typing import NamedTuple

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives import serialization

ED25519_SCHEME = b"\x00"
MULTISIG_SEED = b"aptos_framework::multisig_account"
DERIVE_RESOURCE_ACCOUNT_SCHEME = b"\xff"
ADDRESS_LENGTH = 32            # bytes
ADDRESS_HEX_LENGTH = ADDRESS_LENGTH * 2

# Serialization constants cached at module level for performance
_RAW = serialization.Encoding.Raw
_RAW_PRV = serialization.PrivateFormat.Raw
_RAW_PUB = serialization.PublicFormat.Raw
_NO_ENC = serialization.NoEncryption()


class KeyPair(NamedTuple):
    public_key: bytes
    private_key: bytes


def generate_keypair() -> KeyPair:
    """Generate a fresh Ed25519 key pair as raw 32-byte public/private keys."""
    prv = Ed25519PrivateKey.generate()
    return KeyPair(
        prv.public_key().public_bytes(_RAW, _RAW_PUB),
        prv.private_bytes(_RAW, _RAW_PRV, _NO_ENC),
    )


def derive_standard_address(public_key: bytes) -> bytes:
    """Derive the 32-byte account address (authentication key) of a public key."""
    return hashlib.sha3_256(public_key + ED25519_SCHEME).digest()


def nonce_bytes(nonce: int) -> bytes:
    """Minimal big-endian rendering of a nonce; zero renders as no bytes."""
    if nonce < 0:
        raise ValueError(f"Nonce must be non-negative, got {nonce}")
    return nonce.to_bytes((nonce.bit_length() + 7) // 8, "big")


def derive_multisig_address(creator: bytes, nonce: int = 0) -> bytes:
    """Derive the multisig account address created by `creator` at `nonce`.

    Args:
        creator: Raw 32-byte standard address of the creating account.
        nonce: Creator sequence number. Always 0 for freshly generated keys.

    Returns:
        32-byte multisig account address.
    """
    return hashlib.sha3_256(
        creator + MULTISIG_SEED + nonce_bytes(nonce) + DERIVE_RESOURCE_ACCOUNT_SCHEME
    ).digest()


def generate_and_derive() -> tuple[bytes, bytes]:
    """Generate one key pair and derive its standard address.

    This is the hot-path function called in the inner loop of each worker.

    Returns:
        (private_key_bytes, address_bytes)
    """
    pair = generate_keypair()
    return pair.private_key, derive_standard_address(pair.public_key)
