"""
Wallet package - In-memory key management for the keyring.

Contains:
- KeyPair: Private key with its cached public key and address
- AccountStore: Ordered, lock-guarded list of key pairs
- Key generation, app-key derivation, raw hash signing and recovery
"""

from .crypto import (
    KeyPair,
    is_valid_private_key,
    private_key_from_hex,
    public_key_to_address,
    generate_private_key,
    derive_app_key_pair,
    sign_hash,
    concat_signature,
    recover_hash_signer,
)
from .store import AccountStore

__all__ = [
    # Crypto
    "KeyPair",
    "is_valid_private_key",
    "private_key_from_hex",
    "public_key_to_address",
    "generate_private_key",
    "derive_app_key_pair",
    "sign_hash",
    "concat_signature",
    "recover_hash_signer",
    # Store
    "AccountStore",
]
