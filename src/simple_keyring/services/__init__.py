"""
Services package - Signing and encryption services for the keyring.

Contains:
- SigningDispatcher: Account resolution and per-operation routing
- EthCryptoProvider: Signing, typed data and encryption primitives
- Typed data hashing (V1, V3, V4)
- x25519-xsalsa20-poly1305 encryption
- configure_logging: Console logging setup
"""

from .encryption import (
    ENCRYPTION_VERSION,
    EncryptedPayload,
    EncryptionError,
    encrypt,
    decrypt,
    get_encryption_public_key,
)
from .typed_data import (
    TYPED_DATA_HASHERS,
    typed_data_hash,
    legacy_typed_data_hash,
    eip712_hash,
)
from .provider import EthCryptoProvider
from .signing import SigningDispatcher
from .logging import configure_logging

__all__ = [
    # Encryption
    "ENCRYPTION_VERSION",
    "EncryptedPayload",
    "EncryptionError",
    "encrypt",
    "decrypt",
    "get_encryption_public_key",
    # Typed data
    "TYPED_DATA_HASHERS",
    "typed_data_hash",
    "legacy_typed_data_hash",
    "eip712_hash",
    # Provider / dispatcher
    "EthCryptoProvider",
    "SigningDispatcher",
    "configure_logging",
]
