"""
simple_keyring - In-memory Ethereum keyring.

Contains:
- SimpleKeyring: The "Simple Key Pair" keyring facade
- KeyringOptions, TypedDataVersion: Per-call options
- EthTransaction: Transaction signable by the keyring
- KeyringError and its subclasses
"""

from .keyring import SimpleKeyring, TYPE
from .models import (
    KeyringOptions,
    TypedDataVersion,
    EthTransaction,
    SignableTransaction,
    ErrorKind,
    KeyringError,
    InvalidKeyFormat,
    InvalidGeneratedKey,
    MissingAddress,
    AccountNotFound,
    InvalidOrigin,
    InvalidMessage,
)
from .services import EthCryptoProvider, EncryptionError, configure_logging

__version__ = "0.1.0"

__all__ = [
    "SimpleKeyring",
    "TYPE",
    "KeyringOptions",
    "TypedDataVersion",
    "EthTransaction",
    "SignableTransaction",
    "ErrorKind",
    "KeyringError",
    "InvalidKeyFormat",
    "InvalidGeneratedKey",
    "MissingAddress",
    "AccountNotFound",
    "InvalidOrigin",
    "InvalidMessage",
    "EthCryptoProvider",
    "EncryptionError",
    "configure_logging",
]
