"""
Models package - Data models for the keyring.

Contains:
- KeyringOptions, TypedDataVersion: Per-call options and typed-data version tag
- EthTransaction, SignableTransaction: Transaction collaborator
- Errors: ErrorKind and the KeyringError hierarchy
"""

from .options import KeyringOptions, TypedDataVersion
from .transaction import EthTransaction, SignableTransaction
from .errors import (
    ErrorKind,
    KeyringError,
    InvalidKeyFormat,
    InvalidGeneratedKey,
    MissingAddress,
    AccountNotFound,
    InvalidOrigin,
    InvalidMessage,
)

__all__ = [
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
]
