"""
Signing Dispatcher - Resolves accounts and routes signing requests.

Every request goes through the same steps:
1. Resolve the address to a stored key pair (MissingAddress / AccountNotFound)
2. If an app key origin is given, swap in the derived key pair for this call
3. Shape the input for the operation and hand it to the crypto provider

Provider errors propagate unchanged.
"""

import logging
from typing import Any, Mapping, Optional, Union

from ..models.errors import AccountNotFound, InvalidMessage, InvalidOrigin, MissingAddress
from ..models.options import KeyringOptions
from ..models.transaction import SignableTransaction
from ..utils import strip_hex_prefix
from ..wallet.crypto import KeyPair, MESSAGE_HASH_SIZE, derive_app_key_pair
from ..wallet.store import AccountStore
from .provider import EthCryptoProvider

logger = logging.getLogger(__name__)

Options = Union[KeyringOptions, Mapping[str, Any], None]


def validate_origin(origin: Any) -> str:
    """An app key origin must be a non-empty string."""
    if not isinstance(origin, str) or not origin:
        raise InvalidOrigin()
    return origin


class SigningDispatcher:
    """
    Dispatches keyring operations for the accounts in one store.

    The dispatcher holds no key material of its own. Derived app keys are
    recomputed on every call and never written back to the store.
    """

    def __init__(self, store: AccountStore, provider: Optional[EthCryptoProvider] = None):
        self.store = store
        self.provider = provider or EthCryptoProvider()

    # ============================================
    # Key resolution
    # ============================================

    def resolve_key_pair(self, address: Optional[str], options: Options = None) -> KeyPair:
        """
        Find the key pair that should sign for address.

        Raises:
            MissingAddress: address is empty or None
            AccountNotFound: no stored account has this address
            InvalidOrigin: an app key origin was given but is not a non-empty string
        """
        if not address:
            raise MissingAddress()

        try:
            key_pair = self.store.get(address)
        except AccountNotFound:
            logger.warning(f"No account for {address} in this keyring")
            raise

        opts = KeyringOptions.coerce(options)
        if opts.app_key_origin is not None:
            origin = validate_origin(opts.app_key_origin)
            key_pair = derive_app_key_pair(key_pair, origin)
        return key_pair

    # ============================================
    # Signing
    # ============================================

    def sign_transaction(self, address: str, transaction: SignableTransaction,
                         options: Options = None) -> Any:
        """
        Sign a transaction object with the account's key.

        Returns whatever transaction.sign() returns, or the transaction itself
        when sign() mutates in place and returns None.
        """
        key_pair = self.resolve_key_pair(address, options)
        logger.debug(f"Signing transaction for {key_pair.address}")
        signed = transaction.sign(key_pair.private_key)
        return transaction if signed is None else signed

    def sign_message(self, address: str, data: str, options: Options = None) -> str:
        """
        eth_sign: ECDSA over a raw 32-byte hash given as hex.

        Returns: 0x r || s || v (65 bytes, v in {27, 28})
        """
        key_pair = self.resolve_key_pair(address, options)

        if not isinstance(data, str):
            raise InvalidMessage()
        digits = strip_hex_prefix(data)
        if not digits:
            raise InvalidMessage()
        try:
            msg_hash = bytes.fromhex(digits)
        except ValueError:
            raise InvalidMessage() from None
        if len(msg_hash) != MESSAGE_HASH_SIZE:
            raise InvalidMessage(f"Cannot sign invalid message: expected {MESSAGE_HASH_SIZE} bytes, got {len(msg_hash)}")

        logger.debug(f"eth_sign for {key_pair.address}")
        v, r, s = self.provider.sign(msg_hash, key_pair.private_key)
        return self.provider.signature_hex(v, r, s)

    def sign_personal_message(self, address: str, data: Union[str, bytes],
                              options: Options = None) -> str:
        """personal_sign: the provider applies the Ethereum message prefix."""
        key_pair = self.resolve_key_pair(address, options)
        logger.debug(f"personal_sign for {key_pair.address}")
        return self.provider.personal_sign(key_pair.private_key, data)

    def sign_typed_data(self, address: str, typed_data: Any, options: Options = None) -> str:
        """
        Sign typed data with the version named in options.

        V1, V3 and V4 are supported; an absent or unknown version uses V1.
        """
        opts = KeyringOptions.coerce(options)
        key_pair = self.resolve_key_pair(address, opts)
        version = opts.typed_data_version
        logger.debug(f"signTypedData {version.value} for {key_pair.address}")
        return self.provider.sign_typed_data(key_pair.private_key, typed_data, version)

    # ============================================
    # Encryption
    # ============================================

    def decrypt_message(self, address: str, encrypted: Any, options: Options = None) -> str:
        key_pair = self.resolve_key_pair(address, options)
        logger.debug(f"eth_decrypt for {key_pair.address}")
        return self.provider.decrypt(key_pair.private_key, encrypted)

    def get_encryption_public_key(self, address: str, options: Options = None) -> str:
        key_pair = self.resolve_key_pair(address, options)
        return self.provider.get_encryption_public_key(key_pair.private_key)

    # ============================================
    # App keys / export
    # ============================================

    def get_app_key_address(self, address: str, origin: Any) -> str:
        """Address of the key pair derived for origin."""
        validate_origin(origin)
        key_pair = self.resolve_key_pair(address, KeyringOptions(app_key_origin=origin))
        return key_pair.address

    def export_account(self, address: str, options: Options = None) -> str:
        """Private key (lowercase hex, no prefix), app-derived if an origin is given."""
        key_pair = self.resolve_key_pair(address, options)
        logger.info(f"Exported private key for {key_pair.address}")
        return key_pair.private_key_hex()
