"""
SimpleKeyring - The "Simple Key Pair" keyring.

An in-memory list of secp256k1 key pairs behind the keyring interface used
by Ethereum wallets. Methods are coroutines so the keyring can sit next to
other (I/O bound) keyrings; none of them actually suspend.

Example:
    keyring = SimpleKeyring()
    await keyring.deserialize(["0x..."])
    [address] = await keyring.get_accounts()
    signature = await keyring.sign_personal_message(address, "0x68656c6c6f")
"""

from typing import Any, Iterable, Optional, Union

from .models.transaction import SignableTransaction
from .services.provider import EthCryptoProvider
from .services.signing import Options, SigningDispatcher
from .wallet.store import AccountStore

TYPE = "Simple Key Pair"


class SimpleKeyring:
    """Keyring holding raw private keys in memory."""

    type = TYPE

    def __init__(self, private_keys: Optional[Iterable[str]] = None,
                 provider: Optional[EthCryptoProvider] = None):
        self._store = AccountStore(private_keys)
        self._dispatcher = SigningDispatcher(self._store, provider)

    def __repr__(self) -> str:
        return f"SimpleKeyring(accounts={len(self._store)})"

    # ============================================
    # State
    # ============================================

    async def serialize(self) -> list[str]:
        """Private keys as lowercase hex without prefix."""
        return self._store.serialize()

    async def deserialize(self, private_keys: Optional[Iterable[str]] = None) -> None:
        """Replace all accounts with the given hex private keys."""
        self._store.deserialize(private_keys)

    async def add_accounts(self, number_of_accounts: int = 1) -> list[str]:
        """Generate new random accounts. Returns their addresses."""
        return self._store.generate_accounts(number_of_accounts)

    async def get_accounts(self) -> list[str]:
        return self._store.list_addresses()

    def remove_account(self, address: str) -> None:
        self._store.remove_account(address)

    # ============================================
    # Signing
    # ============================================

    async def sign_transaction(self, address: str, transaction: SignableTransaction,
                               options: Options = None) -> Any:
        return self._dispatcher.sign_transaction(address, transaction, options)

    async def sign_message(self, address: str, data: str, options: Options = None) -> str:
        """eth_sign over a raw 32-byte hash."""
        return self._dispatcher.sign_message(address, data, options)

    async def sign_personal_message(self, address: str, data: Union[str, bytes],
                                    options: Options = None) -> str:
        return self._dispatcher.sign_personal_message(address, data, options)

    async def sign_typed_data(self, address: str, typed_data: Any,
                              options: Options = None) -> str:
        """options.version selects V1, V3 or V4 (default V1)."""
        return self._dispatcher.sign_typed_data(address, typed_data, options)

    # ============================================
    # Encryption / app keys
    # ============================================

    async def decrypt_message(self, address: str, encrypted: Any,
                              options: Options = None) -> str:
        return self._dispatcher.decrypt_message(address, encrypted, options)

    async def get_encryption_public_key(self, address: str, options: Options = None) -> str:
        return self._dispatcher.get_encryption_public_key(address, options)

    async def get_app_key_address(self, address: str, origin: str) -> str:
        return self._dispatcher.get_app_key_address(address, origin)

    async def export_account(self, address: str, options: Options = None) -> str:
        return self._dispatcher.export_account(address, options)


__all__ = ["SimpleKeyring", "TYPE"]
