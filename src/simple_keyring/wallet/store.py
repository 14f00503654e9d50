"""
Account Store - The ordered list of key pairs held by a keyring.

The store is the only mutable state of a keyring. Every read and mutation
goes through one lock, so callers never observe a partially updated list.
"""

import logging
import threading
from typing import Iterable, Optional

from ..models.errors import AccountNotFound
from ..utils import normalize_address
from .crypto import KeyPair, generate_private_key

logger = logging.getLogger(__name__)


class AccountStore:
    """Ordered key pairs, addressed case-insensitively."""

    def __init__(self, hex_private_keys: Optional[Iterable[str]] = None):
        self._key_pairs: list[KeyPair] = []
        self._lock = threading.Lock()
        if hex_private_keys:
            self.initialize(hex_private_keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._key_pairs)

    # ============================================
    # Mutations
    # ============================================

    def initialize(self, hex_private_keys: Optional[Iterable[str]] = None) -> None:
        """
        Replace every key pair with the given hex private keys.

        None or an empty list resets the store. Decoding happens before the
        swap, so an InvalidKeyFormat leaves the store as it was.
        """
        key_pairs = [KeyPair.from_hex(k) for k in (hex_private_keys or [])]
        with self._lock:
            self._key_pairs = key_pairs
        logger.info(f"Keyring initialized with {len(key_pairs)} account(s)")

    def generate_accounts(self, count: int = 1) -> list[str]:
        """
        Generate count new random accounts.

        All keys are drawn and validated before the store is touched: an
        InvalidGeneratedKey aborts the whole batch with nothing appended.

        Returns: the new addresses, in order
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"count must be a non-negative integer, got {count!r}")

        new_pairs = [KeyPair(generate_private_key()) for _ in range(count)]
        addresses = [kp.address for kp in new_pairs]

        if new_pairs:
            with self._lock:
                self._key_pairs = self._key_pairs + new_pairs
            logger.info(f"Generated {len(new_pairs)} account(s): {', '.join(addresses)}")
        return addresses

    def remove_account(self, address: str) -> None:
        """
        Remove the first account with this address; the order of the rest is kept.

        Raises: AccountNotFound (store unchanged) if no account matches.
        """
        target = normalize_address(address)
        with self._lock:
            for i, kp in enumerate(self._key_pairs):
                if kp.address == target:
                    self._key_pairs = self._key_pairs[:i] + self._key_pairs[i + 1:]
                    break
            else:
                logger.warning(f"Cannot remove {address}: not in this keyring")
                raise AccountNotFound(f"Address {address} not found in this keyring")
        logger.info(f"Removed account {target}")

    # ============================================
    # Reads
    # ============================================

    def get(self, address: str) -> KeyPair:
        """
        Resolve an address to its key pair (first match).

        Raises: AccountNotFound
        """
        target = normalize_address(address)
        with self._lock:
            for kp in self._key_pairs:
                if kp.address == target:
                    return kp
        raise AccountNotFound()

    def list_addresses(self) -> list[str]:
        """All addresses (0x, lowercase) in insertion order."""
        with self._lock:
            return [kp.address for kp in self._key_pairs]

    def export_private_key(self, address: str) -> str:
        """Lowercase hex private key, no 0x prefix."""
        return self.get(address).private_key_hex()

    def serialize(self) -> list[str]:
        """Hex private keys in store order. A projection, not a transfer."""
        with self._lock:
            return [kp.private_key_hex() for kp in self._key_pairs]

    def deserialize(self, hex_private_keys: Optional[Iterable[str]] = None) -> None:
        self.initialize(hex_private_keys)
