"""
Wallet Crypto - Key pairs and raw secp256k1 operations.

- Private key validation (32 bytes, 0 < k < n)
- Uncompressed public keys and Ethereum addresses
- Random key generation
- App-key derivation: keccak256(private_key || utf8(origin))
- Raw hash signing and signer recovery

Keys live only in memory; nothing here touches disk.
"""

import secrets
from dataclasses import dataclass, field
from typing import Optional

from eth_account import Account
from eth_keys import keys
from eth_keys.constants import SECPK1_N
from eth_utils import keccak

from ..models.errors import InvalidKeyFormat, InvalidGeneratedKey
from ..utils import strip_hex_prefix


# ============================================
# Constants
# ============================================

PRIVATE_KEY_SIZE = 32
ADDRESS_SIZE = 20
MESSAGE_HASH_SIZE = 32


# ============================================
# Validation
# ============================================

def is_valid_private_key(private_key) -> bool:
    """Check the key satisfies the curve requirements."""
    if not isinstance(private_key, (bytes, bytearray)) or len(private_key) != PRIVATE_KEY_SIZE:
        return False
    return 0 < int.from_bytes(private_key, "big") < SECPK1_N


def private_key_from_hex(hex_private_key: str) -> bytes:
    """
    Decode a hex private key (with or without 0x prefix).

    Raises: InvalidKeyFormat for malformed hex, wrong length or out of range.
    """
    if not isinstance(hex_private_key, str):
        raise InvalidKeyFormat(f"Private key must be a hex string, got {type(hex_private_key).__name__}")

    stripped = strip_hex_prefix(hex_private_key.strip())
    try:
        private_key = bytes.fromhex(stripped)
    except ValueError as e:
        raise InvalidKeyFormat("Private key is not valid hex") from e

    if len(private_key) != PRIVATE_KEY_SIZE:
        raise InvalidKeyFormat(f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(private_key)}")
    if not is_valid_private_key(private_key):
        raise InvalidKeyFormat("Private key does not satisfy the curve requirements (ie. it is invalid)")
    return private_key


# ============================================
# Addresses
# ============================================

def public_key_to_address(public_key: bytes) -> str:
    """Address = last 20 bytes of keccak256(uncompressed public key), 0x lowercase hex."""
    if len(public_key) == 65 and public_key[0] == 0x04:
        public_key = public_key[1:]
    if len(public_key) != 64:
        raise ValueError(f"Invalid uncompressed public key length: {len(public_key)}")
    return "0x" + keccak(public_key)[-ADDRESS_SIZE:].hex()


# ============================================
# Key Pair
# ============================================

@dataclass(eq=False)
class KeyPair:
    """
    A private key and its public key.

    The public key is computed on first access and cached; it is always the
    public point of private_key.
    """
    private_key: bytes = field(repr=False)
    _public_key: Optional[bytes] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        self.private_key = bytes(self.private_key)
        if not is_valid_private_key(self.private_key):
            raise InvalidKeyFormat("Private key does not satisfy the curve requirements (ie. it is invalid)")

    @classmethod
    def from_hex(cls, hex_private_key: str) -> "KeyPair":
        return cls(private_key_from_hex(hex_private_key))

    @property
    def public_key(self) -> bytes:
        """64-byte uncompressed public key (x || y)."""
        if self._public_key is None:
            self._public_key = keys.PrivateKey(self.private_key).public_key.to_bytes()
        return self._public_key

    @property
    def address(self) -> str:
        return public_key_to_address(self.public_key)

    def private_key_hex(self) -> str:
        """Lowercase hex, no prefix."""
        return self.private_key.hex()

    def __repr__(self) -> str:
        return f"KeyPair(address={self.address})"


def generate_private_key() -> bytes:
    """
    Draw 32 random bytes and validate them as a private key.

    Raises: InvalidGeneratedKey if the draw is out of range.
    """
    private_key = secrets.token_bytes(PRIVATE_KEY_SIZE)
    if not is_valid_private_key(private_key):
        raise InvalidGeneratedKey()
    return private_key


# ============================================
# App Keys
# ============================================

def derive_app_key_pair(key_pair: KeyPair, origin: str) -> KeyPair:
    """
    Derive the key pair an origin sees for this account.

    Pure function of (private_key, origin). The result must never be stored.
    """
    digest = keccak(key_pair.private_key + origin.encode("utf-8"))
    return KeyPair(digest)


# ============================================
# Signing
# ============================================

def sign_hash(msg_hash: bytes, private_key: bytes) -> tuple[int, int, int]:
    """
    ECDSA-sign a 32-byte hash.

    Returns: (v, r, s) with v in {27, 28}
    """
    if len(msg_hash) != MESSAGE_HASH_SIZE:
        raise ValueError("The message hash must be exactly 32-bytes")
    signed = Account.unsafe_sign_hash(msg_hash, private_key)
    return signed.v, signed.r, signed.s


def concat_signature(v: int, r: int, s: int) -> str:
    """Encode (v, r, s) as the 65-byte r || s || v hex signature."""
    return "0x" + r.to_bytes(32, "big").hex() + s.to_bytes(32, "big").hex() + format(v, "02x")


def recover_hash_signer(msg_hash: bytes, signature: str) -> str:
    """Recover the address that produced a 65-byte hex signature over msg_hash."""
    sig = bytes.fromhex(strip_hex_prefix(signature))
    if len(sig) != 65:
        raise ValueError(f"Signature must be 65 bytes, got {len(sig)}")

    v = sig[64]
    if v >= 27:
        v -= 27
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:64], "big")

    public_key = keys.Signature(vrs=(v, r, s)).recover_public_key_from_msg_hash(msg_hash)
    return public_key_to_address(public_key.to_bytes())
