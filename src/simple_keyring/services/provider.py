"""
Crypto Provider - The primitives the signing dispatcher delegates to.

Contains:
- EthCryptoProvider: secp256k1 signing (eth_account), typed data hashing,
  x25519 encryption (PyNaCl) and keccak hashing

The provider is stateless. A keyring takes one at construction so tests and
hosts can substitute their own.
"""

from typing import Any, Mapping, Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import keccak

from ..models.options import TypedDataVersion
from ..utils import is_hex_string
from ..wallet.crypto import sign_hash, concat_signature, recover_hash_signer
from . import encryption
from .encryption import EncryptedPayload
from .typed_data import typed_data_hash


def _message_bytes(data: Union[str, bytes]) -> bytes:
    """0x-hex strings are decoded, other strings are UTF-8, bytes pass through."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if is_hex_string(data):
        digits = data[2:]
        return bytes.fromhex(digits if len(digits) % 2 == 0 else "0" + digits)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(f"Message must be str or bytes, got {type(data).__name__}")


class EthCryptoProvider:
    """Ethereum signing and encryption primitives."""

    # ============================================
    # Signing
    # ============================================

    def sign(self, msg_hash: bytes, private_key: bytes) -> tuple[int, int, int]:
        """ECDSA over a 32-byte digest. Returns (v, r, s), v in {27, 28}."""
        return sign_hash(msg_hash, private_key)

    def signature_hex(self, v: int, r: int, s: int) -> str:
        return concat_signature(v, r, s)

    def personal_sign(self, private_key: bytes, data: Union[str, bytes]) -> str:
        """Sign with the "\\x19Ethereum Signed Message:\\n<len>" prefix (EIP-191 v0x45)."""
        signable = encode_defunct(primitive=_message_bytes(data))
        signed = Account.sign_message(signable, private_key)
        return concat_signature(signed.v, signed.r, signed.s)

    def sign_typed_data(self, private_key: bytes, typed_data: Any,
                        version: Union[str, TypedDataVersion, None] = TypedDataVersion.V1) -> str:
        msg_hash = typed_data_hash(typed_data, version)
        return self.signature_hex(*self.sign(msg_hash, private_key))

    # ============================================
    # Encryption
    # ============================================

    def encrypt(self, public_key: str, data: str) -> EncryptedPayload:
        return encryption.encrypt(public_key, data)

    def decrypt(self, private_key: bytes,
                payload: Union[EncryptedPayload, Mapping[str, Any]]) -> str:
        return encryption.decrypt(private_key, payload)

    def get_encryption_public_key(self, private_key: bytes) -> str:
        return encryption.get_encryption_public_key(private_key)

    # ============================================
    # Hashing / recovery
    # ============================================

    def hash(self, data: Union[str, bytes]) -> bytes:
        """keccak256"""
        return keccak(_message_bytes(data))

    def recover(self, msg_hash: bytes, signature: str) -> str:
        """Address (0x, lowercase) that signed msg_hash."""
        return recover_hash_signer(msg_hash, signature)
