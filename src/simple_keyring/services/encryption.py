"""
Encryption - x25519-xsalsa20-poly1305 messages for eth_decrypt.

The encryption key pair is the x25519 key pair whose secret is the 32-byte
account private key. Payload fields are base64, as produced by wallets:

    {"version": "x25519-xsalsa20-poly1305", "nonce": ..., "ephemPublicKey": ..., "ciphertext": ...}
"""

import base64
from dataclasses import dataclass, asdict
from typing import Any, Mapping, Union

from nacl.encoding import Base64Encoder
from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
from nacl.utils import random as random_bytes


ENCRYPTION_VERSION = "x25519-xsalsa20-poly1305"
NONCE_SIZE = Box.NONCE_SIZE  # 24 bytes


class EncryptionError(ValueError):
    """Malformed payload, unsupported version or failed authentication."""
    pass


@dataclass(frozen=True)
class EncryptedPayload:
    """An encrypted message (all binary fields base64)."""
    version: str
    nonce: str
    ephemPublicKey: str
    ciphertext: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EncryptedPayload":
        """Create from a mapping. Missing or unknown versions are rejected."""
        if not isinstance(data, Mapping) or data.get("version") != ENCRYPTION_VERSION:
            raise EncryptionError("Encryption type/version not supported.")
        try:
            return cls(
                version=data["version"],
                nonce=data["nonce"],
                ephemPublicKey=data["ephemPublicKey"],
                ciphertext=data["ciphertext"],
            )
        except KeyError as e:
            raise EncryptionError(f"Encrypted payload is missing {e.args[0]}") from e


def get_encryption_public_key(private_key: bytes) -> str:
    """Base64 x25519 public key for a 32-byte private key."""
    return PrivateKey(private_key).public_key.encode(Base64Encoder).decode("ascii")


def encrypt(public_key: str, data: str) -> EncryptedPayload:
    """
    Encrypt a string for the holder of public_key (base64).

    A fresh ephemeral key pair and nonce are used for every message.
    """
    if not isinstance(data, str):
        raise EncryptionError("Cannot encrypt data: message must be a string")

    try:
        receiver = PublicKey(base64.b64decode(public_key))
    except (ValueError, TypeError) as e:
        raise EncryptionError("Bad public key") from e

    ephemeral = PrivateKey.generate()
    nonce = random_bytes(NONCE_SIZE)
    encrypted = Box(ephemeral, receiver).encrypt(data.encode("utf-8"), nonce)

    return EncryptedPayload(
        version=ENCRYPTION_VERSION,
        nonce=base64.b64encode(nonce).decode("ascii"),
        ephemPublicKey=ephemeral.public_key.encode(Base64Encoder).decode("ascii"),
        ciphertext=base64.b64encode(encrypted.ciphertext).decode("ascii"),
    )


def decrypt(private_key: bytes, payload: Union[EncryptedPayload, Mapping[str, Any]]) -> str:
    """
    Decrypt a payload with the receiver's private key.

    Raises: EncryptionError for unsupported versions or failed decryption.
    """
    if not isinstance(payload, EncryptedPayload):
        payload = EncryptedPayload.from_dict(payload)
    if payload.version != ENCRYPTION_VERSION:
        raise EncryptionError("Encryption type/version not supported.")

    try:
        nonce = base64.b64decode(payload.nonce)
        ephemeral_public = PublicKey(base64.b64decode(payload.ephemPublicKey))
        ciphertext = base64.b64decode(payload.ciphertext)
        plaintext = Box(PrivateKey(private_key), ephemeral_public).decrypt(ciphertext, nonce)
        return plaintext.decode("utf-8")
    except (CryptoError, ValueError, TypeError) as e:
        raise EncryptionError("Decryption failed.") from e
