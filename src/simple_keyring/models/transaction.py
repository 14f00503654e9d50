"""
Transaction model.

The keyring signs transactions through a small collaborator protocol: any
object with a sign(private_key) method. Mutable implementations sign in place
and return None; immutable ones return a new signed instance.

EthTransaction is the immutable implementation backed by eth_account.

Field lifecycle:
- unsigned: only params are set
- signed: raw_transaction, tx_hash and (v, r, s) are filled by sign()
"""

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from eth_account import Account
from web3 import Web3


# Numeric fields accepted as ints or 0x-hex / decimal strings
NUMERIC_FIELDS = (
    "nonce",
    "gas",
    "gasPrice",
    "value",
    "chainId",
    "maxFeePerGas",
    "maxPriorityFeePerGas",
    "type",
)

# Field aliases used by JSON-RPC style transaction params
FIELD_ALIASES = {
    "gasLimit": "gas",
    "input": "data",
}


@runtime_checkable
class SignableTransaction(Protocol):
    """Anything the keyring can hand a private key to."""

    def sign(self, private_key: bytes) -> Optional[Any]:
        ...


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 16) if value.lower().startswith("0x") else int(value)
        except ValueError:
            raise ValueError(f"{name} must be an integer or hex string, got {value!r}") from None
    raise ValueError(f"{name} must be an integer, got {type(value).__name__}")


@dataclass(frozen=True)
class EthTransaction:
    """An Ethereum transaction, unsigned or signed."""
    params: dict = field(default_factory=dict)
    sender_hint: Optional[str] = None      # 'from' as given by the caller (not signed)
    raw_transaction: Optional[bytes] = None
    tx_hash: Optional[bytes] = None
    v: Optional[int] = None
    r: Optional[int] = None
    s: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EthTransaction":
        """Create from JSON-RPC style params with input validation."""
        if not isinstance(data, Mapping):
            raise ValueError(f"transaction params must be a mapping, got {type(data).__name__}")

        params: dict = {}
        sender = None
        for key, value in data.items():
            if key == "from":
                sender = value
                continue
            key = FIELD_ALIASES.get(key, key)
            if key in NUMERIC_FIELDS:
                value = _to_int(key, value)
            elif key == "to" and value:
                value = Web3.to_checksum_address(value)
            params[key] = value

        if "nonce" not in params:
            raise ValueError("nonce is required")
        if "gas" not in params:
            raise ValueError("gas (or gasLimit) is required")

        return cls(params=params, sender_hint=sender)

    def to_dict(self) -> dict:
        """Transaction params as given to eth_account (without 'from')."""
        return dict(self.params)

    def is_signed(self) -> bool:
        return self.raw_transaction is not None

    def sign(self, private_key: bytes) -> "EthTransaction":
        """Return a signed copy. The original instance is left untouched."""
        signed = Account.sign_transaction(self.to_dict(), private_key)
        return replace(
            self,
            raw_transaction=bytes(signed.raw_transaction),
            tx_hash=bytes(signed.hash),
            v=signed.v,
            r=signed.r,
            s=signed.s,
        )

    def sender(self) -> Optional[str]:
        """Recover the signing address (lowercase), or None if unsigned."""
        if not self.is_signed():
            return None
        return Account.recover_transaction(self.raw_transaction).lower()
