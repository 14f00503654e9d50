"""
Shared utility functions for the keyring.

Contains hex and address helpers used across packages.
"""

from typing import Optional


def strip_hex_prefix(value: str) -> str:
    """Remove a leading 0x/0X from a hex string (no-op if absent)."""
    if value.startswith("0x") or value.startswith("0X"):
        return value[2:]
    return value


def add_hex_prefix(value: str) -> str:
    """Ensure a hex string carries a 0x prefix."""
    if value.startswith("0x") or value.startswith("0X"):
        return "0x" + value[2:]
    return "0x" + value


def is_hex_string(value) -> bool:
    """True for 0x-prefixed strings made only of hex digits."""
    if not isinstance(value, str) or not value.startswith("0x"):
        return False
    try:
        bytes.fromhex(value[2:] if len(value) % 2 == 0 else "0" + value[2:])
    except ValueError:
        return False
    return True


def normalize_address(address: Optional[str]) -> Optional[str]:
    """
    Normalize an address for comparison.

    Lowercases and adds the 0x prefix. Returns None for empty or non-string input.
    """
    if not isinstance(address, str) or not address:
        return None
    return add_hex_prefix(address.strip()).lower()
