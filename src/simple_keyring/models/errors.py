"""
Keyring errors.

Every failure the keyring raises carries an ErrorKind so callers can branch
on the kind instead of parsing messages. Each class also derives from the
builtin category it belongs to (ValueError / LookupError).
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error taxonomy shared by the store and the signing dispatcher."""
    INVALID_KEY_FORMAT = "INVALID_KEY_FORMAT"
    INVALID_GENERATED_KEY = "INVALID_GENERATED_KEY"
    MISSING_ADDRESS = "MISSING_ADDRESS"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    INVALID_ORIGIN = "INVALID_ORIGIN"
    INVALID_MESSAGE = "INVALID_MESSAGE"


class KeyringError(Exception):
    """Base class for keyring failures."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidKeyFormat(KeyringError, ValueError):
    """Malformed, zero or out-of-range private key."""
    kind = ErrorKind.INVALID_KEY_FORMAT


class InvalidGeneratedKey(KeyringError, ValueError):
    """A random draw did not satisfy the curve requirements."""
    kind = ErrorKind.INVALID_GENERATED_KEY

    def __init__(self, message: str = "Private key does not satisfy the curve requirements (ie. it is invalid)"):
        super().__init__(message)


class MissingAddress(KeyringError, ValueError):
    kind = ErrorKind.MISSING_ADDRESS

    def __init__(self, message: str = "Must specify address."):
        super().__init__(message)


class AccountNotFound(KeyringError, LookupError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND

    def __init__(self, message: str = "Simple Keyring - Unable to find matching address."):
        super().__init__(message)


class InvalidOrigin(KeyringError, ValueError):
    kind = ErrorKind.INVALID_ORIGIN

    def __init__(self, message: str = "'origin' must be a non-empty string"):
        super().__init__(message)


class InvalidMessage(KeyringError, ValueError):
    kind = ErrorKind.INVALID_MESSAGE

    def __init__(self, message: str = "Cannot sign invalid message"):
        super().__init__(message)
