"""
Keyring options.

Per-call options recognized by the signing operations, and the typed-data
version tag used to route typed-data requests.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class TypedDataVersion(str, Enum):
    """Typed-data encodings, oldest first."""
    V1 = "V1"   # legacy array of {type, name, value}
    V3 = "V3"   # EIP-712 without arrays
    V4 = "V4"   # EIP-712 with arrays and recursive structs

    @classmethod
    def parse(cls, value: Union[str, "TypedDataVersion", None]) -> "TypedDataVersion":
        """
        Resolve a version string.

        Accepts "V1"/"V3"/"V4" (any case) and "legacy". Anything else,
        including None, falls back to V1.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key == "LEGACY":
                return cls.V1
            if key in cls.__members__:
                return cls[key]
        if value is not None:
            logger.debug(f"Unrecognized typed data version {value!r}, using V1")
        return cls.V1


# Keys accepted by from_dict for the app key origin
_ORIGIN_KEYS = ("app_key_origin", "appKeyOrigin", "withAppKeyOrigin")


@dataclass(frozen=True)
class KeyringOptions:
    """Options record shared by the signing operations."""
    app_key_origin: Optional[Any] = None   # validated at key resolution
    version: Optional[Union[str, TypedDataVersion]] = None

    @property
    def typed_data_version(self) -> TypedDataVersion:
        return TypedDataVersion.parse(self.version)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "KeyringOptions":
        """Create from a mapping, accepting camelCase keys."""
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"options must be a mapping, got {type(data).__name__}")

        origin = None
        for key in _ORIGIN_KEYS:
            if key in data:
                origin = data[key]
                break

        return cls(app_key_origin=origin, version=data.get("version"))

    @classmethod
    def coerce(cls, options: Union["KeyringOptions", Mapping[str, Any], None]) -> "KeyringOptions":
        """Accept either an options record or a plain mapping."""
        if isinstance(options, cls):
            return options
        return cls.from_dict(options)
