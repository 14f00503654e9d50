# Typed data hashing for signTypedData
# V1: legacy array of {type, name, value}
# V3/V4: EIP-712 https://eips.ethereum.org/EIPS/eip-712

import json
import re
from functools import partial
from typing import Any, Callable, Dict, List, Tuple, Union

from eth_abi import encode
from eth_utils import keccak
from web3 import Web3

from ..models.options import TypedDataVersion
from ..utils import is_hex_string


EIP712_DOMAIN = "EIP712Domain"

# Matches "uint" / "int" with no explicit size
_BARE_INT = re.compile(r"^(u?int)(\[.*)?$")


def _elementary_name(type_name: str) -> str:
    """Expand bare int types the way the ABI does (uint -> uint256)."""
    match = _BARE_INT.match(type_name)
    if match:
        return f"{match.group(1)}256{match.group(2) or ''}"
    return type_name


def _to_bytes(value: Any) -> bytes:
    """bytes pass through, 0x strings are hex-decoded, other strings are UTF-8."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
    if is_hex_string(value):
        digits = value[2:]
        return bytes.fromhex(digits if len(digits) % 2 == 0 else "0" + digits)
    return str(value).encode("utf-8")


def _coerce_atomic(type_name: str, value: Any) -> Any:
    """
    Convert a JSON-ish value to what the ABI encoder expects.

    Integers may be given as ints, decimal strings or 0x strings.
    """
    if type_name == "address":
        if isinstance(value, str):
            return Web3.to_checksum_address(value)
        return value
    if type_name == "bool":
        return bool(value)
    if type_name.startswith(("uint", "int")):
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, str):
            return int(value, 16) if value.lower().startswith("0x") else int(value)
        return value
    if type_name.startswith("bytes"):
        return _to_bytes(value)
    return value


# ============================================
# V1 (legacy)
# ============================================

def legacy_typed_data_hash(typed_data: List[Dict[str, Any]]) -> bytes:
    """
    Hash legacy typed data.

    hash = keccak(schema_hash || data_hash) where schema_hash packs the
    "<type> <name>" strings and data_hash packs the values.
    """
    if not isinstance(typed_data, list) or not typed_data:
        raise ValueError("Expect argument to be non-empty array")

    types = []
    values = []
    schema = []
    for entry in typed_data:
        name = entry.get("name")
        if not name:
            raise ValueError("Invalid typed data: every field needs a name")
        type_name = _elementary_name(entry["type"])
        value = entry.get("value")
        if type_name == "bytes":
            value = _to_bytes(value)
        else:
            value = _coerce_atomic(type_name, value)
        types.append(type_name)
        values.append(value)
        schema.append(f"{entry['type']} {name}")

    schema_hash = Web3.solidity_keccak(["string"] * len(schema), schema)
    data_hash = Web3.solidity_keccak(types, values)
    return bytes(Web3.solidity_keccak(["bytes32", "bytes32"], [schema_hash, data_hash]))


# ============================================
# V3 / V4 (EIP-712)
# ============================================

def _find_type_dependencies(primary_type: str, types: dict, results: dict) -> dict:
    base = re.match(r"^\w*", primary_type).group(0)
    if base in results or base not in types:
        return results
    results[base] = None
    for field in types[base]:
        _find_type_dependencies(field["type"], types, results)
    return results


def encode_type(primary_type: str, types: dict) -> str:
    """Type string: primary type first, then its dependencies sorted by name."""
    deps = list(_find_type_dependencies(primary_type, types, {}))
    if primary_type in deps:
        deps.remove(primary_type)
    result = ""
    for type_name in [primary_type] + sorted(deps):
        if type_name not in types:
            raise ValueError(f"No type definition specified: {type_name}")
        fields = ",".join(f"{field['type']} {field['name']}" for field in types[type_name])
        result += f"{type_name}({fields})"
    return result


def hash_type(primary_type: str, types: dict) -> bytes:
    return keccak(text=encode_type(primary_type, types))


def _encode_field(types: dict, name: str, type_name: str, value: Any,
                  version: TypedDataVersion) -> Tuple[str, Any]:
    if type_name in types:
        if version is TypedDataVersion.V4 and value is None:
            return "bytes32", b"\x00" * 32
        return "bytes32", keccak(encode_data(type_name, value, types, version))

    if value is None:
        raise ValueError(f"missing value for field {name} of type {type_name}")

    if type_name == "bytes":
        return "bytes32", keccak(_to_bytes(value))

    if type_name == "string":
        if isinstance(value, int) and not isinstance(value, bool):
            return "bytes32", keccak(_to_bytes(value))
        return "bytes32", keccak(text=value)

    if type_name.endswith("]"):
        if version is TypedDataVersion.V3:
            raise ValueError("Arrays are unimplemented in encodeData; use V4 extension")
        item_type = type_name[:type_name.rindex("[")]
        pairs = [_encode_field(types, name, item_type, item, version) for item in value]
        return "bytes32", keccak(encode([t for t, _ in pairs], [v for _, v in pairs]))

    type_name = _elementary_name(type_name)
    return type_name, _coerce_atomic(type_name, value)


def encode_data(primary_type: str, data: dict, types: dict, version: TypedDataVersion) -> bytes:
    """ABI-encode typeHash followed by each field's encoded value."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object for {primary_type}, got {type(data).__name__}")

    encoded_types = ["bytes32"]
    encoded_values: list = [hash_type(primary_type, types)]

    for field in types[primary_type]:
        if version is TypedDataVersion.V3 and field["name"] not in data:
            continue
        t, v = _encode_field(types, field["name"], field["type"], data.get(field["name"]), version)
        encoded_types.append(t)
        encoded_values.append(v)

    return encode(encoded_types, encoded_values)


def hash_struct(primary_type: str, data: dict, types: dict, version: TypedDataVersion) -> bytes:
    return keccak(encode_data(primary_type, data, types, version))


def _sanitize(typed_data: Union[dict, str]) -> dict:
    if isinstance(typed_data, str):
        typed_data = json.loads(typed_data)
    if not isinstance(typed_data, dict):
        raise ValueError("Typed data must be an object with types, primaryType, domain and message")
    if "types" not in typed_data or "primaryType" not in typed_data:
        raise ValueError("Typed data must include 'types' and 'primaryType'")

    return {
        "types": {EIP712_DOMAIN: [], **typed_data["types"]},
        "primaryType": typed_data["primaryType"],
        "domain": typed_data.get("domain") or {},
        "message": typed_data.get("message") or {},
    }


def eip712_hash(typed_data: Union[dict, str], version: TypedDataVersion) -> bytes:
    """
    keccak(0x1901 || domainSeparator || hashStruct(message)).

    The message part is omitted when primaryType is EIP712Domain.
    """
    data = _sanitize(typed_data)
    types = data["types"]

    parts = [b"\x19\x01", hash_struct(EIP712_DOMAIN, data["domain"], types, version)]
    if data["primaryType"] != EIP712_DOMAIN:
        parts.append(hash_struct(data["primaryType"], data["message"], types, version))
    return keccak(b"".join(parts))


# ============================================
# Version routing
# ============================================

TYPED_DATA_HASHERS: Dict[TypedDataVersion, Callable[[Any], bytes]] = {
    TypedDataVersion.V1: legacy_typed_data_hash,
    TypedDataVersion.V3: partial(eip712_hash, version=TypedDataVersion.V3),
    TypedDataVersion.V4: partial(eip712_hash, version=TypedDataVersion.V4),
}


def typed_data_hash(typed_data: Any, version: Union[str, TypedDataVersion, None]) -> bytes:
    """Hash typed data with the encoder registered for version (unknown -> V1)."""
    return TYPED_DATA_HASHERS[TypedDataVersion.parse(version)](typed_data)
