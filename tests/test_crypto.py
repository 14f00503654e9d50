"""
Key pair and raw signing tests.
"""

import pytest
from eth_account import Account
from eth_keys.constants import SECPK1_N

from simple_keyring.models.errors import InvalidKeyFormat
from simple_keyring.wallet.crypto import (
    KeyPair,
    concat_signature,
    derive_app_key_pair,
    generate_private_key,
    is_valid_private_key,
    private_key_from_hex,
    public_key_to_address,
    recover_hash_signer,
    sign_hash,
)

from vectors import TEST_ACCOUNT, APP_ORIGIN, APP_KEY, KEY_69, ADDRESS_69


class TestPrivateKeys:
    """Private key validation and decoding."""

    def test_valid_range(self):
        assert is_valid_private_key(b"\x00" * 31 + b"\x01")
        assert is_valid_private_key((SECPK1_N - 1).to_bytes(32, "big"))

    def test_invalid_range(self):
        assert not is_valid_private_key(b"\x00" * 32)
        assert not is_valid_private_key(SECPK1_N.to_bytes(32, "big"))
        assert not is_valid_private_key(b"\x01" * 31)
        assert not is_valid_private_key("01" * 32)

    def test_from_hex_accepts_prefix(self):
        assert private_key_from_hex("0x" + KEY_69) == bytes.fromhex(KEY_69)
        assert private_key_from_hex(KEY_69) == bytes.fromhex(KEY_69)

    @pytest.mark.parametrize("value", ["0xzz", "", "0x" + "01" * 31, 42])
    def test_from_hex_rejects(self, value):
        with pytest.raises(InvalidKeyFormat):
            private_key_from_hex(value)


class TestKeyPair:
    """Public key and address derivation."""

    def test_address_matches_eth_account(self):
        kp = KeyPair.from_hex(TEST_ACCOUNT["key"])
        assert kp.address == TEST_ACCOUNT["address"]
        assert kp.address == Account.from_key(TEST_ACCOUNT["key"]).address.lower()

    def test_public_key_is_uncompressed_xy(self):
        kp = KeyPair.from_hex(KEY_69)
        assert len(kp.public_key) == 64
        assert public_key_to_address(kp.public_key) == ADDRESS_69
        assert public_key_to_address(b"\x04" + kp.public_key) == ADDRESS_69

    def test_invalid_key_fails_on_construction(self):
        with pytest.raises(InvalidKeyFormat):
            KeyPair(b"\x00" * 32)

    def test_repr_hides_private_key(self):
        kp = KeyPair.from_hex(KEY_69)
        assert KEY_69 not in repr(kp)
        assert ADDRESS_69 in repr(kp)

    def test_public_key_cache_is_not_an_init_field(self):
        with pytest.raises(TypeError):
            KeyPair(bytes.fromhex(KEY_69), b"\x01" * 64)
        assert KeyPair(bytes.fromhex(KEY_69)).address == ADDRESS_69

    def test_generated_pairs_differ(self):
        assert KeyPair(generate_private_key()).address != KeyPair(generate_private_key()).address


class TestAppKeys:
    """App key derivation is keccak256(private_key || origin)."""

    def test_known_vector(self):
        kp = KeyPair.from_hex(TEST_ACCOUNT["key"])
        derived = derive_app_key_pair(kp, APP_ORIGIN)
        assert derived.private_key_hex() == APP_KEY

    def test_deterministic_and_origin_specific(self):
        kp = KeyPair.from_hex(TEST_ACCOUNT["key"])
        first = derive_app_key_pair(kp, APP_ORIGIN)
        again = derive_app_key_pair(kp, APP_ORIGIN)
        other = derive_app_key_pair(kp, "anotherapp.origin.io")
        assert first.address == again.address
        assert first.address != other.address
        assert first.address != kp.address


class TestRawSigning:
    """ECDSA over 32-byte hashes."""

    def test_sign_and_recover(self):
        kp = KeyPair.from_hex(KEY_69)
        msg_hash = bytes(range(32))
        v, r, s = sign_hash(msg_hash, kp.private_key)
        assert v in (27, 28)

        signature = concat_signature(v, r, s)
        assert len(signature) == 2 + 130
        assert recover_hash_signer(msg_hash, signature) == ADDRESS_69

    def test_rejects_wrong_hash_length(self):
        kp = KeyPair.from_hex(KEY_69)
        with pytest.raises(ValueError):
            sign_hash(b"\x01" * 31, kp.private_key)

    def test_concat_signature_layout(self):
        signature = concat_signature(27, 1, 2)
        assert signature == "0x" + "00" * 31 + "01" + "00" * 31 + "02" + "1b"
