"""
Account store tests.

Covers initialization, generation, lookup, removal and serialization,
including the guarantee that failed operations leave the store unchanged.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from simple_keyring.models.errors import (
    AccountNotFound,
    ErrorKind,
    InvalidGeneratedKey,
    InvalidKeyFormat,
)
from simple_keyring.wallet.store import AccountStore

from vectors import TEST_ACCOUNT, NOT_KEYRING_ADDRESS, KEY_69, ADDRESS_69


class TestInitialize:
    """Replacing the store contents from hex private keys."""

    def test_empty_store(self):
        store = AccountStore()
        assert len(store) == 0
        assert store.list_addresses() == []
        assert store.serialize() == []

    def test_constructor_keys(self):
        store = AccountStore([TEST_ACCOUNT["key"]])
        assert store.list_addresses() == [TEST_ACCOUNT["address"]]

    def test_prefix_and_case_are_normalized(self):
        store = AccountStore()
        store.initialize(["0X" + KEY_69.upper()])
        assert store.serialize() == [KEY_69]
        assert store.list_addresses() == [ADDRESS_69]

    def test_none_resets(self):
        store = AccountStore([TEST_ACCOUNT["key"]])
        store.initialize(None)
        assert store.list_addresses() == []

    def test_empty_list_resets(self):
        store = AccountStore([TEST_ACCOUNT["key"]])
        store.deserialize([])
        assert len(store) == 0

    @pytest.mark.parametrize("bad_key", [
        "not hex",
        "0x1234",
        "00" * 32,
        "ff" * 32,
        "0x" + "69" * 33,
    ])
    def test_invalid_key_leaves_store_unchanged(self, bad_key):
        store = AccountStore([TEST_ACCOUNT["key"]])
        with pytest.raises(InvalidKeyFormat) as exc_info:
            store.initialize([KEY_69, bad_key])
        assert exc_info.value.kind is ErrorKind.INVALID_KEY_FORMAT
        assert store.list_addresses() == [TEST_ACCOUNT["address"]]


class TestGenerateAccounts:
    """Random account generation."""

    def test_default_generates_one(self):
        store = AccountStore()
        addresses = store.generate_accounts()
        assert len(addresses) == 1
        assert store.list_addresses() == addresses

    def test_generates_requested_number_in_order(self):
        store = AccountStore([TEST_ACCOUNT["key"]])
        addresses = store.generate_accounts(3)
        assert len(addresses) == 3
        assert len(set(addresses)) == 3
        assert store.list_addresses() == [TEST_ACCOUNT["address"]] + addresses
        for address in addresses:
            assert address.startswith("0x") and len(address) == 42
            assert address == address.lower()

    def test_zero_is_noop(self):
        store = AccountStore()
        assert store.generate_accounts(0) == []
        assert len(store) == 0

    @pytest.mark.parametrize("count", [-1, 1.5, "2", True])
    def test_rejects_bad_count(self, count):
        store = AccountStore()
        with pytest.raises(ValueError):
            store.generate_accounts(count)
        assert len(store) == 0

    def test_invalid_generated_key_fails_whole_batch(self, monkeypatch):
        store = AccountStore([TEST_ACCOUNT["key"]])
        monkeypatch.setattr(
            "simple_keyring.wallet.crypto.secrets.token_bytes",
            lambda n: b"\x00" * n,
        )
        with pytest.raises(InvalidGeneratedKey) as exc_info:
            store.generate_accounts(2)
        assert exc_info.value.message == (
            "Private key does not satisfy the curve requirements (ie. it is invalid)"
        )
        assert store.list_addresses() == [TEST_ACCOUNT["address"]]


class TestLookupAndRemoval:
    """Case-insensitive lookup and first-match removal."""

    def test_get_is_case_insensitive(self):
        store = AccountStore([KEY_69])
        upper = "0x" + ADDRESS_69[2:].upper()
        assert store.get(upper).address == ADDRESS_69
        assert store.get(ADDRESS_69[2:]).address == ADDRESS_69

    def test_get_unknown_raises(self):
        store = AccountStore([KEY_69])
        with pytest.raises(AccountNotFound, match="Simple Keyring - Unable to find matching address."):
            store.get(NOT_KEYRING_ADDRESS)

    def test_remove_account(self):
        store = AccountStore([TEST_ACCOUNT["key"], KEY_69])
        store.remove_account(TEST_ACCOUNT["address"].upper().replace("0X", "0x"))
        assert store.list_addresses() == [ADDRESS_69]

    def test_remove_first_duplicate_only(self):
        store = AccountStore([KEY_69, TEST_ACCOUNT["key"], KEY_69])
        store.remove_account(ADDRESS_69)
        assert store.list_addresses() == [TEST_ACCOUNT["address"], ADDRESS_69]

    def test_remove_unknown_raises_and_keeps_store(self):
        store = AccountStore([TEST_ACCOUNT["key"]])
        with pytest.raises(AccountNotFound) as exc_info:
            store.remove_account(NOT_KEYRING_ADDRESS)
        assert str(exc_info.value) == f"Address {NOT_KEYRING_ADDRESS} not found in this keyring"
        assert store.list_addresses() == [TEST_ACCOUNT["address"]]

    @pytest.mark.parametrize("address", [42, None, b"\x01" * 20])
    def test_non_string_address_is_not_found(self, address):
        store = AccountStore([KEY_69])
        with pytest.raises(AccountNotFound):
            store.get(address)
        with pytest.raises(AccountNotFound):
            store.remove_account(address)
        assert store.list_addresses() == [ADDRESS_69]

    def test_account_not_found_is_lookup_error(self):
        store = AccountStore()
        with pytest.raises(LookupError):
            store.get(ADDRESS_69)


class TestSerialization:
    """Serialization is a projection of the stored keys."""

    def test_serialize_roundtrip(self):
        store = AccountStore()
        store.deserialize([TEST_ACCOUNT["key"]])
        assert store.serialize() == [TEST_ACCOUNT["key"][2:]]

        other = AccountStore(store.serialize())
        assert other.list_addresses() == store.list_addresses()

    def test_export_private_key(self):
        store = AccountStore([TEST_ACCOUNT["key"]])
        assert "0x" + store.export_private_key(TEST_ACCOUNT["address"]) == TEST_ACCOUNT["key"]

    def test_serialize_is_a_copy(self):
        store = AccountStore([KEY_69])
        keys = store.serialize()
        keys.clear()
        assert store.serialize() == [KEY_69]


class TestConcurrency:
    """The store stays consistent under concurrent mutation."""

    def test_concurrent_generation(self):
        store = AccountStore()
        results = []

        def worker():
            results.extend(store.generate_accounts(5))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store) == 20
        assert sorted(store.list_addresses()) == sorted(results)

    def test_concurrent_generation_and_removal(self):
        store = AccountStore()
        doomed = store.generate_accounts(10)

        with ThreadPoolExecutor(max_workers=8) as pool:
            generated = pool.map(lambda _: store.generate_accounts(3), range(10))
            removals = [pool.submit(store.remove_account, address) for address in doomed]
            added = [address for batch in generated for address in batch]
            for future in removals:
                future.result()

        addresses = store.list_addresses()
        assert len(store) == 30
        assert sorted(addresses) == sorted(added)
        assert not set(doomed) & set(addresses)
