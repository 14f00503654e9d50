"""
Shared fixtures.
"""

import copy

import pytest

from simple_keyring import SimpleKeyring

from vectors import TEST_ACCOUNT, MAIL_V3, MAIL_V4


@pytest.fixture
def keyring():
    """An empty keyring."""
    return SimpleKeyring()


@pytest.fixture
def test_keyring():
    """A keyring holding TEST_ACCOUNT."""
    return SimpleKeyring([TEST_ACCOUNT["key"]])


@pytest.fixture
def mail_v3():
    return copy.deepcopy(MAIL_V3)


@pytest.fixture
def mail_v4():
    return copy.deepcopy(MAIL_V4)
