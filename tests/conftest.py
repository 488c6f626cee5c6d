"""
Shared fixtures for the TV Systems SDK tests.
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent

# Make tests/helpers importable as `helpers`
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import MockTransport, mk_account  # noqa: E402

from tvsystems_client.account import Account  # noqa: E402
from tvsystems_client.blockchain import Blockchain  # noqa: E402
from tvsystems_client.enums import NetworkType  # noqa: E402


@pytest.fixture
def account():
    """Deterministic Testnet account (seed "0123", nonce 0)."""
    return mk_account()


@pytest.fixture
def recipient():
    """Base58 address of a second deterministic Testnet account."""
    return mk_account(seed="recipient seed", nonce=1).address


@pytest.fixture
def view_only_account(account):
    """Account holding only the public key of ``account``."""
    return Account.from_public_key(NetworkType.TESTNET, account.public_key)


@pytest.fixture
def mock_transport():
    return MockTransport()


@pytest.fixture
def chain(mock_transport):
    """Node client wired to the mock transport."""
    return Blockchain(NetworkType.TESTNET, "http://node.test:9922/", transport=mock_transport)
