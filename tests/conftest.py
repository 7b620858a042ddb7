"""
Pytest fixtures for the ContractKit SDK tests.
"""
import time
from unittest.mock import MagicMock

import pytest
from web3.providers.rpc import HTTPProvider

from contractkit_sdk import _rate_limited_log
from contractkit_sdk.rpc import RpcGateway, StubRpcGateway
from tests.test_helpers import (
    create_test_client, ERC20_ABI, TEST_CONTRACT, TEST_NETWORK, TEST_PRIV_KEY
)


# Make time.sleep instantaneous so receipt polling doesn't slow the suite down
@pytest.fixture(autouse=True)
def _fast_sleep(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_a, **_kw: None)


@pytest.fixture(autouse=True)
def _network_env(monkeypatch):
    """Every test runs against a supported network unless it says otherwise."""
    monkeypatch.setenv("NETWORK", TEST_NETWORK)


@pytest.fixture(autouse=True)
def _reset_rate_limited_log():
    _rate_limited_log.clear()
    yield
    _rate_limited_log.clear()


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Tests that exercise the Web3 gateway install their own responder.
    """
    def _dummy(self, method, params=None, _=None):
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x2a"}
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


@pytest.fixture
def stub_gateway():
    return StubRpcGateway()


@pytest.fixture
def mock_gateway():
    """Gateway mock for call-count assertions"""
    gateway = MagicMock(spec=RpcGateway)
    gateway.send_raw_transaction.return_value = "0x" + "ab" * 32
    gateway.call.return_value = "0x"
    return gateway


@pytest.fixture
def client(stub_gateway):
    return create_test_client(gateway=stub_gateway)


@pytest.fixture
def sender(client):
    """Address of TEST_PRIV_KEY, registered on ``client``"""
    return client.add_account(TEST_PRIV_KEY)


@pytest.fixture
def token(client):
    return client.new_contract(ERC20_ABI, TEST_CONTRACT)
