"""
Tests for the gas price oracle.
"""
import logging

import pytest
import requests

from contractkit_sdk.gas import (
    DEFAULT_GAS_PRICE_GWEI, ETH_GAS_STATION_URL, GAS_ORACLE_URL_ENV_VAR, GWEI,
    GasPriceOracle, suggest_gas_price_gwei
)

ORACLE_URL = "https://oracle.example.com/gas.json"


@pytest.fixture
def oracle():
    return GasPriceOracle(url=ORACLE_URL)


def test_uses_fast_divided_by_ten(requests_mock, oracle):
    requests_mock.get(ORACLE_URL, json={"fast": 123.4, "fastest": 200, "safeLow": 50, "average": 80})
    assert oracle.suggest_gas_price_gwei() == 12
    assert oracle.suggest_gas_price_wei() == 12 * GWEI


def test_integer_fast(requests_mock, oracle):
    requests_mock.get(ORACLE_URL, json={"fast": 450})
    assert oracle.suggest_gas_price_gwei() == 45


def test_default_endpoint(requests_mock, monkeypatch):
    monkeypatch.delenv(GAS_ORACLE_URL_ENV_VAR, raising=False)
    requests_mock.get(ETH_GAS_STATION_URL, json={"fast": 990})
    assert suggest_gas_price_gwei() == 99


def test_endpoint_from_environment(requests_mock, monkeypatch):
    monkeypatch.setenv(GAS_ORACLE_URL_ENV_VAR, ORACLE_URL)
    requests_mock.get(ORACLE_URL, json={"fast": 100})
    assert GasPriceOracle().url == ORACLE_URL
    assert suggest_gas_price_gwei() == 10


@pytest.mark.parametrize("response_kwargs", [
    {"exc": requests.exceptions.ConnectionError},
    {"exc": requests.exceptions.Timeout},
    {"status_code": 500, "json": {"fast": 100}},
    {"status_code": 404, "text": "not found"},
    {"text": "<html>definitely not json</html>"},
    {"json": ["fast", 100]},
    {"json": {"fastest": 100}},
    {"json": {"fast": "100"}},
    {"json": {"fast": None}},
    {"json": {"fast": True}},
])
def test_falls_back_to_default(requests_mock, oracle, response_kwargs):
    requests_mock.get(ORACLE_URL, **response_kwargs)
    assert oracle.suggest_gas_price_gwei() == DEFAULT_GAS_PRICE_GWEI == 30


def test_infinite_value_falls_back(requests_mock, oracle):
    requests_mock.get(ORACLE_URL, text='{"fast": 1e999}')
    assert oracle.suggest_gas_price_gwei() == DEFAULT_GAS_PRICE_GWEI


def test_fallback_warning_is_rate_limited(requests_mock, oracle, caplog):
    requests_mock.get(ORACLE_URL, exc=requests.exceptions.ConnectionError)

    with caplog.at_level(logging.WARNING, logger="contractkit_sdk.gas"):
        for _ in range(5):
            assert oracle.suggest_gas_price_gwei() == DEFAULT_GAS_PRICE_GWEI

    warnings = [r for r in caplog.records if "Gas oracle unavailable" in r.getMessage()]
    assert len(warnings) == 1


def test_client_uses_oracle(requests_mock, client):
    client.gas_oracle.url = ORACLE_URL
    requests_mock.get(ORACLE_URL, json={"fast": 250})
    assert client.suggest_gas_price_gwei() == 25
