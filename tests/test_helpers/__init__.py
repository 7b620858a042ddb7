"""
Shared helpers for the ContractKit SDK tests.
"""
from .client_creator import (
    create_test_client,
    ERC20_ABI,
    TEST_CONTRACT,
    TEST_NETWORK,
    TEST_PRIV_KEY,
    TEST_PRIV_KEY_ADDRESS,
    TEST_RECIPIENT,
    TEST_RPC_URL,
    OTHER_PRIV_KEY,
)

__all__ = [
    "create_test_client",
    "ERC20_ABI",
    "TEST_CONTRACT",
    "TEST_NETWORK",
    "TEST_PRIV_KEY",
    "TEST_PRIV_KEY_ADDRESS",
    "TEST_RECIPIENT",
    "TEST_RPC_URL",
    "OTHER_PRIV_KEY",
]
