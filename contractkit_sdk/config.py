"""
Network configuration for the ContractKit SDK.

The chain id is resolved once, when a client is built, and handed to every
component that signs. An unknown network is a fatal misconfiguration: signing
under the wrong chain id would produce transactions replayable elsewhere.
"""
import os
import sys
import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

NETWORK_ENV_VAR = "NETWORK"

NETWORKS: Dict[str, int] = {
    "mainnet": 1,
    "kovan": 42,
}


def selected_network(network: Optional[str] = None) -> Optional[str]:
    """Explicit network name, else the NETWORK environment variable (read here only)."""
    return network if network is not None else os.environ.get(NETWORK_ENV_VAR)


def _chain_id_for(name: Optional[str]) -> int:
    chain_id = NETWORKS.get(name) if name else None
    if chain_id is None:
        logger.critical(
            f"{name!r} network not supported "
            f"(set {NETWORK_ENV_VAR} to one of: {', '.join(sorted(NETWORKS))})"
        )
        sys.exit(1)
    return chain_id


def resolve_chain_id(network: Optional[str] = None) -> int:
    """
    Map a network selector to its chain id.

    Args:
        network: Network name; read from the NETWORK environment variable
            when omitted

    Returns:
        Numeric chain id

    Note:
        A missing or unsupported selector terminates the process with exit
        status 1 instead of raising.
    """
    return _chain_id_for(selected_network(network))


@dataclass(frozen=True)
class ChainConfig:
    """
    Chain selection shared by the transaction builder and signer.

    Attributes:
        network: Network name the config was resolved from
        chain_id: Chain id used for every signature (EIP-155 replay protection)
    """
    network: str
    chain_id: int

    @classmethod
    def resolve(cls, network: Optional[str] = None) -> "ChainConfig":
        """Resolve a config from an explicit name or the environment. Exits on failure."""
        name = selected_network(network)
        chain_id = _chain_id_for(name)
        logger.debug(f"Resolved network {name} to chain id {chain_id}")
        return cls(network=name, chain_id=chain_id)

    @classmethod
    def from_env(cls) -> "ChainConfig":
        return cls.resolve(None)
