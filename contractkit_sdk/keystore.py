"""
In-memory key storage for accounts this process controls.
"""
import logging
import threading
from typing import Dict, List, Optional

from eth_account import Account

from .exceptions import InvalidKeyFormat

logger = logging.getLogger(__name__)


class KeyStore:
    """
    Thread-safe, append-only map of address -> private key.

    Addresses and keys are stored lowercased. Keys never leave process memory
    and are never logged.
    """

    def __init__(self):
        self._keys: Dict[str, str] = {}
        self._order: List[str] = []
        self._lock = threading.RLock()

    def add_account(self, private_key: str) -> str:
        """
        Register a private key under its derived address.

        Args:
            private_key: Hex private key, with or without 0x prefix

        Returns:
            Lowercase 0x-prefixed address derived from the key

        Raises:
            InvalidKeyFormat: If the key is not a valid secp256k1 private key
        """
        if not isinstance(private_key, str):
            raise InvalidKeyFormat(f"Private key must be a hex string, got {type(private_key).__name__}")
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            # Do not echo the key material back in the message
            raise InvalidKeyFormat(f"Invalid private key: {type(e).__name__}") from e

        address = account.address.lower()
        with self._lock:
            if address not in self._keys:
                self._order.append(address)
                logger.debug(f"Registered account {address}")
            self._keys[address] = private_key.lower()
        return address

    def lookup(self, address: str) -> Optional[str]:
        """
        Case-insensitive key lookup.

        Returns:
            The lowercased private key, or None if the address is not registered
        """
        if not isinstance(address, str):
            return None
        with self._lock:
            return self._keys.get(address.lower())

    @property
    def accounts(self) -> List[str]:
        """Registered addresses, in registration order"""
        with self._lock:
            return list(self._order)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.lookup(address) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)
