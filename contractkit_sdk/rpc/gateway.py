"""
RPC gateway interface.

A gateway exposes the handful of node operations the SDK consumes. It is the
seam where the HTTP transport is swapped for a stub in tests.
"""
from abc import ABC, abstractmethod
from typing import Optional, Union

from ..models import TxReceipt

BlockIdentifier = Union[str, int]


class RpcGateway(ABC):
    """
    Abstract base class for node gateways.

    Implementations never retry on their own: a raw transaction handed to
    ``send_raw_transaction`` is submitted exactly once.
    """

    @abstractmethod
    def get_balance(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        """
        Balance of an address in wei.

        Raises:
            RpcError: If the node request fails
        """
        pass

    @abstractmethod
    def get_transaction_count(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        """
        Transaction count (nonce) of an address.

        Raises:
            RpcError: If the node request fails
        """
        pass

    @abstractmethod
    def call(self, to: str, from_address: str, data: str, block_identifier: BlockIdentifier = "latest") -> str:
        """
        Execute a read-only call.

        Args:
            to: Contract address
            from_address: Address the call is simulated from
            data: 0x-prefixed call data
            block_identifier: Block tag, number or hash

        Returns:
            0x-prefixed return data

        Raises:
            RpcError: If the node request fails or the call reverts
        """
        pass

    @abstractmethod
    def send_raw_transaction(self, raw_transaction: bytes) -> str:
        """
        Broadcast a signed transaction.

        Returns:
            0x-prefixed transaction hash

        Raises:
            BroadcastFailed: If the node rejects the transaction or is unreachable
        """
        pass

    @abstractmethod
    def get_transaction_receipt(self, tx_hash: str) -> Optional[TxReceipt]:
        """
        Receipt of a mined transaction, or None if it is not (yet) known.

        Raises:
            RpcError: If the node request fails
        """
        pass

    def close(self) -> None:
        """Release any open connections."""
        pass
