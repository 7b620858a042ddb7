"""
In-memory gateway for tests and offline development.

Mirrors the node operations without any network I/O. Broadcast transactions
are recorded and answered with their keccak hash, which equals the hash a
node reports for a legacy transaction.
"""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from eth_utils import keccak

from ..exceptions import BroadcastFailed, RpcError
from ..models import TxReceipt
from ..utils import normalize_address, to_hex_data
from .gateway import BlockIdentifier, RpcGateway

logger = logging.getLogger(__name__)


class StubRpcGateway(RpcGateway):
    """
    A simple stub implementation of the RPC gateway.

    Attributes:
        balances: address -> wei
        nonces: address -> transaction count
        call_results: (to, selector hex) -> return data hex
        receipts: tx hash -> receipt
        sent_transactions: raw transactions in broadcast order
        calls: (to, from, data, block) tuples in call order
        broadcast_error: if set, every broadcast fails with this reason
    """

    def __init__(self):
        self.balances: Dict[str, int] = {}
        self.nonces: Dict[str, int] = {}
        self.call_results: Dict[Tuple[str, str], str] = {}
        self.receipts: Dict[str, TxReceipt] = {}
        self.sent_transactions: List[bytes] = []
        self.calls: List[Tuple[str, str, str, BlockIdentifier]] = []
        self.broadcast_error: Optional[str] = None
        self.closed = False
        self._lock = threading.RLock()

    def _check_open(self) -> None:
        if self.closed:
            raise RpcError("Stub gateway is closed")

    def get_balance(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        self._check_open()
        return self.balances.get(normalize_address(address), 0)

    def get_transaction_count(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        self._check_open()
        return self.nonces.get(normalize_address(address), 0)

    def set_call_result(self, to: str, selector: bytes, result: str) -> None:
        """Answer calls to ``to`` whose data starts with ``selector``."""
        self.call_results[(normalize_address(to), to_hex_data(selector))] = result

    def call(self, to: str, from_address: str, data: str, block_identifier: BlockIdentifier = "latest") -> str:
        self._check_open()
        to = normalize_address(to)
        with self._lock:
            self.calls.append((to, from_address, data, block_identifier))
        logger.debug(f"StubRpcGateway.call to={to} data={data[:10]}")
        return self.call_results.get((to, data[:10].lower()), "0x")

    def send_raw_transaction(self, raw_transaction: bytes) -> str:
        self._check_open()
        if self.broadcast_error:
            raise BroadcastFailed(
                f"Failed to send transaction: {self.broadcast_error}",
                reason=self.broadcast_error
            )
        raw = bytes(raw_transaction)
        with self._lock:
            self.sent_transactions.append(raw)
        tx_hash = to_hex_data(keccak(raw))
        logger.info(f"Simulated broadcast of {tx_hash}")
        return tx_hash

    def get_transaction_receipt(self, tx_hash: str) -> Optional[TxReceipt]:
        self._check_open()
        return self.receipts.get(tx_hash.lower())

    def close(self) -> None:
        self.closed = True
