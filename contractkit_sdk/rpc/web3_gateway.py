"""
JSON-RPC gateway backed by web3.py's HTTP provider.
"""
import logging
from typing import Any, Optional

from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3RPCError

from ..exceptions import BroadcastFailed, RpcError
from ..models import TxReceipt
from ..utils import checksum_address, to_hex_data
from .gateway import BlockIdentifier, RpcGateway

logger = logging.getLogger(__name__)


def _node_reason(exc: Exception) -> Optional[str]:
    """Extract the node's error message from a web3 exception, if any."""
    rpc_response = getattr(exc, "rpc_response", None)
    if isinstance(rpc_response, dict):
        error = rpc_response.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    message = getattr(exc, "message", None)
    return str(message) if message else (str(exc) or None)


def _to_plain(value: Any) -> Any:
    """Turn web3 AttributeDicts and HexBytes into JSON-friendly values."""
    if isinstance(value, (bytes, bytearray)):
        return to_hex_data(value)
    if hasattr(value, "items"):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


class Web3RpcGateway(RpcGateway):
    """
    Gateway talking to a node through ``Web3.HTTPProvider``.

    Provider-level retries are disabled; deadlines are governed by ``timeout``.
    """

    def __init__(self, rpc_url: str, timeout: int = 30, logger: Optional[logging.Logger] = None):
        """
        Initialize the gateway

        Args:
            rpc_url: Node JSON-RPC endpoint
            timeout: HTTP timeout in seconds
            logger: Optional logger instance
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.w3 = Web3(Web3.HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": timeout},
            exception_retry_configuration=None,
        ))

    def get_balance(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        try:
            return int(self.w3.eth.get_balance(checksum_address(address), block_identifier))
        except Exception as e:
            self.logger.error(f"eth_getBalance failed for {address}: {e}")
            raise RpcError(f"Failed to fetch balance: {str(e)}", reason=_node_reason(e)) from e

    def get_transaction_count(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        try:
            return int(self.w3.eth.get_transaction_count(checksum_address(address), block_identifier))
        except Exception as e:
            self.logger.error(f"eth_getTransactionCount failed for {address}: {e}")
            raise RpcError(f"Failed to fetch nonce: {str(e)}", reason=_node_reason(e)) from e

    def call(self, to: str, from_address: str, data: str, block_identifier: BlockIdentifier = "latest") -> str:
        tx = {
            "to": checksum_address(to),
            "from": checksum_address(from_address),
            "data": data,
        }
        try:
            result = self.w3.eth.call(tx, block_identifier)
        except Exception as e:
            self.logger.error(f"eth_call to {to} failed: {e}")
            raise RpcError(f"Call failed: {str(e)}", reason=_node_reason(e)) from e
        return to_hex_data(result)

    def send_raw_transaction(self, raw_transaction: bytes) -> str:
        try:
            tx_hash = self.w3.eth.send_raw_transaction(raw_transaction)
        except Web3RPCError as e:
            reason = _node_reason(e)
            self.logger.error(f"Node rejected transaction: {reason}")
            raise BroadcastFailed(f"Failed to send transaction: {reason}", reason=reason) from e
        except Exception as e:
            self.logger.error(f"Failed to send transaction: {e}")
            raise BroadcastFailed(f"Failed to send transaction: {str(e)}", reason=_node_reason(e)) from e
        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.info(f"Transaction sent: {tx_hash_hex}")
        return tx_hash_hex

    def get_transaction_receipt(self, tx_hash: str) -> Optional[TxReceipt]:
        try:
            receipt = self.w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None
        except Exception as e:
            self.logger.error(f"eth_getTransactionReceipt failed for {tx_hash}: {e}")
            raise RpcError(f"Failed to fetch receipt: {str(e)}", reason=_node_reason(e)) from e
        if receipt is None:
            return None
        return TxReceipt.model_validate(_to_plain(receipt))

    def close(self) -> None:
        # HTTPProvider caches sessions per endpoint; nothing to tear down per gateway
        self.logger.debug(f"Closed gateway for {self.rpc_url}")
