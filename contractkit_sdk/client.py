"""
ChainClient - Main client for the ContractKit SDK.
"""
import logging
import time
import urllib.parse
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .abi import AbiDescription
from .config import ChainConfig
from .contract import ContractBinding
from .exceptions import ReceiptTimeout
from .gas import GasPriceOracle
from .keystore import KeyStore
from .models import SendTxParams, TxReceipt
from .rpc import BlockIdentifier, RpcGateway, Web3RpcGateway
from .signer import LocalSigner, Signer
from .transaction import TransactionBuilder
from .utils import normalize_address


class ChainClient:
    """
    Client for interacting with an Ethereum-compatible node.

    This client handles:
    1. Registering local signing keys
    2. Binding contract interfaces to deployed addresses
    3. Building, signing and broadcasting transactions

    The chain id is resolved from the NETWORK environment variable (or the
    ``network`` argument) when the client is created. An unsupported network
    terminates the process.
    """

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        network: Optional[str] = None,
        gateway: Optional[RpcGateway] = None,
        signer: Optional[Signer] = None,
        gas_oracle: Optional[GasPriceOracle] = None,
        retry_count: int = 3,
        timeout: int = 30,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the ChainClient

        Args:
            rpc_url: Node JSON-RPC endpoint (required unless gateway is given)
            network: Network name; defaults to the NETWORK environment variable
            gateway: Custom RPC gateway (e.g. StubRpcGateway for tests)
            signer: Custom signer (defaults to LocalSigner)
            gas_oracle: Custom gas price oracle
            retry_count: Number of retries for gas oracle HTTP requests
            timeout: Timeout for HTTP requests in seconds
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If neither rpc_url nor gateway is provided
            ValueError: If rpc_url doesn't use https (unless it's localhost/127.0.0.1)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.chain_config = ChainConfig.resolve(network)

        if gateway is None:
            if not rpc_url:
                raise ValueError("Either rpc_url or gateway must be provided")
            self._validate_url("rpc_url", rpc_url)
            gateway = Web3RpcGateway(rpc_url, timeout=timeout, logger=self.logger)

        self.rpc_url = rpc_url
        self.timeout = timeout
        self.gateway = gateway
        self.keystore = KeyStore()
        self.signer = signer or LocalSigner(logger=self.logger)
        self.builder = TransactionBuilder(
            self.keystore, self.signer, self.gateway, self.chain_config, logger=self.logger
        )
        self.gas_oracle = gas_oracle or GasPriceOracle(
            timeout=timeout, session=self._build_session(retry_count), logger=self.logger
        )
        self.logger.debug(
            f"ChainClient ready for {self.chain_config.network} (chain id {self.chain_config.chain_id})"
        )

    @staticmethod
    def _validate_url(url_name: str, url: str) -> None:
        parsed = urllib.parse.urlparse(url)
        # Check if it's a localhost or 127.0.0.1 address (with or without port)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"{url_name} must use https:// for security (got: {parsed.scheme}://)")

    @staticmethod
    def _build_session(retry_count: int) -> requests.Session:
        session = requests.Session()
        retries = Retry(
            total=retry_count,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        session.mount("http://", HTTPAdapter(max_retries=retries))
        session.mount("https://", HTTPAdapter(max_retries=retries))
        return session

    @property
    def chain_id(self) -> int:
        return self.chain_config.chain_id

    # Accounts

    def add_account(self, private_key: str) -> str:
        """
        Register a private key for signing.

        Returns:
            Lowercase address derived from the key

        Raises:
            InvalidKeyFormat: If the key cannot be parsed
        """
        return self.keystore.add_account(private_key)

    @property
    def accounts(self) -> List[str]:
        """Registered addresses, in registration order"""
        return self.keystore.accounts

    def balance_of(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        """Balance of an address in wei."""
        return self.gateway.get_balance(normalize_address(address), block_identifier)

    def nonce_of(self, address: str, block_identifier: BlockIdentifier = "latest") -> int:
        """Transaction count of an address; useful to fill SendTxParams.nonce."""
        return self.gateway.get_transaction_count(normalize_address(address), block_identifier)

    # Contracts and transactions

    def new_contract(self, abi: AbiDescription, address: str) -> ContractBinding:
        """
        Bind a contract interface to a deployed address.

        Raises:
            InvalidAbiDescription: If the ABI is malformed
            InvalidAddressFormat: If the address is malformed
        """
        return ContractBinding(self, abi, address)

    def transfer_eth(self, params: SendTxParams, to: str, value: int) -> str:
        """
        Send ether with an empty payload.

        Args:
            params: Sender, nonce and gas parameters
            to: Recipient address
            value: Amount in wei

        Returns:
            0x-prefixed transaction hash

        Raises:
            AccountNotRegistered: If the sender is unknown
            InvalidAddressFormat: If the recipient is malformed
            SigningFailed: If signing fails
            BroadcastFailed: If the node rejects the transaction
        """
        return self.builder.execute(params, to, value)

    def get_receipt(self, tx_hash: str) -> Optional[TxReceipt]:
        """
        Receipt of a transaction.

        Returns:
            The receipt, or None if the transaction is not mined (or unknown)
        """
        return self.gateway.get_transaction_receipt(tx_hash)

    def wait_for_receipt(self, tx_hash: str, timeout: float = 120, poll_interval: float = 1.0) -> TxReceipt:
        """
        Poll for a receipt. The transaction is never resubmitted.

        Raises:
            ReceiptTimeout: If no receipt appears within ``timeout`` seconds
        """
        deadline = time.monotonic() + timeout
        while True:
            receipt = self.get_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.monotonic() >= deadline:
                raise ReceiptTimeout(f"Transaction {tx_hash} not mined within {timeout}s")
            time.sleep(poll_interval)

    # Gas

    def suggest_gas_price_gwei(self) -> int:
        """Suggested gas price in gwei; 30 when the oracle is unavailable."""
        return self.gas_oracle.suggest_gas_price_gwei()

    def close(self) -> None:
        self.gateway.close()
        self.gas_oracle.session.close()
