"""
Transaction assembly, signing and broadcast.
"""
import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import ValidationError

from .config import ChainConfig
from .exceptions import (
    AccountNotRegistered, BroadcastFailed, ContractKitError, InvalidTransactionParams, SigningFailed
)
from .keystore import KeyStore
from .models import SendTxParams, TransactionIntent
from .rpc import RpcGateway
from .signer import Signer
from .utils import normalize_address

logger = logging.getLogger(__name__)

PayloadEncoder = Callable[[], bytes]


class TxStage(str, Enum):
    """Stages of a single send, in order. COMPLETED and FAILED are terminal."""
    VALIDATING = "VALIDATING"
    ENCODING = "ENCODING"
    SIGNING = "SIGNING"
    BROADCASTING = "BROADCASTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class TransactionBuilder:
    """
    Runs the write pipeline: validate sender, encode, sign, broadcast.

    Nonce, gas limit and gas price always come from the caller. Each call is
    attempted once; any failure is raised to the caller and ends the send.
    """

    def __init__(
        self,
        keystore: KeyStore,
        signer: Signer,
        gateway: RpcGateway,
        chain_config: ChainConfig,
        logger: Optional[logging.Logger] = None
    ):
        self.keystore = keystore
        self.signer = signer
        self.gateway = gateway
        self.chain_config = chain_config
        self.logger = logger or logging.getLogger(__name__)

    def _enter(self, stage: TxStage, params: SendTxParams) -> TxStage:
        self.logger.debug(f"[{params.from_address} nonce={params.nonce}] {stage.value}")
        return stage

    def execute(
        self,
        params: SendTxParams,
        to: str,
        value: int,
        encode_payload: Optional[PayloadEncoder] = None
    ) -> str:
        """
        Build, sign and broadcast one transaction.

        Args:
            params: Sender, nonce and gas parameters
            to: Recipient (contract or account) address
            value: Amount of wei to transfer
            encode_payload: Produces call data; omitted for plain transfers

        Returns:
            0x-prefixed transaction hash

        Raises:
            AccountNotRegistered: If the sender has no key; raised before any
                encoding or network I/O
            UnknownFunction, ArgumentEncodingError: If call data cannot be encoded
            InvalidAddressFormat: If the recipient is malformed
            InvalidTransactionParams: If value, nonce or gas do not form a
                valid transaction
            SigningFailed: If signing fails; nothing is broadcast
            BroadcastFailed: If the node does not accept the transaction
        """
        stage = self._enter(TxStage.VALIDATING, params)
        try:
            private_key = self.keystore.lookup(params.from_address)
            if private_key is None:
                raise AccountNotRegistered(params.from_address)
            recipient = normalize_address(to)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidTransactionParams(
                    f"value must be a non-negative integer amount of wei, got {value!r}"
                )

            stage = self._enter(TxStage.ENCODING, params)
            data = encode_payload() if encode_payload is not None else b""

            try:
                intent = TransactionIntent(
                    from_address=params.from_address,
                    to=recipient,
                    value=value,
                    gas_limit=params.gas_limit,
                    gas_price=params.gas_price,
                    nonce=params.nonce,
                    data=data,
                    chain_id=self.chain_config.chain_id,
                )
            except ValidationError as e:
                raise InvalidTransactionParams(f"Invalid transaction parameters: {e}") from e

            stage = self._enter(TxStage.SIGNING, params)
            try:
                signed = self.signer.sign(intent, private_key)
            except SigningFailed:
                raise
            except Exception as e:
                raise SigningFailed(f"Failed to sign transaction: {str(e)}") from e

            stage = self._enter(TxStage.BROADCASTING, params)
            try:
                tx_hash = self.gateway.send_raw_transaction(signed.raw_transaction)
            except BroadcastFailed:
                raise
            except Exception as e:
                raise BroadcastFailed(f"Failed to send transaction: {str(e)}", reason=str(e)) from e
        except ContractKitError as e:
            self.logger.warning(f"Send failed during {stage.value} ({e.kind.value}): {e}")
            self._enter(TxStage.FAILED, params)
            raise

        self._enter(TxStage.COMPLETED, params)
        self.logger.info(f"Transaction {tx_hash} sent to {recipient} (nonce {params.nonce})")
        return tx_hash
