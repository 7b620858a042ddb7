"""
Local signer backed by eth-account.
"""
import logging
from typing import Optional

from eth_account import Account
from eth_utils import to_hex

from ..exceptions import SigningFailed
from ..models import SignedTransaction, TransactionIntent

logger = logging.getLogger(__name__)


class LocalSigner:
    """
    Signs legacy EIP-155 transactions with an in-memory private key.

    Signatures use RFC 6979 nonces, so identical intents and keys always
    produce byte-identical output.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def sign(self, intent: TransactionIntent, private_key: str) -> SignedTransaction:
        """
        Sign a transaction intent.

        Args:
            intent: Frozen transaction intent, including its chain id
            private_key: Hex private key of ``intent.from_address``

        Returns:
            Signed transaction with raw bytes and hash

        Raises:
            SigningFailed: If the key is unusable, does not belong to the
                sender, or eth-account rejects the transaction
        """
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            raise SigningFailed(f"Unusable signing key: {type(e).__name__}") from e

        sender = account.address.lower()
        if sender != intent.from_address:
            raise SigningFailed(
                f"Signing key belongs to {sender}, not to sender {intent.from_address}"
            )

        try:
            signed = account.sign_transaction(intent.to_transaction_dict())
        except Exception as e:
            self.logger.error(f"Transaction signing failed: {e}")
            raise SigningFailed(f"Failed to sign transaction: {str(e)}") from e

        return SignedTransaction(
            raw_transaction=bytes(signed.raw_transaction),
            tx_hash=to_hex(signed.hash),
            sender=sender,
        )
