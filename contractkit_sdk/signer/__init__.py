"""
Transaction signers for the ContractKit SDK.
"""
from typing import Protocol

from ..models import SignedTransaction, TransactionIntent
from .local import LocalSigner


class Signer(Protocol):
    """Protocol for custom signers"""

    def sign(self, intent: TransactionIntent, private_key: str) -> SignedTransaction:
        """
        Sign an intent under its chain id.

        Raises:
            SigningFailed: If the intent cannot be signed
        """
        ...


__all__ = ["Signer", "LocalSigner"]
