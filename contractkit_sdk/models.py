"""
Data models for the ContractKit SDK.
"""
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import checksum_address, normalize_address, to_hex_data


class SendTxParams(BaseModel):
    """Caller-supplied parameters for a write. Nonce and gas are never fetched."""
    from_address: str
    gas_limit: int = Field(..., ge=0)
    gas_price: int = Field(..., ge=0)
    nonce: int = Field(..., ge=0)


class TransactionIntent(BaseModel):
    """Canonical unsigned transaction, frozen once assembled"""
    model_config = ConfigDict(frozen=True)

    from_address: str
    to: str
    value: int = Field(..., ge=0)
    gas_limit: int = Field(..., ge=0)
    gas_price: int = Field(..., ge=0)
    nonce: int = Field(..., ge=0)
    data: bytes = b""
    chain_id: int = Field(..., gt=0)

    @field_validator("from_address", "to")
    @classmethod
    def _canonical_address(cls, value: str) -> str:
        return normalize_address(value)

    def to_transaction_dict(self) -> Dict[str, Any]:
        """
        Render the intent as an eth-account legacy transaction dict.

        Returns:
            Dict with nonce, gasPrice, gas, to, value, data and chainId
        """
        return {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gas": self.gas_limit,
            "to": checksum_address(self.to),
            "value": self.value,
            "data": to_hex_data(self.data),
            "chainId": self.chain_id,
        }


class SignedTransaction(BaseModel):
    """Serialized, signed transaction ready for broadcast"""
    model_config = ConfigDict(frozen=True)

    raw_transaction: bytes
    tx_hash: str
    sender: str


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    model_config = ConfigDict(populate_by_name=True)

    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: str = Field(..., alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == 1
