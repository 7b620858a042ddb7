"""
ContractKit SDK - contract calls, signing and broadcast for Ethereum-compatible nodes.
"""
from .abi import AbiCodec, AbiFunction
from .client import ChainClient
from .config import ChainConfig, resolve_chain_id
from .contract import ContractBinding
from .exceptions import (
    ErrorKind, ContractKitError, InvalidKeyFormat, InvalidAbiDescription,
    InvalidAddressFormat, UnknownFunction, ArgumentEncodingError, ResultDecodingError,
    InvalidTransactionParams, AccountNotRegistered, SigningFailed, RpcError, BroadcastFailed, ReceiptTimeout
)
from .gas import GasPriceOracle, suggest_gas_price_gwei
from .keystore import KeyStore
from .models import SendTxParams, TransactionIntent, SignedTransaction, TxReceipt
from .rpc import RpcGateway, StubRpcGateway, Web3RpcGateway
from .signer import LocalSigner, Signer
from .transaction import TransactionBuilder, TxStage
from .version import __version__

__all__ = [
    "AbiCodec",
    "AbiFunction",
    "ChainClient",
    "ChainConfig",
    "resolve_chain_id",
    "ContractBinding",
    "ErrorKind",
    "ContractKitError",
    "InvalidKeyFormat",
    "InvalidAbiDescription",
    "InvalidAddressFormat",
    "UnknownFunction",
    "ArgumentEncodingError",
    "ResultDecodingError",
    "InvalidTransactionParams",
    "AccountNotRegistered",
    "SigningFailed",
    "RpcError",
    "BroadcastFailed",
    "ReceiptTimeout",
    "GasPriceOracle",
    "suggest_gas_price_gwei",
    "KeyStore",
    "SendTxParams",
    "TransactionIntent",
    "SignedTransaction",
    "TxReceipt",
    "RpcGateway",
    "StubRpcGateway",
    "Web3RpcGateway",
    "LocalSigner",
    "Signer",
    "TransactionBuilder",
    "TxStage",
    "__version__",
]
