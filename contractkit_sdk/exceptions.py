"""
Exceptions for the ContractKit SDK.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """
    Failure kinds surfaced by public operations.

    Every ContractKitError subclass carries one of these as ``kind`` so callers
    can branch on a stable code instead of on exception text.
    """
    INVALID_KEY_FORMAT = "INVALID_KEY_FORMAT"
    INVALID_ABI_DESCRIPTION = "INVALID_ABI_DESCRIPTION"
    INVALID_ADDRESS_FORMAT = "INVALID_ADDRESS_FORMAT"
    UNKNOWN_FUNCTION = "UNKNOWN_FUNCTION"
    ARGUMENT_ENCODING_ERROR = "ARGUMENT_ENCODING_ERROR"
    RESULT_DECODING_ERROR = "RESULT_DECODING_ERROR"
    INVALID_TRANSACTION_PARAMS = "INVALID_TRANSACTION_PARAMS"
    ACCOUNT_NOT_REGISTERED = "ACCOUNT_NOT_REGISTERED"
    SIGNING_FAILED = "SIGNING_FAILED"
    RPC_ERROR = "RPC_ERROR"
    BROADCAST_FAILED = "BROADCAST_FAILED"
    RECEIPT_TIMEOUT = "RECEIPT_TIMEOUT"


class ContractKitError(Exception):
    """Base exception for ContractKit SDK errors."""
    kind: ErrorKind = ErrorKind.RPC_ERROR


class InvalidKeyFormat(ContractKitError, ValueError):
    """Raised when a private key cannot be parsed."""
    kind = ErrorKind.INVALID_KEY_FORMAT


class InvalidAbiDescription(ContractKitError, ValueError):
    """Raised when a contract interface description is malformed."""
    kind = ErrorKind.INVALID_ABI_DESCRIPTION


class InvalidAddressFormat(ContractKitError, ValueError):
    """Raised when an address cannot be put into canonical form."""
    kind = ErrorKind.INVALID_ADDRESS_FORMAT


class UnknownFunction(ContractKitError, LookupError):
    """Raised when a function name is absent from the bound interface."""
    kind = ErrorKind.UNKNOWN_FUNCTION

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(f"Function {function_name!r} not found in ABI")


class ArgumentEncodingError(ContractKitError, ValueError):
    """Raised when arguments do not match a function's declared parameters."""
    kind = ErrorKind.ARGUMENT_ENCODING_ERROR


class ResultDecodingError(ContractKitError, ValueError):
    """Raised when return data cannot be decoded with the declared outputs."""
    kind = ErrorKind.RESULT_DECODING_ERROR


class InvalidTransactionParams(ContractKitError, ValueError):
    """Raised when value, nonce or gas fields cannot form a transaction."""
    kind = ErrorKind.INVALID_TRANSACTION_PARAMS


class AccountNotRegistered(ContractKitError, LookupError):
    """Raised when the sender address has no key in the KeyStore."""
    kind = ErrorKind.ACCOUNT_NOT_REGISTERED

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Account {address!r} is not registered")


class SigningFailed(ContractKitError):
    """Raised when a transaction cannot be signed. Nothing is broadcast."""
    kind = ErrorKind.SIGNING_FAILED


class RpcError(ContractKitError):
    """Raised when the node or its transport fails a request."""
    kind = ErrorKind.RPC_ERROR

    def __init__(self, message: str, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(message)


class BroadcastFailed(RpcError):
    """Raised when the node rejects or fails to accept a raw transaction."""
    kind = ErrorKind.BROADCAST_FAILED


class ReceiptTimeout(RpcError):
    """Raised when a receipt does not appear before the deadline."""
    kind = ErrorKind.RECEIPT_TIMEOUT
