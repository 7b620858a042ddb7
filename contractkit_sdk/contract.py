"""
Binding of a contract interface to a deployed address.
"""
import logging
from typing import Any, TYPE_CHECKING

from .abi import AbiCodec, AbiDescription
from .models import SendTxParams
from .rpc import BlockIdentifier
from .utils import ZERO_ADDRESS, normalize_address, to_hex_data

if TYPE_CHECKING:
    from .client import ChainClient

logger = logging.getLogger(__name__)


class ContractBinding:
    """
    A contract interface bound to an address and a (shared) client.

    Read calls are simulated from the zero address. Writes go through the
    client's transaction builder and need a registered sender.
    """

    def __init__(self, client: "ChainClient", abi: AbiDescription, address: str):
        """
        Parse the interface and bind it to ``address``.

        Args:
            client: Owning client; many bindings may share one
            abi: JSON ABI as a string or decoded list
            address: Deployed contract address

        Raises:
            InvalidAbiDescription: If the ABI is malformed
            InvalidAddressFormat: If the address cannot be parsed
        """
        self.client = client
        self.codec = AbiCodec(abi)
        self.address = normalize_address(address)

    def __repr__(self) -> str:
        return f"ContractBinding(address={self.address!r})"

    def _call_data(self, function_name: str, args: tuple) -> bytes:
        if not args:
            # Bare selector; the generic packer is not involved
            return self.codec.selector(function_name)
        return self.codec.encode_call(function_name, args)

    def history_call(self, block_identifier: BlockIdentifier, function_name: str, *args: Any) -> str:
        """
        Read-only call evaluated at a given block.

        Args:
            block_identifier: Block tag ("latest", "pending", ...), number or hash
            function_name: Function to call
            *args: Function arguments

        Returns:
            0x-prefixed raw return data

        Raises:
            UnknownFunction: If the function is not in the ABI
            ArgumentEncodingError: If the arguments do not match the signature
            RpcError: If the node request fails
        """
        data = to_hex_data(self._call_data(function_name, args))
        logger.debug(f"eth_call {self.address} {function_name} at {block_identifier}")
        return self.client.gateway.call(self.address, ZERO_ADDRESS, data, block_identifier)

    def call(self, function_name: str, *args: Any, block_identifier: BlockIdentifier = "latest") -> str:
        """Read-only call against the latest block (or ``block_identifier``)."""
        return self.history_call(block_identifier, function_name, *args)

    def read(self, function_name: str, *args: Any, block_identifier: BlockIdentifier = "latest") -> Any:
        """
        Read-only call with the return data decoded from the ABI outputs.

        Raises:
            ResultDecodingError: If the return data does not match the outputs
        """
        result = self.history_call(block_identifier, function_name, *args)
        arity = len(args) if args else None
        return self.codec.decode_output(function_name, result, arity=arity)

    def send(self, params: SendTxParams, value: int, function_name: str, *args: Any) -> str:
        """
        Invoke a function in a signed transaction.

        Args:
            params: Sender, nonce and gas parameters
            value: Wei sent along with the call
            function_name: Function to invoke
            *args: Function arguments

        Returns:
            0x-prefixed transaction hash

        Raises:
            AccountNotRegistered: If the sender is unknown (checked first)
            UnknownFunction, ArgumentEncodingError: If the call cannot be encoded
            SigningFailed: If signing fails
            BroadcastFailed: If the node rejects the transaction
        """
        return self.client.builder.execute(
            params,
            self.address,
            value,
            encode_payload=lambda: self.codec.encode_call(function_name, args),
        )
