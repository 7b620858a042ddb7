"""
RPC gateways for the ContractKit SDK.

``Web3RpcGateway`` talks to a real node over HTTP; ``StubRpcGateway`` keeps
everything in memory for tests and offline development.
"""
from .gateway import BlockIdentifier, RpcGateway
from .stub_gateway import StubRpcGateway
from .web3_gateway import Web3RpcGateway

__all__ = ["BlockIdentifier", "RpcGateway", "StubRpcGateway", "Web3RpcGateway"]
