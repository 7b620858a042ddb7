#!/usr/bin/env python3
"""
Simple example of using the ContractKit SDK with an ERC-20 token.
"""
import os
import json
import logging

from contractkit_sdk import ChainClient, ContractKitError, SendTxParams

ERC20_ABI = json.dumps([
    {"type": "function", "name": "balanceOf", "stateMutability": "view",
     "inputs": [{"name": "account", "type": "address"}],
     "outputs": [{"name": "", "type": "uint256"}]},
    {"type": "function", "name": "transfer", "stateMutability": "nonpayable",
     "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
     "outputs": [{"name": "", "type": "bool"}]},
])


def main():
    """
    Demonstrate basic usage of the ChainClient.

    This example shows how to:
    1. Initialize the client (NETWORK selects mainnet or kovan)
    2. Read a token balance
    3. Send a token transfer and wait for the receipt
    """
    logging.basicConfig(level=logging.INFO)

    # Read configuration from environment
    RPC_URL = os.environ.get("RPC_URL", "http://localhost:8545")
    TOKEN_ADDRESS = os.environ.get("TOKEN_ADDRESS")
    RECIPIENT = os.environ.get("RECIPIENT")
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")

    if not TOKEN_ADDRESS or not RECIPIENT:
        print("ERROR: TOKEN_ADDRESS and RECIPIENT environment variables are required")
        return

    if not PRIVATE_KEY:
        print("ERROR: PRIVATE_KEY environment variable is required")
        return

    client = ChainClient(rpc_url=RPC_URL)
    sender = client.add_account(PRIVATE_KEY)
    token = client.new_contract(ERC20_ABI, TOKEN_ADDRESS)

    try:
        print(f"Balance of {sender}: {token.read('balanceOf', sender)}")

        params = SendTxParams(
            from_address=sender,
            gas_limit=100000,
            gas_price=client.suggest_gas_price_gwei() * 10**9,
            nonce=client.nonce_of(sender),
        )
        tx_hash = token.send(params, 0, "transfer", RECIPIENT, 10**18)
        print(f"Transaction hash: {tx_hash}")

        receipt = client.wait_for_receipt(tx_hash)
        print(f"Block number: {receipt.block_number}")
        print(f"Status: {'Success' if receipt.succeeded else 'Failed'}")

    except ContractKitError as e:
        print(f"Error ({e.kind.value}): {str(e)}")
    finally:
        client.close()


if __name__ == "__main__":
    main()
