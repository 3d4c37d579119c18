"""
Ledger node client construction for Gateway.
"""

from algosdk.v2client.algod import AlgodClient

from shared.config import BaseConfig


def create_ledger_client(config: BaseConfig) -> AlgodClient:
    """Build the node client from the configured token, URL and port."""
    return AlgodClient(config.algod_token, config.algod_address)
