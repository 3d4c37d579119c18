"""
Adapters package for the Gateway Service.

Contains the ledger-facing wrappers the gateway depends on:

- Node client construction from configuration
- The ARC-200 contract binding and its uniform call result

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .arc200_client import Arc200Contract, OperationResult
from .ledger_client import create_ledger_client

__all__ = [
    "Arc200Contract",
    "OperationResult",
    "create_ledger_client",
]
