"""
Ledger collaborators for guard-console.

ChainReader queries the registry and hook; ChainWriter signs and submits
transactions. Both translate node failures into TransportFailure.
"""

from .base import ChainClient, load_abi
from .reader import TIMELINE_KINDS, ZERO_ADDRESS, ChainReader
from .writer import ChainWriter, TxOutcome

__all__ = [
    "ChainClient",
    "load_abi",
    "TIMELINE_KINDS",
    "ZERO_ADDRESS",
    "ChainReader",
    "ChainWriter",
    "TxOutcome",
]
