"""
Base classes for talking to the registry and hook contracts.

Contract ABIs ship as JSON artifacts next to this module. The blocking web3
HTTP provider is driven from asyncio through the default executor, so several
reads can be in flight at once.
"""

import asyncio
import json
import logging
import os
from functools import lru_cache, partial
from typing import Any, Callable, Dict, List, Optional

from web3 import Web3

from ..core.errors import GuardError, TransportFailure
from ..core.pool_identity import to_asset_id

logger = logging.getLogger(__name__)

ABI_DIR = os.path.join(os.path.dirname(__file__), "abis")

REGISTRY_ABI = "PolicyRegistry"
HOOK_ABI = "UniswapExeGuard"
SWAP_ROUTER_ABI = "PoolSwapTest"
ERC20_ABI = "ERC20"


@lru_cache(maxsize=None)
def _load_artifact(name: str) -> str:
    path = os.path.join(ABI_DIR, f"{name}.json")
    with open(path, "r") as f:
        return f.read()


def load_abi(name: str) -> List[Dict[str, Any]]:
    """
    Load a contract ABI shipped with the package.

    Raises:
        FileNotFoundError: If no artifact with that name exists
        KeyError: If the artifact has no ``abi`` entry
    """
    return json.loads(_load_artifact(name))["abi"]


class ChainClient:
    """
    Shared plumbing for contract readers and writers.

    Holds the Web3 instance, builds contract handles and turns every provider
    or contract failure into TransportFailure.
    """

    def __init__(self, web3: Web3):
        self.web3 = web3
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _contract(self, address: str, abi_name: str):
        """Bind an ABI to an address (checksummed)."""
        return self.web3.eth.contract(address=to_asset_id(address), abi=load_abi(abi_name))

    def _require(self, address: Optional[str], what: str) -> str:
        if not address:
            raise ValueError(f"Set {what} address first")
        return address

    async def _run(self, operation: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Run a blocking web3 call in the executor.

        Guard errors raised by ``fn`` propagate unchanged.

        Args:
            operation: Label used in logs and in the raised error
            fn: Blocking callable

        Raises:
            TransportFailure: If the call fails for any other reason
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(fn, *args, **kwargs))
        except GuardError:
            raise
        except Exception as e:
            self.logger.error(f"{operation} failed: {e}")
            raise TransportFailure(f"{operation} failed: {e}", operation=operation) from e

    async def get_latest_block(self) -> int:
        """Latest block number."""
        return await self._run("eth_blockNumber", lambda: self.web3.eth.block_number)

    async def get_chain_id(self) -> int:
        return await self._run("eth_chainId", lambda: self.web3.eth.chain_id)
