"""
Read side of the ledger: registry policies, hook defaults, cooldown state,
chain clock and event history.
"""

import asyncio
from typing import List, Optional, Tuple

from eth_typing import ChecksumAddress
from web3 import Web3

from ..core.errors import TransportFailure, UnresolvedName
from ..core.pool_identity import to_asset_id
from ..core.timeline import merge, normalize_log
from ..core.types import Defaults, EventKind, EventSource, Policy, PoolId, TimelineEvent
from .base import HOOK_ABI, REGISTRY_ABI, ChainClient

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Query order; the merge keeps this order between events of the same block.
TIMELINE_KINDS: Tuple[EventKind, ...] = (
    EventKind.POLICY_SET,
    EventKind.POLICY_CLEARED,
    EventKind.DEFAULTS_UPDATED,
    EventKind.SWAP_ALLOWED,
    EventKind.SWAP_BLOCKED,
)


class ChainReader(ChainClient):
    """
    Query interface over the PolicyRegistry and UniswapExeGuard contracts.

    Every method raises TransportFailure when the node or the contract call
    fails; nothing is retried here.
    """

    def __init__(
        self,
        web3: Web3,
        registry_address: Optional[str] = None,
        hook_address: Optional[str] = None,
        block_tag: str = "latest",
    ):
        """
        Initialize the reader.

        Each contract is bound on first use, so commands that only touch one
        of them work without the other address.

        Args:
            web3: Web3 instance
            registry_address: PolicyRegistry address
            hook_address: UniswapExeGuard hook address
            block_tag: Block whose timestamp is used as the chain clock
        """
        super().__init__(web3)
        self.registry_address = to_asset_id(registry_address) if registry_address else None
        self.hook_address = to_asset_id(hook_address) if hook_address else None
        self.block_tag = block_tag
        self._registry = None
        self._hook = None

    @property
    def registry(self):
        if self._registry is None:
            self._registry = self._contract(self._require(self.registry_address, "PolicyRegistry"), REGISTRY_ABI)
        return self._registry

    @property
    def hook(self):
        if self._hook is None:
            self._hook = self._contract(self._require(self.hook_address, "UniswapExeGuard"), HOOK_ABI)
        return self._hook

    async def get_policy(self, trader: str) -> Policy:
        """Custom policy of ``trader`` (``exists`` is False when none is set)."""
        trader = to_asset_id(trader)
        result = await self._run(
            "getPolicy", self.registry.functions.getPolicy(trader).call
        )
        return Policy.from_call(result)

    async def get_defaults(self) -> Defaults:
        """Hook-wide default limits, read concurrently."""
        max_swap_abs, cooldown_seconds = await asyncio.gather(
            self._run("defaultMaxSwapAbs", self.hook.functions.defaultMaxSwapAbs().call),
            self._run("defaultCooldownSeconds", self.hook.functions.defaultCooldownSeconds().call),
        )
        return Defaults(max_swap_abs=max_swap_abs, cooldown_seconds=cooldown_seconds)

    async def get_last_swap_timestamp(self, trader: str, pool_id: PoolId) -> int:
        """Unix time of the trader's last swap in the pool, 0 if never."""
        trader = to_asset_id(trader)
        return await self._run(
            "lastSwapTimestampByPool",
            self.hook.functions.lastSwapTimestampByPool(trader, bytes(pool_id)).call,
        )

    async def get_chain_timestamp(self) -> int:
        """Timestamp of the configured block tag."""
        block = await self._run("eth_getBlockByNumber", self.web3.eth.get_block, self.block_tag)
        if not block or "timestamp" not in block:
            raise TransportFailure(
                f"No block returned for tag {self.block_tag}", operation="eth_getBlockByNumber"
            )
        return int(block["timestamp"])

    async def resolve_ens(self, name: str) -> ChecksumAddress:
        """
        Resolve an ENS-style name through the registry.

        Raises:
            UnresolvedName: If the registry maps the name to the zero address
        """
        address = await self._run(
            "resolveENS", self.registry.functions.resolveENS(name).call
        )
        if not address or address.lower() == ZERO_ADDRESS:
            raise UnresolvedName(name)
        return to_asset_id(address)

    def _event_contract(self, kind: EventKind):
        return self.registry if kind.source is EventSource.REGISTRY else self.hook

    async def fetch_event_batch(
        self, kind: EventKind, from_block: int, to_block: int
    ) -> List[TimelineEvent]:
        """Logs of one event kind in ``[from_block, to_block]``, in source order."""
        event = getattr(self._event_contract(kind).events, kind.event_name)
        logs = await self._run(
            f"get_logs({kind.event_name})",
            lambda: event().get_logs(from_block=from_block, to_block=to_block),
        )
        return [normalize_log(kind, log) for log in logs]

    async def fetch_event_batches(
        self, from_block: int, to_block: int
    ) -> List[List[TimelineEvent]]:
        """All five event kinds, queried concurrently, one batch per kind."""
        if from_block > to_block:
            raise ValueError(f"Invalid block range: {from_block} > {to_block}")
        batches = await asyncio.gather(
            *(self.fetch_event_batch(kind, from_block, to_block) for kind in TIMELINE_KINDS)
        )
        return list(batches)

    async def load_timeline(self, lookback_blocks: int) -> List[TimelineEvent]:
        """Merged timeline of the last ``lookback_blocks`` blocks."""
        latest = await self.get_latest_block()
        from_block = max(0, latest - lookback_blocks)
        batches = await self.fetch_event_batches(from_block, latest)
        events = merge(batches)
        self.logger.info(f"Loaded {len(events)} events from blocks {from_block}-{latest}")
        return events
