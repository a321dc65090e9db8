"""
Policy state monitor: refresh eligibility from the chain and re-render it
on a fixed tick.

A refresh fires its four reads concurrently and publishes a new snapshot only
when all of them succeed. Overlapping refreshes are not serialized: whichever
finishes last owns the snapshot. The ticker only re-renders the latest
snapshot with the local clock; it never fetches or mutates anything.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional

from ..core.eligibility import absolute_amount, build_snapshot
from ..core.policy import resolve
from ..core.pool_identity import build_pool_key, derive_pool_id, pool_id_hex, to_asset_id
from ..core.types import SwapEligibilitySnapshot
from .rendering import render_snapshot

logger = logging.getLogger(__name__)


class PolicyStateMonitor:
    """
    Holds the latest SwapEligibilitySnapshot for the operator view.

    Args:
        reader: ChainReader (or anything with the same read coroutines)
        hook_address: Hook address used as the pool key's hooks field
        clock: Local wall clock in unix seconds, used only for the countdown
    """

    def __init__(self, reader, hook_address: str, clock: Callable[[], float] = time.time):
        self.reader = reader
        self.hook_address = to_asset_id(hook_address)
        self.clock = clock
        self._snapshot: Optional[SwapEligibilitySnapshot] = None
        self.refresh_count = 0

    @property
    def snapshot(self) -> Optional[SwapEligibilitySnapshot]:
        return self._snapshot

    def local_now(self) -> int:
        return int(self.clock())

    async def refresh(
        self,
        trader: str,
        token0: str,
        token1: str,
        fee: int,
        tick_spacing: int,
        test_amount: int,
    ) -> SwapEligibilitySnapshot:
        """
        Fetch policy, defaults, last swap and chain time, then evaluate.

        Input errors are raised before any read is issued. A failed read
        propagates and the previous snapshot stays in place.
        """
        trader = to_asset_id(trader)
        test_amount_abs = absolute_amount(test_amount)
        key = build_pool_key(token0, token1, fee, tick_spacing, self.hook_address)
        pool_id = derive_pool_id(key)

        policy, defaults, last_swap, chain_timestamp = await asyncio.gather(
            self.reader.get_policy(trader),
            self.reader.get_defaults(),
            self.reader.get_last_swap_timestamp(trader, pool_id),
            self.reader.get_chain_timestamp(),
        )

        effective = resolve(policy, defaults)
        snapshot = build_snapshot(
            trader=trader,
            pool_id=pool_id,
            pool_key=key,
            effective=effective,
            last_swap_timestamp=last_swap,
            chain_timestamp=chain_timestamp,
            test_amount_abs=test_amount_abs,
        )
        self._snapshot = snapshot
        self.refresh_count += 1

        logger.info(
            f"Refreshed state for {trader} in pool {pool_id_hex(pool_id)[:18]}...: "
            f"source={effective.source.value} allowed_now={snapshot.allowed_now}"
        )
        return snapshot

    def render(self, local_now: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Render the latest snapshot, or None before the first refresh."""
        if self._snapshot is None:
            return None
        return render_snapshot(self._snapshot, self.local_now() if local_now is None else local_now)

    async def run_ticker(
        self,
        callback: Callable[[Dict[str, Any]], Any],
        interval: float = 1.0,
        stop_event: Optional[asyncio.Event] = None,
        max_ticks: Optional[int] = None,
    ) -> int:
        """
        Re-render the latest snapshot every ``interval`` seconds.

        Args:
            callback: Receives each rendered view
            interval: Seconds between renders
            stop_event: Stops the loop when set
            max_ticks: Stop after this many ticks (None runs until stopped)

        Returns:
            Number of ticks performed
        """
        ticks = 0
        stop_event = stop_event or asyncio.Event()
        while not stop_event.is_set() and (max_ticks is None or ticks < max_ticks):
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
                break
            except asyncio.TimeoutError:
                pass
            ticks += 1
            view = self.render()
            if view is not None:
                callback(view)
        return ticks
