"""
Live swap simulation against the guarded pool.

Runs one exact-input swap sized to pass the guard and one sized to trip it,
so an operator can watch the hook allow and block in practice.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from ..config.contracts import ContractConfig
from ..core.errors import TransportFailure
from ..core.pool_identity import build_pool_key, to_asset_id
from ..core.types import PoolKey

logger = logging.getLogger(__name__)

# TickMath.MIN_SQRT_PRICE + 1: lowest allowed limit for a zeroForOne swap
MIN_SQRT_PRICE = 4295128739
MIN_SQRT_PRICE_PLUS_ONE = MIN_SQRT_PRICE + 1


@dataclass
class SwapRunResult:
    """Outcome of one simulated swap."""

    action: str
    success: bool
    expected: Optional[bool] = None
    tx_hash: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class SwapSimulator:
    """Approves pool tokens and submits allowed/blocked test swaps."""

    def __init__(
        self,
        writer,
        hook_address: str,
        router: str,
        token0: str,
        token1: str,
        fee: int,
        tick_spacing: int,
        allowed_input: int,
        blocked_input: int,
    ):
        self.writer = writer
        self.hook_address = hook_address
        self.router = router
        self.token0 = token0
        self.token1 = token1
        self.fee = fee
        self.tick_spacing = tick_spacing
        self.allowed_input = allowed_input
        self.blocked_input = blocked_input

    @classmethod
    def from_config(cls, writer, contracts: ContractConfig) -> "SwapSimulator":
        pool = contracts.get_live_pool()
        return cls(
            writer=writer,
            hook_address=contracts.hook_address,
            router=pool["router"],
            token0=pool["token0"],
            token1=pool["token1"],
            fee=pool["fee"],
            tick_spacing=pool["tick_spacing"],
            allowed_input=pool["allowed_input"],
            blocked_input=pool["blocked_input"],
        )

    def build_key(self) -> PoolKey:
        if not self.token0 or not self.token1:
            raise ValueError("Set Token0 and Token1")
        return build_pool_key(self.token0, self.token1, self.fee, self.tick_spacing, self.hook_address)

    async def approve_tokens(self) -> Dict[str, Any]:
        """Approve the router to pull both pool tokens (once if they are the same)."""
        if not self.router or not self.token0 or not self.token1:
            raise ValueError("Set PoolSwapTest, Token0, Token1")
        await self.writer.approve(self.token0, self.router)
        if to_asset_id(self.token1) != to_asset_id(self.token0):
            await self.writer.approve(self.token1, self.router)
        return {"approved": True, "router": self.router, "token0": self.token0, "token1": self.token1}

    async def run_swap(self, expect_blocked: bool) -> SwapRunResult:
        """
        Submit an exact-input zeroForOne swap.

        A failure is the expected result when ``expect_blocked`` is set and is
        returned as such; otherwise it propagates.
        """
        if not self.router:
            raise ValueError("Set PoolSwapTest address first")
        action = "blockedSwap" if expect_blocked else "allowedSwap"
        amount = self.blocked_input if expect_blocked else self.allowed_input
        if not amount:
            raise ValueError("Swap input amount is required")
        key = self.build_key()

        try:
            outcome = await self.writer.swap(
                self.router,
                key,
                amount_specified=-amount,
                sqrt_price_limit_x96=MIN_SQRT_PRICE_PLUS_ONE,
                zero_for_one=True,
                label=action,
            )
        except TransportFailure as e:
            if not expect_blocked:
                raise
            logger.info(f"Expected blocked swap revert: {e}")
            return SwapRunResult(action=action, success=False, expected=True, error=str(e))

        if expect_blocked:
            logger.warning("WARNING: blocked swap unexpectedly succeeded")
        return SwapRunResult(action=action, success=True, tx_hash=outcome.tx_hash)
