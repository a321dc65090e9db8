"""
Swap eligibility evaluation.

Mirrors the hook's checks so an operator can predict whether a swap of a
given size would pass right now:

* amount check: ``maxSwapAbs == 0`` (unlimited) or ``amount <= maxSwapAbs``
* cooldown check: no cooldown configured, trader never swapped in this pool,
  or the chain clock reached ``lastSwap + cooldown``

Eligibility uses the chain timestamp sampled at refresh. The countdown shown
between refreshes uses a separate local clock, so the two may disagree.
"""

from typing import Union

from .types import (
    EffectivePolicy,
    EligibilityVerdict,
    PoolId,
    PoolKey,
    SwapEligibilitySnapshot,
)


def absolute_amount(amount_specified: int) -> int:
    """Drop the direction of a signed swap amount."""
    return -amount_specified if amount_specified < 0 else amount_specified


def evaluate(
    effective: EffectivePolicy,
    last_swap_timestamp: int,
    chain_timestamp: int,
    test_amount_abs: int,
) -> EligibilityVerdict:
    """
    Compute amount/cooldown checks for a prospective swap.

    Args:
        effective: Resolved policy
        last_swap_timestamp: Last swap by the trader in this pool, 0 if never
        chain_timestamp: Block timestamp sampled at refresh
        test_amount_abs: Swap magnitude, sign already discarded

    Returns:
        EligibilityVerdict
    """
    amount_check = effective.max_swap_abs == 0 or test_amount_abs <= effective.max_swap_abs

    next_allowed_timestamp = last_swap_timestamp + effective.cooldown_seconds
    cooldown_check = (
        effective.cooldown_seconds == 0
        or last_swap_timestamp == 0
        or chain_timestamp >= next_allowed_timestamp
    )

    return EligibilityVerdict(
        amount_check=amount_check,
        cooldown_check=cooldown_check,
        allowed_now=amount_check and cooldown_check,
        next_allowed_timestamp=next_allowed_timestamp,
    )


def build_snapshot(
    trader: str,
    pool_id: PoolId,
    pool_key: PoolKey,
    effective: EffectivePolicy,
    last_swap_timestamp: int,
    chain_timestamp: int,
    test_amount_abs: int,
) -> SwapEligibilitySnapshot:
    """Evaluate and package everything a refresh produced."""
    verdict = evaluate(effective, last_swap_timestamp, chain_timestamp, test_amount_abs)
    return SwapEligibilitySnapshot(
        trader=trader,
        pool_id=pool_id,
        pool_key=pool_key,
        effective_policy=effective,
        last_swap_timestamp=last_swap_timestamp,
        next_allowed_timestamp=verdict.next_allowed_timestamp,
        chain_timestamp_at_refresh=chain_timestamp,
        test_amount_abs=test_amount_abs,
        amount_check=verdict.amount_check,
        cooldown_check=verdict.cooldown_check,
        allowed_now=verdict.allowed_now,
    )


def remaining_seconds(
    next_allowed: Union[SwapEligibilitySnapshot, int], local_now: int
) -> int:
    """Seconds left until the cooldown elapses according to the local clock."""
    if isinstance(next_allowed, SwapEligibilitySnapshot):
        next_allowed = next_allowed.next_allowed_timestamp
    return max(0, next_allowed - local_now)
