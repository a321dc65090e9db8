"""
Operator-facing orchestration around the policy-state engine.
"""

from .inputs import parse_int_input, resolve_trader
from .rendering import (
    NO_EVENTS,
    dumps,
    format_unix,
    render_defaults,
    render_policy,
    render_snapshot,
    render_timeline,
    to_jsonable,
)
from .state import PolicyStateMonitor
from .swap_sim import MIN_SQRT_PRICE_PLUS_ONE, SwapRunResult, SwapSimulator

__all__ = [
    "parse_int_input",
    "resolve_trader",
    "NO_EVENTS",
    "dumps",
    "format_unix",
    "render_defaults",
    "render_policy",
    "render_snapshot",
    "render_timeline",
    "to_jsonable",
    "PolicyStateMonitor",
    "MIN_SQRT_PRICE_PLUS_ONE",
    "SwapRunResult",
    "SwapSimulator",
]
