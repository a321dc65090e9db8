"""
JSON-ready views of snapshots, policies and the event timeline.

Big integers render as decimal strings so no precision is lost in JSON.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from eth_utils import encode_hex

from ..core.eligibility import remaining_seconds
from ..core.pool_identity import pool_id_hex
from ..core.types import Defaults, Policy, SwapEligibilitySnapshot, TimelineEvent

NO_EVENTS = "No events in range"


def to_jsonable(value: Any) -> Any:
    """Convert ints, bytes, enums and nested containers into JSON-safe values."""
    if isinstance(value, bool) or value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return encode_hex(bytes(value))
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else str(value)
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return str(value)


def format_unix(unix_seconds: int) -> str:
    """``"<ts> (<local time>)"``, or ``"0"`` for a timestamp that was never set."""
    if unix_seconds == 0:
        return "0"
    try:
        local = datetime.fromtimestamp(unix_seconds).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return str(unix_seconds)
    return f"{unix_seconds} ({local})"


def _check(passed: bool) -> str:
    return "PASS" if passed else "BLOCKED"


def render_snapshot(snapshot: SwapEligibilitySnapshot, local_now: int) -> Dict[str, Any]:
    """
    Operator view of a snapshot.

    ``remainingSeconds`` follows ``local_now``; every other field is exactly
    what the refresh computed against the chain clock.
    """
    policy = snapshot.effective_policy
    return {
        "trader": snapshot.trader,
        "poolId": pool_id_hex(snapshot.pool_id),
        "poolKey": snapshot.pool_key.to_dict(),
        "policySource": policy.source.value,
        "maxSwapAbs": str(policy.max_swap_abs),
        "cooldownSeconds": str(policy.cooldown_seconds),
        "chainTimestampAtRefresh": format_unix(snapshot.chain_timestamp_at_refresh),
        "lastSwapTimestamp": format_unix(snapshot.last_swap_timestamp),
        "nextAllowedTimestamp": format_unix(snapshot.next_allowed_timestamp),
        "remainingSeconds": str(remaining_seconds(snapshot, local_now)),
        "testAmountAbs": str(snapshot.test_amount_abs),
        "amountCheck": _check(snapshot.amount_check),
        "cooldownCheck": _check(snapshot.cooldown_check),
        "allowedNow": snapshot.allowed_now,
    }


def render_policy(trader: str, policy: Policy, ens_name: Optional[str] = None) -> Dict[str, Any]:
    view = {}
    if ens_name:
        view["ensName"] = ens_name
    view.update(
        {
            "trader": trader,
            "maxSwapAbs": str(policy.max_swap_abs),
            "cooldownSeconds": str(policy.cooldown_seconds),
            "exists": policy.exists,
        }
    )
    return view


def render_defaults(defaults: Defaults) -> Dict[str, Any]:
    return {
        "defaultMaxSwapAbs": str(defaults.max_swap_abs),
        "defaultCooldownSeconds": str(defaults.cooldown_seconds),
    }


def render_timeline(events: List[TimelineEvent]) -> Union[List[Dict[str, Any]], str]:
    """Timeline entries, or the no-events sentinel for an empty range."""
    if not events:
        return NO_EVENTS
    return [
        {
            "kind": event.kind.event_name,
            "block": event.occurrence_position,
            "args": to_jsonable(event.payload),
        }
        for event in events
    ]


def dumps(view: Any) -> str:
    """Pretty JSON for console output."""
    return json.dumps(view, indent=2)
