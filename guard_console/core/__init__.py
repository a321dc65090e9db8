"""
Policy-state evaluation and pool-identity engine.

Pure, synchronous functions: no I/O happens in this package.
"""

from .eligibility import absolute_amount, build_snapshot, evaluate, remaining_seconds
from .errors import (
    EncodingError,
    GuardError,
    InvalidAddress,
    MalformedPolicy,
    TransportFailure,
    UnresolvedName,
)
from .policy import resolve
from .pool_identity import (
    build_pool_key,
    canonicalize,
    derive_pool_id,
    encode_pool_key,
    pool_id_hex,
    to_asset_id,
)
from .timeline import merge, normalize_log
from .types import (
    UINT256_MAX,
    Defaults,
    EffectivePolicy,
    EligibilityVerdict,
    EventKind,
    EventSource,
    Policy,
    PolicySource,
    PoolId,
    PoolKey,
    SwapEligibilitySnapshot,
    TimelineEvent,
)

__all__ = [
    "absolute_amount",
    "build_snapshot",
    "evaluate",
    "remaining_seconds",
    "EncodingError",
    "GuardError",
    "InvalidAddress",
    "MalformedPolicy",
    "TransportFailure",
    "UnresolvedName",
    "resolve",
    "build_pool_key",
    "canonicalize",
    "derive_pool_id",
    "encode_pool_key",
    "pool_id_hex",
    "to_asset_id",
    "merge",
    "normalize_log",
    "UINT256_MAX",
    "Defaults",
    "EffectivePolicy",
    "EligibilityVerdict",
    "EventKind",
    "EventSource",
    "Policy",
    "PolicySource",
    "PoolId",
    "PoolKey",
    "SwapEligibilitySnapshot",
    "TimelineEvent",
]
