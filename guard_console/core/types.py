"""
Core types for policy-state evaluation and pool identity.

Domain models shared by the engine, the chain collaborators and the console.
All monetary and time fields are exact Python integers.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Tuple

from hexbytes import HexBytes

from .errors import MalformedPolicy

UINT256_MAX = 2**256 - 1

# keccak-256 digest of an encoded PoolKey
PoolId = HexBytes


def require_uint(name: str, value: Any, bits: int = 256, error=MalformedPolicy) -> int:
    """Check that ``value`` is an unsigned integer of at most ``bits`` bits."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise error(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value >= 2**bits:
        raise error(f"{name} out of range for uint{bits}: {value}")
    return value


class PolicySource(str, Enum):
    """Where an effective policy came from."""

    CUSTOM = "custom-policy"
    DEFAULTS = "hook-defaults"


class EventSource(str, Enum):
    """Contract that emits a timeline event."""

    REGISTRY = "registry"
    HOOK = "hook"


class EventKind(Enum):
    """The five event kinds shown on the console timeline."""

    POLICY_SET = ("PolicySet", EventSource.REGISTRY)
    POLICY_CLEARED = ("PolicyCleared", EventSource.REGISTRY)
    DEFAULTS_UPDATED = ("DefaultsUpdated", EventSource.HOOK)
    SWAP_ALLOWED = ("SwapAllowed", EventSource.HOOK)
    SWAP_BLOCKED = ("SwapBlocked", EventSource.HOOK)

    def __init__(self, event_name: str, source: EventSource):
        self.event_name = event_name
        self.source = source

    @classmethod
    def from_name(cls, name: str) -> "EventKind":
        """Look up a kind by its on-chain event name (e.g. ``"SwapBlocked"``)."""
        for kind in cls:
            if kind.event_name == name:
                return kind
        raise ValueError(f"Unknown event kind: {name}")

    def __str__(self) -> str:
        return self.event_name


@dataclass(frozen=True)
class PoolKey:
    """
    Canonical Uniswap v4 pool key.

    Attributes:
        currency0: Lower asset address (canonical ordering)
        currency1: Higher asset address
        fee: LP fee, uint24
        tick_spacing: Tick spacing, int24
        hooks: Hook (controller) contract address
    """

    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str

    def as_tuple(self) -> Tuple[str, str, int, int, str]:
        """Field order used by the ABI encoding and by contract calls."""
        return (self.currency0, self.currency1, self.fee, self.tick_spacing, self.hooks)

    def to_dict(self) -> dict:
        return {
            "currency0": self.currency0,
            "currency1": self.currency1,
            "fee": self.fee,
            "tickSpacing": self.tick_spacing,
            "hooks": self.hooks,
        }


@dataclass(frozen=True)
class Policy:
    """Per-trader custom policy from the registry (0 means unlimited / no cooldown)."""

    max_swap_abs: int
    cooldown_seconds: int
    exists: bool

    def __post_init__(self):
        require_uint("max_swap_abs", self.max_swap_abs)
        require_uint("cooldown_seconds", self.cooldown_seconds)
        if not isinstance(self.exists, bool):
            raise MalformedPolicy(f"exists must be a bool, got {type(self.exists).__name__}")

    @classmethod
    def from_call(cls, result: Sequence[Any]) -> "Policy":
        """Build from a ``getPolicy`` return tuple ``(maxSwapAbs, cooldownSeconds, exists)``."""
        try:
            max_swap_abs, cooldown_seconds, exists = result
        except (TypeError, ValueError):
            raise MalformedPolicy(f"getPolicy returned malformed result: {result!r}")
        return cls(max_swap_abs, cooldown_seconds, exists)


@dataclass(frozen=True)
class Defaults:
    """Hook-wide default limits."""

    max_swap_abs: int
    cooldown_seconds: int

    def __post_init__(self):
        require_uint("default max_swap_abs", self.max_swap_abs)
        require_uint("default cooldown_seconds", self.cooldown_seconds)


@dataclass(frozen=True)
class EffectivePolicy:
    """Policy actually enforced for a trader, with its provenance."""

    max_swap_abs: int
    cooldown_seconds: int
    source: PolicySource


@dataclass(frozen=True)
class EligibilityVerdict:
    """Derived checks for a prospective swap."""

    amount_check: bool
    cooldown_check: bool
    allowed_now: bool
    next_allowed_timestamp: int


@dataclass(frozen=True)
class SwapEligibilitySnapshot:
    """Result of one explicit refresh; replaced wholesale by the next one."""

    trader: str
    pool_id: PoolId
    pool_key: PoolKey
    effective_policy: EffectivePolicy
    last_swap_timestamp: int
    next_allowed_timestamp: int
    chain_timestamp_at_refresh: int
    test_amount_abs: int
    amount_check: bool
    cooldown_check: bool
    allowed_now: bool


@dataclass(frozen=True)
class TimelineEvent:
    """One historical event from the registry or the hook."""

    kind: EventKind
    occurrence_position: int
    payload: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not isinstance(self.kind, EventKind):
            raise ValueError(f"kind must be an EventKind, got {self.kind!r}")
        if isinstance(self.occurrence_position, bool) or not isinstance(self.occurrence_position, int):
            raise ValueError(f"occurrence_position must be an integer: {self.occurrence_position!r}")
        if self.occurrence_position < 0:
            raise ValueError(f"occurrence_position must be non-negative: {self.occurrence_position}")
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))
