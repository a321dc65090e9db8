"""
Contract addresses and console defaults for guard-console.

Values fall back through several environment keys; the first non-empty one
wins, then the built-in default.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .base import BaseConfig, ConfigError

DEFAULT_MAX_SWAP_ABS = "1000000000000000000"
DEFAULT_COOLDOWN_SECONDS = "60"
DEFAULT_SWAP_FEE = "3000"
DEFAULT_TICK_SPACING = "60"
DEFAULT_ALLOWED_INPUT = "100000000000000000"
DEFAULT_BLOCKED_INPUT = "2000000000000000000"


def _env_int(*keys: str, default: str) -> int:
    value = BaseConfig.get_env_first(*keys, default=default)
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{keys[0]} must be an integer, got: {value}")


@dataclass
class ContractConfig(BaseConfig):
    """Registry/hook addresses, live pool parameters and policy defaults."""

    # Core contracts
    POLICY_REGISTRY: str = field(
        default_factory=lambda: BaseConfig.get_env_first("POLICY_REGISTRY")
    )
    UNISWAP_EXE_GUARD: str = field(
        default_factory=lambda: BaseConfig.get_env_first("UNISWAP_EXE_GUARD")
    )

    # Live swap pool
    LIVE_SWAP_ROUTER: str = field(
        default_factory=lambda: BaseConfig.get_env_first("LIVE_SWAP_ROUTER")
    )
    LIVE_TOKEN0: str = field(
        default_factory=lambda: BaseConfig.get_env_first("LIVE_TOKEN0")
    )
    LIVE_TOKEN1: str = field(
        default_factory=lambda: BaseConfig.get_env_first("LIVE_TOKEN1")
    )
    LIVE_POOL_FEE: int = field(
        default_factory=lambda: _env_int("LIVE_POOL_FEE", default=DEFAULT_SWAP_FEE)
    )
    LIVE_TICK_SPACING: int = field(
        default_factory=lambda: _env_int("LIVE_TICK_SPACING", default=DEFAULT_TICK_SPACING)
    )
    LIVE_ALLOWED_INPUT: int = field(
        default_factory=lambda: _env_int("LIVE_ALLOWED_INPUT", default=DEFAULT_ALLOWED_INPUT)
    )
    LIVE_BLOCKED_INPUT: int = field(
        default_factory=lambda: _env_int("LIVE_BLOCKED_INPUT", default=DEFAULT_BLOCKED_INPUT)
    )

    # Policy form defaults
    MAX_SWAP_ABS: int = field(
        default_factory=lambda: _env_int(
            "MAX_SWAP_ABS", "DEFAULT_MAX_SWAP_ABS", default=DEFAULT_MAX_SWAP_ABS
        )
    )
    COOLDOWN_SECONDS: int = field(
        default_factory=lambda: _env_int(
            "COOLDOWN_SECONDS", "DEFAULT_COOLDOWN_SECONDS", default=DEFAULT_COOLDOWN_SECONDS
        )
    )

    # Operator shortcuts
    TRADER: str = field(default_factory=lambda: BaseConfig.get_env_first("TRADER"))
    ENS_NAME: str = field(default_factory=lambda: BaseConfig.get_env_first("ENS_NAME"))

    # Cosmetic re-render period of the state view
    STATE_TICK_SECONDS: float = field(
        default_factory=lambda: BaseConfig.get_env_float("STATE_TICK_SECONDS", 1.0)
    )

    def _validate_config(self):
        super()._validate_config()
        if self.STATE_TICK_SECONDS <= 0:
            raise ConfigError("STATE_TICK_SECONDS must be positive")
        for name in ("LIVE_ALLOWED_INPUT", "LIVE_BLOCKED_INPUT", "MAX_SWAP_ABS", "COOLDOWN_SECONDS"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be non-negative")

    def require(self, name: str) -> str:
        """Return an address setting or raise naming what is missing."""
        value = getattr(self, name)
        if not value:
            raise ConfigError(f"Set {name} first")
        return value

    @property
    def hook_address(self) -> str:
        return self.require("UNISWAP_EXE_GUARD")

    def get_live_pool(self) -> Dict[str, Any]:
        """Live pool parameters used by the state view and swap simulation."""
        return {
            "router": self.LIVE_SWAP_ROUTER,
            "token0": self.LIVE_TOKEN0,
            "token1": self.LIVE_TOKEN1,
            "fee": self.LIVE_POOL_FEE,
            "tick_spacing": self.LIVE_TICK_SPACING,
            "allowed_input": self.LIVE_ALLOWED_INPUT,
            "blocked_input": self.LIVE_BLOCKED_INPUT,
        }

    def default_trader(self, override: Optional[str] = None) -> str:
        """Trader given on the command line, else TRADER, else ENS_NAME."""
        trader = (override or "").strip() or self.TRADER or self.ENS_NAME
        if not trader:
            raise ConfigError("Trader address is required")
        return trader
