"""
Chain connection configuration for guard-console.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .base import BaseConfig, ConfigError


@dataclass
class ChainConfig(BaseConfig):
    """RPC endpoint, block tag and signer settings for the target chain."""

    RPC_URL: str = field(
        default_factory=lambda: BaseConfig.get_env("RPC_URL", "http://127.0.0.1:8545")
    )
    # 0 disables the chain id check
    EXPECTED_CHAIN_ID: int = field(
        default_factory=lambda: BaseConfig.get_env_int("EXPECTED_CHAIN_ID", 0)
    )

    # Block used for the chain clock sample
    BLOCK_TAG: str = field(
        default_factory=lambda: BaseConfig.get_env("BLOCK_TAG", "latest")
    )

    # Event history window
    EVENT_LOOKBACK_BLOCKS: int = field(
        default_factory=lambda: BaseConfig.get_env_int("EVENT_LOOKBACK_BLOCKS", 2000)
    )

    # Transaction settings
    TX_RECEIPT_TIMEOUT: float = field(
        default_factory=lambda: BaseConfig.get_env_float("TX_RECEIPT_TIMEOUT", 120.0)
    )
    SIGNER_PRIVATE_KEY: Optional[str] = field(
        default_factory=lambda: BaseConfig.get_env("SIGNER_PRIVATE_KEY") or None
    )

    def _validate_config(self):
        super()._validate_config()
        if self.BLOCK_TAG not in ("latest", "safe", "finalized", "pending"):
            raise ConfigError(f"Unsupported block tag: {self.BLOCK_TAG}")
        if self.EVENT_LOOKBACK_BLOCKS < 0:
            raise ConfigError("EVENT_LOOKBACK_BLOCKS must be non-negative")

    @property
    def has_signer(self) -> bool:
        """Whether a local signing key is configured."""
        return bool(self.SIGNER_PRIVATE_KEY)

    def require_signer_key(self) -> str:
        """Return the signing key or raise if write commands are not configured."""
        if not self.SIGNER_PRIVATE_KEY:
            raise ConfigError("SIGNER_PRIVATE_KEY is required for write commands")
        return self.SIGNER_PRIVATE_KEY

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if data.get("SIGNER_PRIVATE_KEY"):
            data["SIGNER_PRIVATE_KEY"] = "***"
        return data
