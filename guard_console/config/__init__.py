"""
Configuration management for guard-console.

Example:
    from guard_console.config import get_config

    config = get_config()
    rpc_url = config.chain.RPC_URL
    hook = config.contracts.hook_address
"""

from .base import BaseConfig, ConfigError, first_non_empty
from .chains import ChainConfig
from .contracts import ContractConfig
from .manager import ConfigManager, get_config

__all__ = [
    "BaseConfig",
    "ConfigError",
    "first_non_empty",
    "ChainConfig",
    "ContractConfig",
    "ConfigManager",
    "get_config",
]
