"""
Configuration manager for guard-console.

Combines the chain and contract configuration classes into a single
interface shared by the CLI and the console services.
"""

import logging
from typing import Dict, Any, Optional
from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .contracts import ContractConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Centralized configuration manager that combines all configuration classes.
    """

    def __init__(self, environment: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, dev, staging, production)
        """
        self._environment = environment
        self._base_config = None
        self._chain_config = None
        self._contract_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize all configuration objects."""
        try:
            self._base_config = BaseConfig()
            if self._environment:
                self._base_config.ENVIRONMENT = self._environment
                self._base_config._validate_config()

            self._chain_config = ChainConfig()
            self._contract_config = ContractConfig()

            logger.debug(f"Configuration initialized for environment: {self.environment}")

        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}")

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        """Get base configuration."""
        return self._base_config

    @property
    def chain(self) -> ChainConfig:
        """Get chain configuration."""
        return self._chain_config

    @property
    def contracts(self) -> ContractConfig:
        """Get contract configuration."""
        return self._contract_config

    def validate_configuration(self) -> bool:
        """
        Validate settings needed by every console command.

        Raises:
            ConfigError: If the RPC endpoint is missing
        """
        if not self.chain.RPC_URL:
            raise ConfigError("RPC_URL not configured")
        if not self.contracts.POLICY_REGISTRY:
            logger.warning("POLICY_REGISTRY not set; registry commands will fail")
        if not self.contracts.UNISWAP_EXE_GUARD:
            logger.warning("UNISWAP_EXE_GUARD not set; hook commands will fail")
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "chain": self.chain.to_dict(),
            "contracts": self.contracts.to_dict(),
        }

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self.environment})"


# Global configuration manager instance
_config_manager = None


def get_config(environment: Optional[str] = None, force_reload: bool = False) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        environment: Override environment
        force_reload: Force reload of configuration

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment)
        _config_manager.validate_configuration()

    return _config_manager
