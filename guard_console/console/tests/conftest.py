"""
Pytest configuration for console tests.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from ...core.types import Defaults, Policy

HOOK = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
TRADER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
TOKEN_A = "0x" + "22" * 20
TOKEN_B = "0x" + "11" * 20
ROUTER = "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0"


@pytest.fixture
def mock_reader():
    """ChainReader mock: no custom policy, 1 ETH / 60 s defaults, swapped at t=1000."""
    reader = Mock()
    reader.get_policy = AsyncMock(return_value=Policy(0, 0, False))
    reader.get_defaults = AsyncMock(return_value=Defaults(10**18, 60))
    reader.get_last_swap_timestamp = AsyncMock(return_value=1000)
    reader.get_chain_timestamp = AsyncMock(return_value=1030)
    reader.resolve_ens = AsyncMock(return_value=TRADER)
    return reader


@pytest.fixture
def mock_writer():
    """ChainWriter mock whose transactions all confirm."""
    writer = Mock()
    writer.approve = AsyncMock()
    writer.swap = AsyncMock(return_value=Mock(tx_hash="0x" + "ab" * 32))
    return writer
