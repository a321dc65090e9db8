"""
Pytest configuration for chain reader/writer tests.
"""

from unittest.mock import MagicMock

import pytest

REGISTRY = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
HOOK = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
TRADER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


@pytest.fixture
def contracts():
    """Registry and hook contract mocks keyed by address."""
    return {REGISTRY: MagicMock(name="registry"), HOOK: MagicMock(name="hook")}


@pytest.fixture
def mock_web3(contracts):
    """Mock Web3 whose eth.contract returns the mock bound to the address."""
    web3 = MagicMock()
    web3.eth.contract.side_effect = lambda address, abi: contracts.setdefault(address, MagicMock())
    web3.eth.block_number = 5000
    web3.eth.chain_id = 31337
    web3.eth.get_block.return_value = {"number": 5000, "timestamp": 1_700_000_000}
    return web3
