"""
Tests for the shared chain client plumbing.
"""

import logging
from unittest.mock import MagicMock

import pytest

from ...core.errors import InvalidAddress, TransportFailure
from ..base import ChainClient, load_abi
from .conftest import REGISTRY


class TestLoadAbi:
    """Test packaged ABI artifacts."""

    @pytest.mark.parametrize(
        "name,entries",
        [
            ("PolicyRegistry", {"setPolicy", "setPolicyForENS", "clearPolicy", "resolveENS", "getPolicy", "PolicySet", "PolicyCleared"}),
            ("UniswapExeGuard", {"setDefaults", "defaultMaxSwapAbs", "defaultCooldownSeconds", "lastSwapTimestampByPool", "DefaultsUpdated", "SwapAllowed", "SwapBlocked"}),
            ("PoolSwapTest", {"swap"}),
            ("ERC20", {"approve"}),
        ],
    )
    def test_artifacts_define_entries(self, name, entries):
        abi = load_abi(name)
        assert entries <= {entry.get("name") for entry in abi}

    def test_missing_artifact(self):
        with pytest.raises(FileNotFoundError):
            load_abi("NoSuchContract")


class TestChainClient:
    """Test executor dispatch and error wrapping."""

    @pytest.mark.asyncio
    async def test_run_returns_result(self, mock_web3):
        client = ChainClient(mock_web3)
        fn = MagicMock(return_value=7)

        assert await client._run("op", fn, 1, key="v") == 7
        fn.assert_called_once_with(1, key="v")

    @pytest.mark.asyncio
    async def test_run_wraps_errors(self, mock_web3):
        client = ChainClient(mock_web3)
        fn = MagicMock(side_effect=ConnectionError("connection refused"))

        with pytest.raises(TransportFailure) as exc_info:
            await client._run("getPolicy", fn)

        assert exc_info.value.operation == "getPolicy"
        assert "connection refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_block_and_chain_id(self, mock_web3):
        client = ChainClient(mock_web3)

        assert await client.get_latest_block() == 5000
        assert await client.get_chain_id() == 31337

    def test_contract_checksums_address(self, mock_web3):
        ChainClient(mock_web3)._contract(REGISTRY.lower(), "PolicyRegistry")

        _, kwargs = mock_web3.eth.contract.call_args
        assert kwargs["address"] == REGISTRY
        assert isinstance(kwargs["abi"], list)

    def test_contract_rejects_bad_address(self, mock_web3):
        with pytest.raises(InvalidAddress):
            ChainClient(mock_web3)._contract("0x123", "PolicyRegistry")

    @pytest.mark.asyncio
    async def test_run_passes_guard_errors_through(self, mock_web3, caplog):
        client = ChainClient(mock_web3)
        error = TransportFailure("setPolicy reverted in block 3 (0x01)", operation="setPolicy")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(TransportFailure) as exc_info:
                await client._run("setPolicy", MagicMock(side_effect=error))

        assert exc_info.value is error
        assert caplog.records == []
