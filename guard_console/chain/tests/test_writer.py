"""
Tests for ChainWriter transaction flow.
"""

import logging
from unittest.mock import MagicMock

import pytest

from ...console.swap_sim import SwapSimulator
from ...core.errors import InvalidAddress, TransportFailure
from ...core.types import UINT256_MAX, PoolKey
from ..writer import ChainWriter, TxOutcome
from .conftest import HOOK, REGISTRY, TRADER

SIGNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SIGNER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ROUTER = "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0"
TOKEN0 = "0x" + "11" * 20
TOKEN1 = "0x" + "22" * 20


@pytest.fixture
def account():
    """Signing account mock."""
    account = MagicMock()
    account.address = SIGNER
    account.sign_transaction.return_value = MagicMock(raw_transaction=b"\x02signed")
    return account


@pytest.fixture
def chain_web3(mock_web3):
    mock_web3.eth.get_transaction_count.return_value = 7
    mock_web3.eth.send_raw_transaction.return_value = b"\x99" * 32
    mock_web3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 42, "status": 1}
    return mock_web3


@pytest.fixture
def writer(chain_web3, account):
    return ChainWriter(chain_web3, account, registry_address=REGISTRY, hook_address=HOOK, receipt_timeout=5)


class TestSend:
    """Test the build/sign/submit/wait sequence."""

    @pytest.mark.asyncio
    async def test_set_policy(self, writer, contracts, chain_web3, account):
        registry = contracts[REGISTRY]
        call = registry.functions.setPolicy.return_value
        call.build_transaction.return_value = {"to": REGISTRY, "data": "0x"}

        outcome = await writer.set_policy(TRADER.lower(), 10**18, 60)

        assert outcome == TxOutcome("setPolicy", "0x" + "99" * 32, 42, 1)
        assert outcome.success is True
        registry.functions.setPolicy.assert_called_once_with(TRADER, 10**18, 60)
        call.build_transaction.assert_called_once_with({"from": SIGNER, "nonce": 7})
        chain_web3.eth.get_transaction_count.assert_called_once_with(SIGNER, "pending")
        account.sign_transaction.assert_called_once_with({"to": REGISTRY, "data": "0x"})
        chain_web3.eth.send_raw_transaction.assert_called_once_with(b"\x02signed")
        chain_web3.eth.wait_for_transaction_receipt.assert_called_once_with(b"\x99" * 32, timeout=5)

    @pytest.mark.asyncio
    async def test_reverted_receipt_raises(self, writer, chain_web3):
        chain_web3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 43, "status": 0}

        with pytest.raises(TransportFailure) as exc_info:
            await writer.set_defaults(0, 30)

        assert "reverted" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_submit_error_raises_transport_failure(self, writer, chain_web3):
        chain_web3.eth.send_raw_transaction.side_effect = ValueError("nonce too low")

        with pytest.raises(TransportFailure):
            await writer.clear_policy(TRADER)


class TestOperations:
    """Test argument handling of each write."""

    @pytest.mark.asyncio
    async def test_set_policy_for_ens_strips_name(self, writer, contracts):
        await writer.set_policy_for_ens("  alice.eth ", 5, 0)
        contracts[REGISTRY].functions.setPolicyForENS.assert_called_once_with("alice.eth", 5, 0)

    @pytest.mark.asyncio
    async def test_set_policy_for_ens_requires_name(self, writer):
        with pytest.raises(ValueError):
            await writer.set_policy_for_ens("  ", 5, 0)

    @pytest.mark.asyncio
    async def test_clear_policy_custom_label(self, writer, contracts):
        outcome = await writer.clear_policy(TRADER, label="clearPolicy(alice.eth)")

        assert outcome.label == "clearPolicy(alice.eth)"
        contracts[REGISTRY].functions.clearPolicy.assert_called_once_with(TRADER)

    @pytest.mark.asyncio
    async def test_set_defaults(self, writer, contracts):
        outcome = await writer.set_defaults(0, 30)

        assert outcome.label == "setDefaults"
        contracts[HOOK].functions.setDefaults.assert_called_once_with(0, 30)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_swap,cooldown", [(-1, 0), (0, -1), ("1", 0), (2**256, 0)])
    async def test_invalid_limits_rejected(self, writer, max_swap, cooldown):
        with pytest.raises(ValueError):
            await writer.set_policy(TRADER, max_swap, cooldown)
        with pytest.raises(ValueError):
            await writer.set_defaults(max_swap, cooldown)

    @pytest.mark.asyncio
    async def test_missing_contract_address(self, chain_web3, account):
        writer = ChainWriter(chain_web3, account)

        with pytest.raises(ValueError, match="Set PolicyRegistry address first"):
            await writer.set_policy(TRADER, 1, 1)
        with pytest.raises(ValueError, match="Set UniswapExeGuard address first"):
            await writer.set_defaults(1, 1)

    @pytest.mark.asyncio
    async def test_approve_defaults_to_unlimited(self, writer, contracts):
        await writer.approve(TOKEN0, ROUTER)
        contracts[TOKEN0].functions.approve.assert_called_once_with(ROUTER, UINT256_MAX)

    @pytest.mark.asyncio
    async def test_approve_bad_token(self, writer):
        with pytest.raises(InvalidAddress):
            await writer.approve("0xnope", ROUTER)

    @pytest.mark.asyncio
    async def test_swap_arguments(self, writer, contracts):
        key = PoolKey(TOKEN0, TOKEN1, 3000, 60, HOOK)

        outcome = await writer.swap(ROUTER, key, -100, 4295128740, label="allowedSwap")

        assert outcome.label == "allowedSwap"
        contracts[ROUTER].functions.swap.assert_called_once_with(
            (TOKEN0, TOKEN1, 3000, 60, HOOK), (True, -100, 4295128740), (False, False), b""
        )


def test_from_private_key():
    writer = ChainWriter.from_private_key(MagicMock(), SIGNER_KEY)
    assert writer.address == SIGNER


class TestRevertedSwap:
    """Test how a reverted swap surfaces."""

    @pytest.mark.asyncio
    async def test_revert_message_is_not_rewrapped(self, writer, chain_web3, caplog):
        chain_web3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 5, "status": 0}
        key = PoolKey(TOKEN0, TOKEN1, 3000, 60, HOOK)

        with caplog.at_level(logging.INFO):
            with pytest.raises(TransportFailure) as exc_info:
                await writer.swap(ROUTER, key, -1, 4295128740, label="blockedSwap")

        assert str(exc_info.value) == f"blockedSwap reverted in block 5 (0x{'99' * 32})"
        assert exc_info.value.operation == "blockedSwap"
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    @pytest.mark.asyncio
    async def test_expected_blocked_swap_logs_no_error(self, writer, chain_web3, caplog):
        chain_web3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 5, "status": 0}
        simulator = SwapSimulator(writer, HOOK, ROUTER, TOKEN0, TOKEN1, 3000, 60, 10**17, 2 * 10**18)

        with caplog.at_level(logging.INFO):
            result = await simulator.run_swap(expect_blocked=True)

        assert result.success is False
        assert result.expected is True
        assert result.error == f"blockedSwap reverted in block 5 (0x{'99' * 32})"
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
