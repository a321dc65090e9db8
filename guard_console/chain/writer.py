"""
Write side of the ledger: policy administration, hook defaults, token
approvals and test swaps.

Transactions are signed with a local key and the writer waits for each
receipt before returning.
"""

from dataclasses import dataclass
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex
from web3 import Web3

from ..core.errors import TransportFailure
from ..core.pool_identity import to_asset_id
from ..core.types import UINT256_MAX, PoolKey, require_uint
from .base import ERC20_ABI, HOOK_ABI, REGISTRY_ABI, SWAP_ROUTER_ABI, ChainClient


@dataclass
class TxOutcome:
    """Confirmed transaction summary."""

    label: str
    tx_hash: str
    block_number: int
    status: int

    @property
    def success(self) -> bool:
        return self.status == 1


class ChainWriter(ChainClient):
    """Builds, signs and submits transactions to the guard contracts."""

    def __init__(
        self,
        web3: Web3,
        account: LocalAccount,
        registry_address: Optional[str] = None,
        hook_address: Optional[str] = None,
        receipt_timeout: float = 120.0,
    ):
        """
        Initialize the writer.

        Args:
            web3: Web3 instance
            account: Local signing account
            registry_address: PolicyRegistry address (needed for policy writes)
            hook_address: UniswapExeGuard address (needed for setDefaults)
            receipt_timeout: Seconds to wait for each receipt
        """
        super().__init__(web3)
        self.account = account
        self.registry_address = registry_address
        self.hook_address = hook_address
        self.receipt_timeout = receipt_timeout

    @classmethod
    def from_private_key(cls, web3: Web3, private_key: str, **kwargs) -> "ChainWriter":
        return cls(web3, Account.from_key(private_key), **kwargs)

    @property
    def address(self) -> str:
        return self.account.address

    def _send_sync(self, label: str, call) -> TxOutcome:
        tx = call.build_transaction(
            {
                "from": self.account.address,
                "nonce": self.web3.eth.get_transaction_count(self.account.address, "pending"),
            }
        )
        signed = self.account.sign_transaction(tx)
        tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash_hex = encode_hex(bytes(tx_hash))
        self.logger.info(f"{label} tx submitted: {tx_hash_hex}")

        receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        outcome = TxOutcome(
            label=label,
            tx_hash=tx_hash_hex,
            block_number=receipt["blockNumber"],
            status=receipt["status"],
        )
        if not outcome.success:
            raise TransportFailure(
                f"{label} reverted in block {outcome.block_number} ({tx_hash_hex})",
                operation=label,
            )
        self.logger.info(f"{label} confirmed in block {outcome.block_number}")
        return outcome

    async def _send(self, label: str, call) -> TxOutcome:
        return await self._run(label, self._send_sync, label, call)

    async def set_policy(self, trader: str, max_swap_abs: int, cooldown_seconds: int) -> TxOutcome:
        """Set a custom policy for ``trader``."""
        trader = to_asset_id(trader)
        require_uint("maxSwapAbs", max_swap_abs, error=ValueError)
        require_uint("cooldownSeconds", cooldown_seconds, error=ValueError)
        registry = self._contract(self._require(self.registry_address, "PolicyRegistry"), REGISTRY_ABI)
        return await self._send(
            "setPolicy", registry.functions.setPolicy(trader, max_swap_abs, cooldown_seconds)
        )

    async def set_policy_for_ens(self, name: str, max_swap_abs: int, cooldown_seconds: int) -> TxOutcome:
        """Set a custom policy for the trader an ENS name resolves to (resolved on-chain)."""
        if not name or not name.strip():
            raise ValueError("ENS name is required")
        require_uint("maxSwapAbs", max_swap_abs, error=ValueError)
        require_uint("cooldownSeconds", cooldown_seconds, error=ValueError)
        registry = self._contract(self._require(self.registry_address, "PolicyRegistry"), REGISTRY_ABI)
        return await self._send(
            "setPolicyForENS",
            registry.functions.setPolicyForENS(name.strip(), max_swap_abs, cooldown_seconds),
        )

    async def clear_policy(self, trader: str, label: Optional[str] = None) -> TxOutcome:
        """Remove the custom policy of ``trader`` so hook defaults apply again."""
        trader = to_asset_id(trader)
        registry = self._contract(self._require(self.registry_address, "PolicyRegistry"), REGISTRY_ABI)
        return await self._send(label or "clearPolicy", registry.functions.clearPolicy(trader))

    async def set_defaults(self, max_swap_abs: int, cooldown_seconds: int) -> TxOutcome:
        """Update the hook-wide defaults."""
        require_uint("defaultMaxSwapAbs", max_swap_abs, error=ValueError)
        require_uint("defaultCooldownSeconds", cooldown_seconds, error=ValueError)
        hook = self._contract(self._require(self.hook_address, "UniswapExeGuard"), HOOK_ABI)
        return await self._send(
            "setDefaults", hook.functions.setDefaults(max_swap_abs, cooldown_seconds)
        )

    async def approve(self, token: str, spender: str, amount: int = UINT256_MAX) -> TxOutcome:
        """ERC-20 approval, unlimited by default."""
        token = to_asset_id(token)
        spender = to_asset_id(spender)
        erc20 = self._contract(token, ERC20_ABI)
        return await self._send(
            f"approve {token} -> {spender}", erc20.functions.approve(spender, amount)
        )

    async def swap(
        self,
        router: str,
        key: PoolKey,
        amount_specified: int,
        sqrt_price_limit_x96: int,
        zero_for_one: bool = True,
        label: str = "swap",
    ) -> TxOutcome:
        """
        Swap through a PoolSwapTest router.

        Args:
            router: PoolSwapTest address
            key: Canonical pool key
            amount_specified: Negative for exact input, positive for exact output
            sqrt_price_limit_x96: Price limit bound
            zero_for_one: Swap direction
            label: Log label
        """
        swap_router = self._contract(router, SWAP_ROUTER_ABI)
        params = (zero_for_one, amount_specified, sqrt_price_limit_x96)
        test_settings = (False, False)
        return await self._send(
            label, swap_router.functions.swap(key.as_tuple(), params, test_settings, b"")
        )
