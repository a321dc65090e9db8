#!/usr/bin/env python3
"""
Command-line operator console for the swap guard.

Usage:
    guard-console policy 0xTrader
    guard-console policy alice.eth
    guard-console set-policy 0xTrader --max-swap 1000000000000000000 --cooldown 60
    guard-console set-defaults --max-swap 0 --cooldown 30
    guard-console events --lookback 5000
    guard-console state 0xTrader --amount 500000000000000000 --watch
    guard-console swap blocked
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from web3 import Web3

from . import __version__
from .chain import ChainClient, ChainReader, ChainWriter
from .config import ConfigError, ConfigManager, get_config
from .console import (
    PolicyStateMonitor,
    SwapSimulator,
    dumps,
    parse_int_input,
    render_defaults,
    render_policy,
    render_timeline,
    resolve_trader,
)
from .core.errors import GuardError
from .core.pool_identity import to_asset_id

logger = logging.getLogger(__name__)


def emit(view) -> None:
    print(dumps(view))


def build_web3(config: ConfigManager) -> Web3:
    return Web3(Web3.HTTPProvider(config.chain.RPC_URL))


def build_reader(config: ConfigManager, web3: Web3) -> ChainReader:
    return ChainReader(
        web3,
        registry_address=config.contracts.POLICY_REGISTRY or None,
        hook_address=config.contracts.UNISWAP_EXE_GUARD or None,
        block_tag=config.chain.BLOCK_TAG,
    )


def build_writer(config: ConfigManager, web3: Web3) -> ChainWriter:
    writer = ChainWriter.from_private_key(
        web3,
        config.chain.require_signer_key(),
        registry_address=config.contracts.POLICY_REGISTRY or None,
        hook_address=config.contracts.UNISWAP_EXE_GUARD or None,
        receipt_timeout=config.chain.TX_RECEIPT_TIMEOUT,
    )
    logger.info(f"Signing as {writer.address}")
    return writer


async def check_chain_id(config: ConfigManager, web3: Web3) -> None:
    expected = config.chain.EXPECTED_CHAIN_ID
    if not expected:
        return
    actual = await ChainClient(web3).get_chain_id()
    if actual != expected:
        raise ConfigError(f"Connected to chainId={actual}, expected {expected}")


async def cmd_policy(args, config: ConfigManager, web3: Web3) -> None:
    reader = build_reader(config, web3)
    trader_input = config.contracts.default_trader(args.trader)
    trader = await resolve_trader(trader_input, reader)
    policy = await reader.get_policy(trader)
    ens_name = None if trader_input.lower().startswith("0x") else trader_input
    emit(render_policy(trader, policy, ens_name=ens_name))


async def cmd_defaults(args, config: ConfigManager, web3: Web3) -> None:
    reader = build_reader(config, web3)
    emit(render_defaults(await reader.get_defaults()))


def _limits(args, config: ConfigManager):
    max_swap = parse_int_input("Max swap", args.max_swap if args.max_swap is not None else config.contracts.MAX_SWAP_ABS)
    cooldown = parse_int_input("Cooldown", args.cooldown if args.cooldown is not None else config.contracts.COOLDOWN_SECONDS)
    return max_swap, cooldown


async def cmd_set_policy(args, config: ConfigManager, web3: Web3) -> None:
    writer = build_writer(config, web3)
    max_swap, cooldown = _limits(args, config)
    trader = to_asset_id(config.contracts.default_trader(args.trader))
    outcome = await writer.set_policy(trader, max_swap, cooldown)
    emit(asdict(outcome))


async def cmd_set_policy_ens(args, config: ConfigManager, web3: Web3) -> None:
    writer = build_writer(config, web3)
    max_swap, cooldown = _limits(args, config)
    name = (args.name or config.contracts.ENS_NAME).strip()
    if not name:
        raise ValueError("ENS name is required")
    outcome = await writer.set_policy_for_ens(name, max_swap, cooldown)
    emit(asdict(outcome))


async def cmd_clear_policy(args, config: ConfigManager, web3: Web3) -> None:
    reader = build_reader(config, web3)
    writer = build_writer(config, web3)
    trader_input = config.contracts.default_trader(args.trader)
    trader = await resolve_trader(trader_input, reader)
    label = "clearPolicy"
    if not trader_input.lower().startswith("0x"):
        label = f"clearPolicy({trader_input} -> {trader})"
    outcome = await writer.clear_policy(trader, label=label)
    emit(asdict(outcome))


async def cmd_set_defaults(args, config: ConfigManager, web3: Web3) -> None:
    writer = build_writer(config, web3)
    max_swap, cooldown = _limits(args, config)
    outcome = await writer.set_defaults(max_swap, cooldown)
    emit(asdict(outcome))


async def cmd_events(args, config: ConfigManager, web3: Web3) -> None:
    reader = build_reader(config, web3)
    lookback = args.lookback if args.lookback is not None else config.chain.EVENT_LOOKBACK_BLOCKS
    if lookback < 0:
        raise ValueError("Lookback must be non-negative")
    events = await reader.load_timeline(lookback)
    emit(render_timeline(events))


async def cmd_state(args, config: ConfigManager, web3: Web3) -> None:
    reader = build_reader(config, web3)
    pool = config.contracts.get_live_pool()
    trader = await resolve_trader(config.contracts.default_trader(args.trader), reader)
    amount = parse_int_input("Test amount", args.amount if args.amount is not None else pool["allowed_input"])
    token0 = args.token0 or pool["token0"]
    token1 = args.token1 or pool["token1"]
    if not token0 or not token1:
        raise ValueError("Set Token0 and Token1")

    monitor = PolicyStateMonitor(reader, config.contracts.hook_address)
    await monitor.refresh(
        trader,
        token0,
        token1,
        fee=args.fee if args.fee is not None else pool["fee"],
        tick_spacing=args.tick_spacing if args.tick_spacing is not None else pool["tick_spacing"],
        test_amount=amount,
    )
    emit(monitor.render())

    if args.watch:
        await monitor.run_ticker(emit, interval=config.contracts.STATE_TICK_SECONDS)


async def cmd_approve(args, config: ConfigManager, web3: Web3) -> None:
    simulator = SwapSimulator.from_config(build_writer(config, web3), config.contracts)
    emit(await simulator.approve_tokens())


async def cmd_swap(args, config: ConfigManager, web3: Web3) -> None:
    simulator = SwapSimulator.from_config(build_writer(config, web3), config.contracts)
    result = await simulator.run_swap(expect_blocked=args.kind == "blocked")
    emit(result.to_dict())


COMMANDS = {
    "policy": cmd_policy,
    "defaults": cmd_defaults,
    "set-policy": cmd_set_policy,
    "set-policy-ens": cmd_set_policy_ens,
    "clear-policy": cmd_clear_policy,
    "set-defaults": cmd_set_defaults,
    "events": cmd_events,
    "state": cmd_state,
    "approve": cmd_approve,
    "swap": cmd_swap,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guard-console",
        description="Operator console for the swap policy registry and guard hook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Settings come from the environment or .env (RPC_URL, POLICY_REGISTRY,
UNISWAP_EXE_GUARD, SIGNER_PRIVATE_KEY, LIVE_* pool parameters, TRADER, ...).
Trader arguments accept a hex address or a name known to the registry.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("policy", help="Read a trader's custom policy")
    p.add_argument("trader", nargs="?", help="Trader address or ENS name (default: TRADER)")

    sub.add_parser("defaults", help="Read the hook-wide defaults")

    for name, help_text, target in (
        ("set-policy", "Set a trader's custom policy", "trader"),
        ("set-policy-ens", "Set a custom policy for an ENS name", "name"),
        ("set-defaults", "Set the hook-wide defaults", None),
    ):
        p = sub.add_parser(name, help=help_text)
        if target:
            p.add_argument(target, nargs="?")
        p.add_argument("--max-swap", help="Max absolute swap amount in wei (0 = unlimited)")
        p.add_argument("--cooldown", help="Cooldown in seconds (0 = none)")

    p = sub.add_parser("clear-policy", help="Clear a trader's custom policy")
    p.add_argument("trader", nargs="?", help="Trader address or ENS name")

    p = sub.add_parser("events", help="Show registry and hook events")
    p.add_argument("--lookback", type=int, help="Blocks to look back (default: EVENT_LOOKBACK_BLOCKS)")

    p = sub.add_parser("state", help="Evaluate swap eligibility for a trader")
    p.add_argument("trader", nargs="?", help="Trader address or ENS name")
    p.add_argument("--amount", help="Swap amount in wei; sign is ignored")
    p.add_argument("--token0", help="Pool token (default: LIVE_TOKEN0)")
    p.add_argument("--token1", help="Pool token (default: LIVE_TOKEN1)")
    p.add_argument("--fee", type=int, help="Pool fee (default: LIVE_POOL_FEE)")
    p.add_argument("--tick-spacing", type=int, help="Tick spacing (default: LIVE_TICK_SPACING)")
    p.add_argument("--watch", action="store_true", help="Keep re-rendering the countdown every tick")

    sub.add_parser("approve", help="Approve the swap router for both pool tokens")

    p = sub.add_parser("swap", help="Run a live test swap")
    p.add_argument("kind", choices=["allowed", "blocked"])

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
        web3 = build_web3(config)
        await check_chain_id(config, web3)
        await COMMANDS[args.command](args, config, web3)
        return 0
    except (GuardError, ConfigError, ValueError) as e:
        logger.error(f"ERROR: {e}")
        return 1


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    run()
