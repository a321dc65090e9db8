"""
Pool identity: canonical asset ordering and v4 pool id derivation.

The pool id is ``keccak256(abi.encode(PoolKey))`` where the key is the static
tuple ``(address currency0, address currency1, uint24 fee, int24 tickSpacing,
address hooks)`` and ``currency0`` sorts at or below ``currency1``.
"""

import logging
from typing import Any, Tuple

from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_typing import ChecksumAddress
from eth_utils import encode_hex, is_hex_address, keccak, to_checksum_address
from hexbytes import HexBytes

from .errors import EncodingError, InvalidAddress
from .types import PoolId, PoolKey, require_uint

logger = logging.getLogger(__name__)

POOL_KEY_ABI_TYPE = "(address,address,uint24,int24,address)"

INT24_MIN = -(2**23)
INT24_MAX = 2**23 - 1


def to_asset_id(value: Any) -> ChecksumAddress:
    """
    Validate an address and return its EIP-55 checksum form.

    Raises:
        InvalidAddress: If ``value`` is not a 20-byte hex address
    """
    if not isinstance(value, str) or not is_hex_address(value.strip()):
        raise InvalidAddress(f"Invalid address: {value!r}", value)
    return to_checksum_address(value.strip())


def canonicalize(a: str, b: str) -> Tuple[ChecksumAddress, ChecksumAddress]:
    """
    Order two asset addresses by their case-folded hex encoding.

    Equal addresses come back as ``(a, a)``; callers decide whether such a
    degenerate pair is acceptable.
    """
    first = to_asset_id(a)
    second = to_asset_id(b)
    if first.lower() <= second.lower():
        return first, second
    return second, first


def _check_widths(fee: Any, tick_spacing: Any) -> None:
    require_uint("fee", fee, bits=24, error=EncodingError)
    if isinstance(tick_spacing, bool) or not isinstance(tick_spacing, int):
        raise EncodingError(f"tick_spacing must be an integer, got {type(tick_spacing).__name__}")
    if not INT24_MIN <= tick_spacing <= INT24_MAX:
        raise EncodingError(f"tick_spacing out of range for int24: {tick_spacing}")


def build_pool_key(token0: str, token1: str, fee: int, tick_spacing: int, hooks: str) -> PoolKey:
    """
    Assemble a canonical pool key from an unordered token pair.

    Raises:
        InvalidAddress: If an address is malformed or both tokens are the same asset
        EncodingError: If fee or tick spacing do not fit their widths
    """
    currency0, currency1 = canonicalize(token0, token1)
    if currency0 == currency1:
        raise InvalidAddress(f"Token0 and Token1 must differ: {currency0}", currency0)
    _check_widths(fee, tick_spacing)
    return PoolKey(
        currency0=currency0,
        currency1=currency1,
        fee=fee,
        tick_spacing=tick_spacing,
        hooks=to_asset_id(hooks),
    )


def encode_pool_key(key: PoolKey) -> bytes:
    """ABI-encode a pool key exactly as the pool manager does."""
    for name in ("currency0", "currency1", "hooks"):
        value = getattr(key, name)
        if not isinstance(value, str) or not is_hex_address(value):
            raise EncodingError(f"{name} is not a 20-byte address: {value!r}")
    _check_widths(key.fee, key.tick_spacing)
    try:
        return encode([POOL_KEY_ABI_TYPE], [key.as_tuple()])
    except (AbiEncodingError, TypeError, ValueError) as e:
        raise EncodingError(f"Failed to encode pool key: {e}") from e


def derive_pool_id(key: PoolKey) -> PoolId:
    """
    Derive the pool id of an already-canonical key.

    No reordering happens here; pass keys built by :func:`build_pool_key`.
    """
    pool_id = HexBytes(keccak(encode_pool_key(key)))
    logger.debug(f"Derived pool id {encode_hex(pool_id)} for {key}")
    return pool_id


def pool_id_hex(pool_id: bytes) -> str:
    """Render a pool id as 0x-prefixed lowercase hex."""
    return encode_hex(bytes(pool_id))
