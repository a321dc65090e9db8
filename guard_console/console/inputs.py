"""Operator input parsing: integer amounts and trader identifiers."""

from eth_utils import is_hex_address

from ..core.errors import InvalidAddress
from ..core.pool_identity import to_asset_id


def parse_int_input(label: str, value) -> int:
    """
    Parse an exact integer (decimal, or 0x-prefixed hex) from operator input.

    Raises:
        ValueError: If the value is blank or not an integer
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    trimmed = (value or "").strip() if isinstance(value, str) else ""
    if not trimmed:
        raise ValueError(f"{label} is required")
    try:
        if trimmed.lower().lstrip("-").startswith("0x"):
            return int(trimmed, 16)
        return int(trimmed)
    except ValueError:
        raise ValueError(f"{label} must be an integer in wei")


def looks_like_address(value: str) -> bool:
    return value.lower().startswith("0x")


async def resolve_trader(value: str, reader) -> str:
    """
    Turn a trader field into a checksum address.

    Hex input must be a valid address; anything else is treated as an ENS
    name and resolved through the registry.

    Raises:
        ValueError: If the field is blank
        InvalidAddress: If a hex value is malformed
        UnresolvedName: If the registry does not know the name
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise ValueError("Trader address is required")
    if is_hex_address(trimmed):
        return to_asset_id(trimmed)
    if looks_like_address(trimmed):
        raise InvalidAddress(f"Invalid address: {trimmed!r}", trimmed)
    return await reader.resolve_ens(trimmed)
