"""
Tests for operator input parsing.
"""

import pytest

from ...core.errors import InvalidAddress, UnresolvedName
from ..inputs import parse_int_input, resolve_trader
from .conftest import TRADER


class TestParseIntInput:
    """Test exact integer parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1000000000000000000", 10**18),
            ("  42 ", 42),
            ("0x10", 16),
            ("-5", -5),
            (7, 7),
            (str(2**256 - 1), 2**256 - 1),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_int_input("Amount", value) == expected

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank(self, value):
        with pytest.raises(ValueError, match="Amount is required"):
            parse_int_input("Amount", value)

    @pytest.mark.parametrize("value", ["1.5", "1e18", "abc", "0xzz"])
    def test_not_integer(self, value):
        with pytest.raises(ValueError, match="must be an integer in wei"):
            parse_int_input("Amount", value)


class TestResolveTrader:
    """Test address-or-name trader resolution."""

    @pytest.mark.asyncio
    async def test_address_is_checksummed(self, mock_reader):
        assert await resolve_trader(f" {TRADER.lower()} ", mock_reader) == TRADER
        mock_reader.resolve_ens.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_name_goes_through_registry(self, mock_reader):
        assert await resolve_trader("alice.eth", mock_reader) == TRADER
        mock_reader.resolve_ens.assert_awaited_once_with("alice.eth")

    @pytest.mark.asyncio
    async def test_malformed_hex(self, mock_reader):
        with pytest.raises(InvalidAddress):
            await resolve_trader("0x1234", mock_reader)
        mock_reader.resolve_ens.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank(self, mock_reader):
        with pytest.raises(ValueError, match="Trader address is required"):
            await resolve_trader("  ", mock_reader)

    @pytest.mark.asyncio
    async def test_unknown_name(self, mock_reader):
        mock_reader.resolve_ens.side_effect = UnresolvedName("ghost.eth")

        with pytest.raises(UnresolvedName):
            await resolve_trader("ghost.eth", mock_reader)
