"""Mint decimals lookup used to validate spl-token amounts.

The parser only needs a function mapping a mint's 32 bytes to the number of
decimals the mint is configured with. How that number is obtained (RPC,
cache, static table) is up to the caller. The function may be synchronous or
return an awaitable when used with ``SolanaPayUrl.parse_async``.
"""

from collections.abc import Awaitable, Callable, Mapping

from .constants import KNOWN_MINT_DECIMALS
from .utils import to_base58

MintDecimalsLookup = Callable[[bytes], int | Awaitable[int]]


def static_mint_decimals(table: Mapping[str, int] | None = None) -> Callable[[bytes], int]:
    """Build a lookup backed by a ``{base58 mint: decimals}`` table.

    Args:
        table: Mint decimals keyed by base58 address. Defaults to the
            well-known mints in ``KNOWN_MINT_DECIMALS``.

    Returns:
        A synchronous lookup. Unknown mints raise KeyError.
    """
    decimals_by_mint = dict(KNOWN_MINT_DECIMALS if table is None else table)

    def lookup(mint: bytes) -> int:
        address = to_base58(mint)
        try:
            return decimals_by_mint[address]
        except KeyError:
            raise KeyError(f"Unknown mint: {address}") from None

    return lookup
