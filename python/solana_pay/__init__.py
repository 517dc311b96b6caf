"""Solana Pay transfer request URLs.

Strict parsing and building of ``solana:`` payment request URLs with
fixed-precision amounts, validated public keys and references.
"""

from solana_pay.constants import (
    MAX_REFERENCES,
    NATIVE_SOL_DECIMAL_COUNT,
    SOLANA_SCHEME,
)
from solana_pay.errors import ErrorCode, SolanaPayError
from solana_pay.lookup import MintDecimalsLookup, static_mint_decimals
from solana_pay.number import Number
from solana_pay.pubkey import PublicKey
from solana_pay.references import Reference
from solana_pay.url import SolanaPayUrl, parse_url, parse_url_async
from solana_pay.utils import (
    RandomBytes,
    from_base58,
    on_edwards_curve,
    to_base58,
    url_decode,
    url_encode,
    validate_base58_address,
)

__all__ = [
    # Constants
    "SOLANA_SCHEME",
    "NATIVE_SOL_DECIMAL_COUNT",
    "MAX_REFERENCES",
    # Errors
    "ErrorCode",
    "SolanaPayError",
    # Types
    "Number",
    "PublicKey",
    "Reference",
    "SolanaPayUrl",
    # Parsing
    "parse_url",
    "parse_url_async",
    "MintDecimalsLookup",
    "static_mint_decimals",
    # Utils
    "RandomBytes",
    "from_base58",
    "to_base58",
    "on_edwards_curve",
    "url_decode",
    "url_encode",
    "validate_base58_address",
]
