"""Fixed-precision decimal amounts as written in a Solana Pay URL.

Amounts are kept exactly as the merchant wrote them. Nothing is converted
to float, and the count of fractional digits (leading zeroes included) is
preserved so wallets can reject amounts finer than the token supports.
"""

import re
from dataclasses import dataclass

from .errors import ErrorCode, SolanaPayError

U64_MAX = 2**64 - 1
_U64_MAX_DIGITS = len(str(U64_MAX))

_DIGITS = re.compile(r"[0-9]+")


def _parse_u64(digits: str, text: str) -> int:
    if not _DIGITS.fullmatch(digits):
        raise SolanaPayError(ErrorCode.INVALID_NUMBER, f"not a decimal number: {text!r}")
    # Bound the length before int() so huge literals never reach the conversion limit
    significant = digits.lstrip("0")
    if len(significant) > _U64_MAX_DIGITS:
        raise SolanaPayError(ErrorCode.INVALID_NUMBER, f"number overflows u64: {text!r}")
    value = int(significant or "0")
    if value > U64_MAX:
        raise SolanaPayError(ErrorCode.INVALID_NUMBER, f"number overflows u64: {text!r}")
    return value


@dataclass(frozen=True)
class Number:
    """A non-negative decimal number with an optional fractional part."""

    integral: int = 0
    fractional: int = 0  # digits after the point, read as an integer literal
    leading_zero_count: int = 0
    significant_digit_count: int = 0
    as_string: str = ""

    @property
    def total_fractional_digit_count(self) -> int:
        return self.leading_zero_count + self.significant_digit_count

    @classmethod
    def parse(cls, text: str) -> "Number":
        """Parse a number that may contain a fractional part.

        Args:
            text: Decimal literal such as ``"1"``, ``"0.01"`` or ``"12.500"``.

        Returns:
            The parsed Number.

        Raises:
            SolanaPayError: INVALID_NUMBER on an empty string, a missing side
                of the decimal point, more than one point, non-digit
                characters, or a part that does not fit in 64 bits.
        """
        if "." not in text:
            return cls(integral=_parse_u64(text, text), as_string=text)

        str_integral, str_fractional = text.split(".", 1)
        if "." in str_fractional:
            raise SolanaPayError(ErrorCode.INVALID_NUMBER, f"more than one decimal point: {text!r}")

        integral = _parse_u64(str_integral, text)
        fractional = _parse_u64(str_fractional, text)

        leading_zero_count = len(str_fractional) - len(str_fractional.lstrip("0"))

        return cls(
            integral=integral,
            fractional=fractional,
            leading_zero_count=leading_zero_count,
            significant_digit_count=len(str_fractional) - leading_zero_count,
            as_string=text,
        )

    def check_decimals(self, ceiling: int, code: ErrorCode) -> None:
        """Raise ``code`` if the number has more fractional digits than ``ceiling``."""
        if self.total_fractional_digit_count > ceiling:
            raise SolanaPayError(
                code,
                f"{self.as_string} has {self.total_fractional_digit_count} decimals, max {ceiling}",
            )

    def to_atomic_units(self, decimals: int) -> int:
        """Convert to base units (lamports or token units) without rounding.

        Args:
            decimals: Decimal places of the mint (9 for native SOL).

        Returns:
            The amount as an integer count of base units.

        Raises:
            SolanaPayError: If the number has more fractional digits than
                ``decimals``.
        """
        self.check_decimals(decimals, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION)
        scale = decimals - self.total_fractional_digit_count
        return self.integral * 10**decimals + self.fractional * 10**scale

    def __str__(self) -> str:
        return self.as_string
