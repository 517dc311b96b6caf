"""Unit tests for fixed-precision amounts."""

import pytest

from solana_pay.errors import ErrorCode, SolanaPayError
from solana_pay.number import U64_MAX, Number


class TestNumberParse:
    """Test Number.parse on valid literals."""

    def test_integral_only(self):
        """Whole numbers have no fractional part."""
        parsed = Number.parse("1")

        assert parsed == Number(integral=1, as_string="1")
        assert parsed.fractional == 0
        assert parsed.total_fractional_digit_count == 0

    def test_fractional_only(self):
        """0.1 has one significant fractional digit."""
        parsed = Number.parse("0.1")

        assert parsed.integral == 0
        assert parsed.fractional == 1
        assert parsed.leading_zero_count == 0
        assert parsed.significant_digit_count == 1
        assert parsed.total_fractional_digit_count == 1

    def test_with_leading_zeroes(self):
        """Leading zeroes of the fractional part are counted separately."""
        parsed = Number.parse("0.001")

        assert parsed.integral == 0
        assert parsed.fractional == 1
        assert parsed.leading_zero_count == 2
        assert parsed.significant_digit_count == 1
        assert parsed.as_string == "0.001"

    def test_trailing_zeroes_are_significant(self):
        """Trailing zeroes count towards the digits the merchant wrote."""
        parsed = Number.parse("1.500")

        assert parsed.fractional == 500
        assert parsed.significant_digit_count == 3
        assert parsed.total_fractional_digit_count == 3

    def test_significant_digit_count(self):
        assert Number.parse("146785").significant_digit_count == 0
        assert Number.parse("0.146785").significant_digit_count == 6

    def test_zero(self):
        assert Number.parse("0").integral == 0

    def test_u64_max(self):
        assert Number.parse(str(U64_MAX)).integral == U64_MAX

    def test_str_is_original_literal(self):
        assert str(Number.parse("00.0100")) == "00.0100"


class TestNumberParseErrors:
    """Test Number.parse rejections."""

    @pytest.mark.parametrize(
        "text",
        ["", "1.", ".1", ".", "1.1.", "1.1.1", "..", "-1", "+1", "1e9", " 1", "1,000", "1_000", "abc", "١"],
    )
    def test_invalid_number(self, text):
        """Malformed literals raise INVALID_NUMBER."""
        with pytest.raises(SolanaPayError) as exc_info:
            Number.parse(text)
        assert exc_info.value.code == ErrorCode.INVALID_NUMBER

    def test_integral_overflow(self):
        """Integral part above u64 is rejected."""
        with pytest.raises(SolanaPayError, match="overflows"):
            Number.parse(str(U64_MAX + 1))

    def test_fractional_overflow(self):
        """Fractional part above u64 is rejected."""
        with pytest.raises(SolanaPayError, match="overflows"):
            Number.parse("0." + "9" * 20)

    def test_very_long_integral(self):
        """Literals longer than Python's int conversion limit are INVALID_NUMBER."""
        with pytest.raises(SolanaPayError) as exc_info:
            Number.parse("1" * 5000)
        assert exc_info.value.code == ErrorCode.INVALID_NUMBER

    def test_very_long_zero_fraction(self):
        """Thousands of zeroes still parse and keep their digit count."""
        parsed = Number.parse("0." + "0" * 5000)

        assert parsed.fractional == 0
        assert parsed.leading_zero_count == 5000
        assert parsed.total_fractional_digit_count == 5000

    def test_leading_zeroes_do_not_overflow(self):
        assert Number.parse("0" * 30 + "1").integral == 1

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            Number.parse("x")


class TestNumberDecimals:
    """Test decimal ceilings and atomic unit conversion."""

    def test_check_decimals_within_ceiling(self):
        Number.parse("0.123456789").check_decimals(9, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_9)

    def test_check_decimals_above_ceiling(self):
        with pytest.raises(SolanaPayError) as exc_info:
            Number.parse("0.0000000001").check_decimals(9, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_9)
        assert exc_info.value.code == ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_9

    def test_to_atomic_units_usdc(self):
        """0.01 USDC (6 decimals) is 10_000 units."""
        assert Number.parse("0.01").to_atomic_units(6) == 10_000

    def test_to_atomic_units_lamports(self):
        """1.5 SOL is 1_500_000_000 lamports."""
        assert Number.parse("1.5").to_atomic_units(9) == 1_500_000_000

    def test_to_atomic_units_leading_zeroes(self):
        assert Number.parse("12.0005").to_atomic_units(6) == 12_000_500

    def test_to_atomic_units_integral(self):
        assert Number.parse("30").to_atomic_units(6) == 30_000_000

    def test_to_atomic_units_too_precise(self):
        """More fractional digits than the mint supports is rejected."""
        with pytest.raises(SolanaPayError) as exc_info:
            Number.parse("0.0000001").to_atomic_units(6)
        assert exc_info.value.code == ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION
