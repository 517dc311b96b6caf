"""Tests for field codec, base58 helpers and RandomBytes."""

import pytest

from solana_pay.errors import ErrorCode, SolanaPayError
from solana_pay.utils import (
    RandomBytes,
    from_base58,
    on_edwards_curve,
    to_base58,
    url_decode,
    url_encode,
    validate_base58_address,
)

TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


# --- Field codec ---


class TestUrlEncode:
    def test_spaces(self):
        assert url_encode("Thanks for all the fish") == "Thanks%20for%20all%20the%20fish"

    def test_alphanumeric_untouched(self):
        assert url_encode("OrderId12345") == "OrderId12345"

    def test_escapes_unreserved_punctuation(self):
        """Every non-alphanumeric byte is escaped, including - _ . ~"""
        assert url_encode("a-b_c.d~e") == "a%2Db%5Fc%2Ed%7Ee"

    def test_query_delimiters(self):
        assert url_encode("a&b=c?d") == "a%26b%3Dc%3Fd"

    def test_utf8(self):
        assert url_encode("café") == "caf%C3%A9"

    def test_empty(self):
        assert url_encode("") == ""


class TestUrlDecode:
    def test_spaces(self):
        assert url_decode("Thanks%20for%20all%20the%20fish") == "Thanks for all the fish"

    def test_utf8(self):
        assert url_decode("caf%C3%A9") == "café"

    def test_lowercase_hex(self):
        assert url_decode("caf%c3%a9") == "café"

    def test_plus_is_literal(self):
        assert url_decode("a+b") == "a+b"

    def test_inverse_of_encode(self):
        text = "Pay 10 USDC & get 🐟 (50% off)"
        assert url_decode(url_encode(text)) == text

    def test_invalid_utf8(self):
        with pytest.raises(SolanaPayError) as exc_info:
            url_decode("%FF%FE")
        assert exc_info.value.code == ErrorCode.INVALID_URL_ENCODED_STRING

    @pytest.mark.parametrize("value", ["100%", "%2", "%zz", "a%G1"])
    def test_malformed_escape(self, value):
        with pytest.raises(SolanaPayError) as exc_info:
            url_decode(value)
        assert exc_info.value.code == ErrorCode.INVALID_URL_ENCODED_STRING


# --- Base58 and curve ---


class TestBase58:
    def test_roundtrip(self):
        assert to_base58(from_base58(TOKEN_PROGRAM)) == TOKEN_PROGRAM

    def test_decodes_to_32_bytes(self):
        assert len(from_base58(TOKEN_PROGRAM)) == 32

    def test_all_zero_bytes(self):
        assert to_base58(bytes(32)) == "1" * 32

    def test_rejects_wrong_length(self):
        with pytest.raises(SolanaPayError) as exc_info:
            from_base58(TOKEN_PROGRAM + "A")
        assert exc_info.value.code == ErrorCode.INVALID_BASE58_STR

    def test_validate_base58_address(self):
        assert validate_base58_address(TOKEN_PROGRAM) is True
        assert validate_base58_address("not an address") is False
        assert validate_base58_address("") is False


class TestOnEdwardsCurve:
    def test_on_curve(self):
        assert on_edwards_curve(from_base58(TOKEN_PROGRAM)) is True

    def test_off_curve(self):
        assert on_edwards_curve(from_base58("HqAi1JjEEVS6QRvNe7gC4z8pYTuKbWkdZqCuuDpZxxQW")) is False

    def test_wrong_length(self):
        with pytest.raises(SolanaPayError) as exc_info:
            on_edwards_curve(bytes(16))
        assert exc_info.value.code == ErrorCode.INVALID_ED25519_PUBLIC_KEY


# --- RandomBytes ---


class TestRandomBytes:
    def test_size(self):
        assert len(RandomBytes(32).expose()) == 32
        assert len(RandomBytes(64)) == 64

    def test_distinct(self):
        assert RandomBytes().expose() != RandomBytes().expose()

    def test_clear_zeroes_buffer(self):
        random = RandomBytes(32)
        random.clear()
        assert random.expose() == bytes(32)

    def test_context_manager_clears(self):
        with RandomBytes(32) as random:
            exposed = random.expose()
        assert len(exposed) == 32
        assert random.expose() == bytes(32)

    def test_exposed_copy_is_not_wiped(self):
        """clear() wipes the internal buffer, not bytes already handed out."""
        random = RandomBytes(32)
        exposed = random.expose()
        random.clear()
        assert random.expose() == bytes(32)
        assert len(exposed) == 32
        assert isinstance(exposed, bytes)

    def test_context_manager_clears_on_error(self):
        with pytest.raises(KeyError):
            with RandomBytes(32) as random:
                raise KeyError("boom")
        assert random.expose() == bytes(32)

    def test_redacted(self):
        random = RandomBytes(32)
        assert repr(random) == "RandomBytes(REDACTED)"
        assert str(random) == "RandomBytes(REDACTED)"
