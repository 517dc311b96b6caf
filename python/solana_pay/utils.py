"""Utility functions for Solana Pay URL fields."""

import re
import secrets
from urllib.parse import unquote_to_bytes

from solders.pubkey import Pubkey  # type: ignore

from .constants import BASE58_REGEX, PUBLIC_KEY_LENGTH
from .errors import ErrorCode, SolanaPayError

_ALPHANUMERIC = frozenset(b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def from_base58(base58_str: str) -> bytes:
    """Decode a base58 string that must hold exactly 32 bytes.

    Raises:
        SolanaPayError: INVALID_BASE58_STR on characters outside the base58
            alphabet or a decoded length other than 32.
    """
    if not re.match(BASE58_REGEX, base58_str):
        raise SolanaPayError(ErrorCode.INVALID_BASE58_STR, f"not base58: {base58_str!r}")
    try:
        return bytes(Pubkey.from_string(base58_str))
    except ValueError as e:
        raise SolanaPayError(ErrorCode.INVALID_BASE58_STR, f"{base58_str!r}: {e}") from e


def to_base58(data: bytes) -> str:
    """Encode 32 bytes as base58."""
    return str(Pubkey.from_bytes(bytes(data)))


def validate_base58_address(address: str) -> bool:
    """Check whether a string is a base58 encoded 32 byte value."""
    try:
        from_base58(address)
    except SolanaPayError:
        return False
    return True


def on_edwards_curve(data: bytes) -> bool:
    """Check whether 32 bytes decompress to a point on the ed25519 curve.

    Off-curve bytes (e.g. program derived addresses) return False. Only input
    that cannot be a compressed point candidate at all is an error.

    Raises:
        SolanaPayError: INVALID_ED25519_PUBLIC_KEY if ``data`` is not 32 bytes.
    """
    if len(data) != PUBLIC_KEY_LENGTH:
        raise SolanaPayError(
            ErrorCode.INVALID_ED25519_PUBLIC_KEY,
            f"expected {PUBLIC_KEY_LENGTH} bytes, got {len(data)}",
        )
    return Pubkey.from_bytes(bytes(data)).is_on_curve()


def url_decode(value: str) -> str:
    """Percent-decode a free text field and validate it as UTF-8.

    Raises:
        SolanaPayError: INVALID_URL_ENCODED_STRING on a malformed ``%`` escape
            or bytes that are not valid UTF-8.
    """
    if _BAD_PERCENT_ESCAPE.search(value):
        raise SolanaPayError(ErrorCode.INVALID_URL_ENCODED_STRING, f"malformed percent escape in {value!r}")
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError as e:
        raise SolanaPayError(ErrorCode.INVALID_URL_ENCODED_STRING, str(e)) from e


def url_encode(value: str) -> str:
    """Percent-encode every byte of the UTF-8 text that is not ASCII alphanumeric."""
    return "".join(
        chr(byte) if byte in _ALPHANUMERIC else f"%{byte:02X}"
        for byte in value.encode("utf-8")
    )


class RandomBytes:
    """Buffer of cryptographically secure random bytes that wipes itself.

    The internal bytearray is zeroed by ``clear()``, on leaving a ``with``
    block and when the object is finalised. A wipe that cannot be verified
    raises RuntimeError rather than leaving secret bytes behind.

    Only that bytearray is covered. The immutable ``bytes`` produced by
    ``secrets.token_bytes`` while filling it, and every copy handed out by
    ``expose()``, cannot be wiped and live until garbage collected.
    """

    def __init__(self, size: int = PUBLIC_KEY_LENGTH):
        self._buffer = bytearray(size)
        self._buffer[:] = secrets.token_bytes(size)

    def __enter__(self) -> "RandomBytes":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()

    def __del__(self) -> None:
        buffer = getattr(self, "_buffer", None)
        if buffer is not None:
            self.clear()

    def __len__(self) -> int:
        return len(self._buffer)

    def expose(self) -> bytes:
        """Return a copy of the random bytes."""
        return bytes(self._buffer)

    def clear(self) -> None:
        """Zero the buffer."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0

        if any(self._buffer):
            raise RuntimeError("RandomBytes buffer could not be zeroized")

    def __repr__(self) -> str:
        return "RandomBytes(REDACTED)"

    __str__ = __repr__
