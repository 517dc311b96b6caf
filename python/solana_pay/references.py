"""Reference values attached to a Solana Pay transfer request.

A reference is an opaque 32 byte value added to the payment transaction as a
read-only account, so the transaction can later be located with
``getSignaturesForAddress``. References may be used as unguessable client
IDs, so they compare in constant time and never print their raw value.
"""

import hmac

from blake3 import blake3

from .constants import PUBLIC_KEY_LENGTH
from .errors import ErrorCode, SolanaPayError
from .utils import RandomBytes, from_base58, to_base58


class Reference:
    """A 32 byte reference. Not required to be a point on the curve."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes):
        if len(data) != PUBLIC_KEY_LENGTH:
            raise SolanaPayError(
                ErrorCode.INVALID_ED25519_PUBLIC_KEY,
                f"reference must be {PUBLIC_KEY_LENGTH} bytes, got {len(data)}",
            )
        self._data = bytes(data)

    @classmethod
    def new(cls) -> "Reference":
        """Create a fresh reference from a cryptographically secure source."""
        with RandomBytes(PUBLIC_KEY_LENGTH) as random:
            return cls(random.expose())

    @classmethod
    def from_base58(cls, base58_str: str) -> "Reference":
        return cls(from_base58(base58_str))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Reference":
        return cls(data)

    def expose(self) -> bytes:
        return self._data

    def to_base58(self) -> str:
        return to_base58(self._data)

    def to_hash(self) -> bytes:
        """BLAKE3 digest of the reference, safe to log."""
        return blake3(self._data).digest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return hmac.compare_digest(self._data, other._data)

    def __hash__(self) -> int:
        return hash(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __str__(self) -> str:
        return self.to_hash().hex()

    def __repr__(self) -> str:
        return f"Reference({self.to_hash().hex()})"
