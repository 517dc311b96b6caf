"""32 byte public keys used as recipient and spl-token mint."""

from dataclasses import dataclass

from solders.pubkey import Pubkey  # type: ignore

from .constants import PUBLIC_KEY_LENGTH
from .errors import ErrorCode, SolanaPayError
from .utils import from_base58, on_edwards_curve, to_base58


@dataclass(frozen=True, order=True)
class PublicKey:
    """An Ed25519 public key, or any 32 byte account address."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != PUBLIC_KEY_LENGTH:
            raise SolanaPayError(
                ErrorCode.INVALID_ED25519_PUBLIC_KEY,
                f"expected {PUBLIC_KEY_LENGTH} bytes, got {len(self.data)}",
            )

    @classmethod
    def from_base58(cls, base58_str: str) -> "PublicKey":
        return cls(from_base58(base58_str))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        return cls(bytes(data))

    def to_base58(self) -> str:
        return to_base58(self.data)

    def is_on_curve(self) -> bool:
        """Whether the key is a point on the ed25519 curve (False for PDAs)."""
        return on_edwards_curve(self.data)

    def to_solders(self) -> Pubkey:
        """Return the equivalent ``solders`` Pubkey."""
        return Pubkey.from_bytes(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"PublicKey({self.to_base58()})"
