"""Solana Pay transfer request URLs.

Structure of a URL (https://docs.solanapay.com/spec)::

    solana:<recipient>
        ?amount=<amount>
        &spl-token=<spl-token>
        &reference=<reference>
        &label=<label>
        &message=<message>
        &memo=<memo>

Parsing is strict. Unknown keys, duplicated single-value keys, malformed
amounts and invalid keys are all rejected with a SolanaPayError. Building
emits the fields in the order above, so a URL in canonical form parses and
rebuilds to the identical string.
"""

import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .constants import (
    MAX_REFERENCES,
    NATIVE_SOL_DECIMAL_COUNT,
    QUERY_AMOUNT,
    QUERY_LABEL,
    QUERY_MEMO,
    QUERY_MESSAGE,
    QUERY_REFERENCE,
    QUERY_SPL_TOKEN,
    SOLANA_SCHEME,
)
from .errors import ErrorCode, SolanaPayError
from .lookup import MintDecimalsLookup
from .number import Number
from .pubkey import PublicKey
from .references import Reference
from .utils import url_decode, url_encode

logger = logging.getLogger(__name__)

__all__ = ["SolanaPayUrl", "parse_url", "parse_url_async"]


def _to_public_key(value: PublicKey | str | bytes) -> PublicKey:
    if isinstance(value, PublicKey):
        return value
    if isinstance(value, str):
        return PublicKey.from_base58(value)
    if isinstance(value, (bytes, bytearray)):
        return PublicKey.from_bytes(value)
    raise TypeError(f"Expected PublicKey, base58 str or bytes, got {type(value).__name__}")


def _to_reference(value: Reference | str | bytes) -> Reference:
    if isinstance(value, Reference):
        return value
    if isinstance(value, str):
        return Reference.from_base58(value)
    if isinstance(value, (bytes, bytearray)):
        return Reference.from_bytes(value)
    raise TypeError(f"Expected Reference, base58 str or bytes, got {type(value).__name__}")


def _require_text(value: str, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
    return value


def _split_url(url: str) -> tuple[str, str | None]:
    """Split a URL into its recipient path and optional query."""
    if not url.startswith(SOLANA_SCHEME):
        raise SolanaPayError(ErrorCode.INVALID_SOLANA_PAY_SCHEME, f"URL must start with {SOLANA_SCHEME!r}")

    remainder = url[len(SOLANA_SCHEME):]

    if "?" in remainder:
        parts = remainder.split("?")
        if len(parts) > 2:
            raise SolanaPayError(ErrorCode.TOO_MANY_URL_PARTS, "URL contains more than one '?'")
        path, query = parts
    elif "&" in remainder:
        # Without an amount the first field follows the recipient with '&'
        path, query = remainder.split("&", 1)
    else:
        path, query = remainder, None

    if not path:
        raise SolanaPayError(ErrorCode.EMPTY_RECIPIENT, "URL has no recipient")

    return path, query


@dataclass
class SolanaPayUrl:
    """A validated Solana Pay transfer request.

    Build one with ``new``/``new_with_curve``/``new_without_curve`` and the
    ``add_*`` methods, or parse one with ``parse``/``parse_async``. Every
    single-value field can be set once; setting it again raises the field's
    ``*_ALREADY_EXISTS`` error, the same as a duplicated key in a parsed URL.
    """

    recipient: PublicKey
    amount: Number | None = None
    spl_token: PublicKey | None = None
    references: list[Reference] = field(default_factory=list)
    label: str | None = None
    message: str | None = None
    memo: str | None = None
    # Decimals of the spl-token mint, when known
    mint_decimals: int | None = field(default=None, compare=False, repr=False)

    # --- Construction ---

    @classmethod
    def new(cls, recipient: PublicKey | str | bytes) -> "SolanaPayUrl":
        """Start a request to any account, including program derived addresses."""
        return cls(recipient=_to_public_key(recipient))

    @classmethod
    def new_with_curve(cls, recipient: PublicKey | str | bytes) -> "SolanaPayUrl":
        """Start a request to a wallet address.

        The recipient must lie on the ed25519 curve so funds are never sent
        to a program derived address without the user knowing. Use ``new``
        to accept any recipient.

        Raises:
            SolanaPayError: EXPECTED_RECIPIENT_ON_CURVE for an off-curve key.
        """
        public_key = _to_public_key(recipient)
        if not public_key.is_on_curve():
            raise SolanaPayError(ErrorCode.EXPECTED_RECIPIENT_ON_CURVE, str(public_key))
        return cls(recipient=public_key)

    @classmethod
    def new_without_curve(cls, recipient: PublicKey | str | bytes) -> "SolanaPayUrl":
        """Start a request to a program derived address.

        Raises:
            SolanaPayError: EXPECTED_RECIPIENT_OFF_CURVE for an on-curve key.
        """
        public_key = _to_public_key(recipient)
        if public_key.is_on_curve():
            raise SolanaPayError(ErrorCode.EXPECTED_RECIPIENT_OFF_CURVE, str(public_key))
        return cls(recipient=public_key)

    # --- Parsing ---

    @classmethod
    def parse(cls, url: str, mint_decimals_lookup: MintDecimalsLookup) -> "SolanaPayUrl":
        """Parse and validate a Solana Pay URL.

        Args:
            url: The URL, e.g. ``solana:<recipient>?amount=1&label=Shop``.
            mint_decimals_lookup: Returns the decimals of an spl-token mint
                given its 32 bytes. Called once, only if the URL has an
                ``spl-token`` field.

        Returns:
            The parsed SolanaPayUrl.

        Raises:
            SolanaPayError: If the URL is malformed or any field is invalid.
            TypeError: If the lookup returns an awaitable; use ``parse_async``.
        """
        try:
            pay_url = cls._scan(url)
            if pay_url.spl_token is not None:
                logger.debug("Looking up decimals for mint %s", pay_url.spl_token)
                decimals = mint_decimals_lookup(bytes(pay_url.spl_token))
                if inspect.isawaitable(decimals):
                    if inspect.iscoroutine(decimals):
                        decimals.close()
                    raise TypeError("mint_decimals_lookup returned an awaitable, use parse_async")
                pay_url._apply_mint_decimals(decimals)
        except SolanaPayError as e:
            logger.debug("Rejected Solana Pay URL: %s", e.code.value)
            raise
        return pay_url

    @classmethod
    async def parse_async(cls, url: str, mint_decimals_lookup: MintDecimalsLookup) -> "SolanaPayUrl":
        """Parse and validate a Solana Pay URL, awaiting the mint lookup.

        Same as ``parse`` except the lookup may be a coroutine function. The
        lookup's own timeouts and retries are left to the caller.
        """
        try:
            pay_url = cls._scan(url)
            if pay_url.spl_token is not None:
                logger.debug("Looking up decimals for mint %s", pay_url.spl_token)
                decimals = mint_decimals_lookup(bytes(pay_url.spl_token))
                if inspect.isawaitable(decimals):
                    decimals = await decimals
                pay_url._apply_mint_decimals(decimals)
        except SolanaPayError as e:
            logger.debug("Rejected Solana Pay URL: %s", e.code.value)
            raise
        return pay_url

    @classmethod
    def _scan(cls, url: str) -> "SolanaPayUrl":
        """Tokenize the URL left to right. Mint decimals are checked later."""
        path, query = _split_url(url)
        pay_url = cls(recipient=PublicKey.from_base58(path))

        if query is not None:
            for param in query.split("&"):
                key_value = param.split("=")
                if len(key_value) != 2:
                    raise SolanaPayError(ErrorCode.INVALID_QUERY_PARAM, f"expected key=value, got {param!r}")
                pay_url._set_param(*key_value)

        if pay_url.spl_token is None and pay_url.amount is not None:
            pay_url.amount.check_decimals(NATIVE_SOL_DECIMAL_COUNT, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_9)

        return pay_url

    def _set_param(self, key: str, value: str) -> None:
        if key == QUERY_AMOUNT:
            self._set_once("amount", Number.parse(value), ErrorCode.AMOUNT_ALREADY_EXISTS)
        elif key == QUERY_SPL_TOKEN:
            self._set_once("spl_token", PublicKey.from_base58(value), ErrorCode.SPL_TOKEN_ALREADY_EXISTS)
        elif key == QUERY_REFERENCE:
            self._append_references([Reference.from_base58(value)])
        elif key == QUERY_LABEL:
            self._set_once("label", url_decode(value), ErrorCode.LABEL_ALREADY_EXISTS)
        elif key == QUERY_MESSAGE:
            self._set_once("message", url_decode(value), ErrorCode.MESSAGE_ALREADY_EXISTS)
        elif key == QUERY_MEMO:
            self._set_once("memo", url_decode(value), ErrorCode.MEMO_ALREADY_EXISTS)
        else:
            raise SolanaPayError(ErrorCode.UNSUPPORTED_QUERY_PARAM, f"unknown key {key!r}")

    def _set_once(self, name: str, value: object, code: ErrorCode) -> None:
        if getattr(self, name) is not None:
            raise SolanaPayError(code, f"{name} is already set")
        setattr(self, name, value)

    def _append_references(self, references: list[Reference]) -> None:
        if len(self.references) + len(references) > MAX_REFERENCES:
            raise SolanaPayError(
                ErrorCode.TOO_MANY_REFERENCES,
                f"{len(self.references)} present, {len(references)} more exceeds {MAX_REFERENCES}",
            )
        self.references.extend(references)

    def _apply_mint_decimals(self, decimals: int) -> None:
        self.mint_decimals = decimals
        if self.amount is not None:
            self.amount.check_decimals(decimals, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION)

    # --- Builder ---

    def add_amount(self, amount: Number | str) -> "SolanaPayUrl":
        """Set the amount in user units (SOL, not lamports).

        Checked against the 9 decimals of native SOL, or against the mint's
        decimals if an spl-token was added first.

        Raises:
            ValueError: If an spl-token is set without its mint decimals.
        """
        number = amount if isinstance(amount, Number) else Number.parse(amount)
        if self.amount is not None:
            raise SolanaPayError(ErrorCode.AMOUNT_ALREADY_EXISTS, "amount is already set")

        if self.spl_token is None:
            number.check_decimals(NATIVE_SOL_DECIMAL_COUNT, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_9)
        elif self.mint_decimals is not None:
            number.check_decimals(self.mint_decimals, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION)
        else:
            raise ValueError("spl_token decimals are unknown, set the mint with add_spl_token")

        self.amount = number
        return self

    def add_spl_token(self, spl_token: PublicKey | str | bytes, decimals: int) -> "SolanaPayUrl":
        """Set the SPL token mint, with the decimals the mint is configured with."""
        mint = _to_public_key(spl_token)
        if self.spl_token is not None:
            raise SolanaPayError(ErrorCode.SPL_TOKEN_ALREADY_EXISTS, "spl_token is already set")

        if self.amount is not None:
            self.amount.check_decimals(decimals, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION)

        self.spl_token = mint
        self.mint_decimals = decimals
        return self

    def add_spl_token_amount(
        self,
        spl_token: PublicKey | str | bytes,
        amount: Number | str,
        decimals: int,
    ) -> "SolanaPayUrl":
        """Set an SPL token mint and an amount of that token together."""
        number = amount if isinstance(amount, Number) else Number.parse(amount)
        if self.amount is not None:
            raise SolanaPayError(ErrorCode.AMOUNT_ALREADY_EXISTS, "amount is already set")
        number.check_decimals(decimals, ErrorCode.NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION)

        self.add_spl_token(spl_token, decimals)
        return self.add_amount(number)

    def add_reference(self, reference: Reference | str | bytes) -> "SolanaPayUrl":
        """Append a reference. Order is kept and duplicates are allowed."""
        self._append_references([_to_reference(reference)])
        return self

    def add_references(self, references: Iterable[Reference | str | bytes]) -> "SolanaPayUrl":
        """Append several references. A batch that does not fit is rejected whole."""
        self._append_references([_to_reference(r) for r in references])
        return self

    def dedup_references(self) -> "SolanaPayUrl":
        """Drop repeated references, keeping the first occurrence of each."""
        self.references = list(dict.fromkeys(self.references))
        return self

    def add_label(self, label: str) -> "SolanaPayUrl":
        """Set the label describing the source of the request (e.g. a store name)."""
        self._set_once("label", _require_text(label, "label"), ErrorCode.LABEL_ALREADY_EXISTS)
        return self

    def add_message(self, message: str) -> "SolanaPayUrl":
        """Set the message describing the request (e.g. an item or order ID)."""
        self._set_once("message", _require_text(message, "message"), ErrorCode.MESSAGE_ALREADY_EXISTS)
        return self

    def add_memo(self, memo: str) -> "SolanaPayUrl":
        """Set the memo to include in an SPL Memo instruction. It is public on chain."""
        self._set_once("memo", _require_text(memo, "memo"), ErrorCode.MEMO_ALREADY_EXISTS)
        return self

    # --- Serialization ---

    def to_url(self) -> str:
        """Serialize to a Solana Pay URL."""
        parts = [SOLANA_SCHEME, self.recipient.to_base58()]

        if self.amount is not None:
            parts.append(f"?{QUERY_AMOUNT}={self.amount.as_string}")
        if self.spl_token is not None:
            parts.append(f"&{QUERY_SPL_TOKEN}={self.spl_token.to_base58()}")
        for reference in self.references:
            parts.append(f"&{QUERY_REFERENCE}={reference.to_base58()}")

        for key, value in (
            (QUERY_LABEL, self.label),
            (QUERY_MESSAGE, self.message),
            (QUERY_MEMO, self.memo),
        ):
            if value is not None:
                parts.append(f"&{key}={url_encode(value)}")

        return "".join(parts)

    def __str__(self) -> str:
        return self.to_url()


def parse_url(url: str, mint_decimals_lookup: MintDecimalsLookup) -> SolanaPayUrl:
    """Parse a Solana Pay URL. See ``SolanaPayUrl.parse``."""
    return SolanaPayUrl.parse(url, mint_decimals_lookup)


async def parse_url_async(url: str, mint_decimals_lookup: MintDecimalsLookup) -> SolanaPayUrl:
    """Parse a Solana Pay URL with an async mint lookup. See ``SolanaPayUrl.parse_async``."""
    return await SolanaPayUrl.parse_async(url, mint_decimals_lookup)
