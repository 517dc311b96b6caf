"""Error types raised while parsing or building Solana Pay URLs."""

from enum import Enum


class ErrorCode(str, Enum):
    """Every condition a Solana Pay URL can be rejected for."""

    # URL shape
    INVALID_SOLANA_PAY_SCHEME = "invalid_solana_pay_scheme"
    EMPTY_RECIPIENT = "empty_recipient"
    TOO_MANY_URL_PARTS = "too_many_url_parts"
    INVALID_QUERY_PARAM = "invalid_query_param"
    UNSUPPORTED_QUERY_PARAM = "unsupported_query_param"

    # Field semantics
    INVALID_NUMBER = "invalid_number"
    NUMBER_OF_DECIMALS_EXCEEDS_9 = "number_of_decimals_exceeds_9"
    NUMBER_OF_DECIMALS_EXCEEDS_MINT_CONFIGURATION = "number_of_decimals_exceeds_mint_configuration"
    TOO_MANY_REFERENCES = "too_many_references"
    AMOUNT_ALREADY_EXISTS = "amount_already_exists"
    SPL_TOKEN_ALREADY_EXISTS = "spl_token_already_exists"
    LABEL_ALREADY_EXISTS = "label_already_exists"
    MESSAGE_ALREADY_EXISTS = "message_already_exists"
    MEMO_ALREADY_EXISTS = "memo_already_exists"

    # Public keys and references
    INVALID_BASE58_STR = "invalid_base58_str"
    INVALID_ED25519_PUBLIC_KEY = "invalid_ed25519_public_key"
    EXPECTED_RECIPIENT_ON_CURVE = "expected_recipient_public_key_on_curve"
    EXPECTED_RECIPIENT_OFF_CURVE = "expected_recipient_public_key_off_curve"

    # Free text
    INVALID_URL_ENCODED_STRING = "invalid_url_encoded_string"


class SolanaPayError(ValueError):
    """Raised when a Solana Pay URL or one of its fields is invalid.

    Attributes:
        code: The ErrorCode identifying the failed check.
    """

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        super().__init__(f"{code.value}: {message}" if message else code.value)
