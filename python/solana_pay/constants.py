"""Constants for Solana Pay transfer request URLs."""

# URL scheme, including the separator
SOLANA_SCHEME = "solana:"

# Decimal places of native SOL (1 SOL = 10^9 lamports)
NATIVE_SOL_DECIMAL_COUNT = 9

# Max reference accounts in a transaction, excluding payer and recipient
MAX_REFERENCES = 254

PUBLIC_KEY_LENGTH = 32

# Base58 alphabet (no 0, O, I, l)
BASE58_REGEX = r"^[1-9A-HJ-NP-Za-km-z]+$"

# Query parameter keys
QUERY_AMOUNT = "amount"
QUERY_SPL_TOKEN = "spl-token"
QUERY_REFERENCE = "reference"
QUERY_LABEL = "label"
QUERY_MESSAGE = "message"
QUERY_MEMO = "memo"

# Well-known mints
USDC_MAINNET_ADDRESS = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDC_DEVNET_ADDRESS = "4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU"
WRAPPED_SOL_ADDRESS = "So11111111111111111111111111111111111111112"

KNOWN_MINT_DECIMALS = {
    USDC_MAINNET_ADDRESS: 6,
    USDC_DEVNET_ADDRESS: 6,
    WRAPPED_SOL_ADDRESS: NATIVE_SOL_DECIMAL_COUNT,
}
