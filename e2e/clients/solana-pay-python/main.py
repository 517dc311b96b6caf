"""Solana Pay URL E2E Client.

Parses a Solana Pay URL, looking up the spl-token mint's decimals over RPC,
and outputs a structured JSON result for the e2e test framework to parse.
"""

import asyncio
import json
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Get environment variables
rpc_url = os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")
solana_pay_url = os.getenv("SOLANA_PAY_URL", "")

if not solana_pay_url:
    result = {
        "success": False,
        "error": "Missing required environment variable: SOLANA_PAY_URL",
    }
    print(json.dumps(result))
    sys.exit(1)


async def main() -> dict:
    """Parse the URL with an RPC-backed mint lookup. Returns the e2e result dict."""
    from solana.rpc.async_api import AsyncClient
    from solders.pubkey import Pubkey

    from solana_pay import SolanaPayError, SolanaPayUrl

    async with AsyncClient(rpc_url) as client:

        async def mint_decimals(mint: bytes) -> int:
            supply = await client.get_token_supply(Pubkey.from_bytes(mint))
            return supply.value.decimals

        try:
            parsed = await SolanaPayUrl.parse_async(solana_pay_url, mint_decimals)
        except SolanaPayError as e:
            return {"success": False, "error": e.code.value, "detail": str(e)}

    return {
        "success": True,
        "data": {
            "recipient": parsed.recipient.to_base58(),
            "amount": str(parsed.amount) if parsed.amount is not None else None,
            "splToken": parsed.spl_token.to_base58() if parsed.spl_token is not None else None,
            "mintDecimals": parsed.mint_decimals,
            "references": [r.to_base58() for r in parsed.references],
            "label": parsed.label,
            "message": parsed.message,
            "memo": parsed.memo,
            "url": parsed.to_url(),
        },
    }


if __name__ == "__main__":
    e2e_result = asyncio.run(main())
    print(json.dumps(e2e_result))
    sys.exit(0 if e2e_result.get("success") else 1)
