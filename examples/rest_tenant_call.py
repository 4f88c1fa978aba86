"""
Example: Multi-tenant REST call.

Start the listener first:

    minimax-mcp serve --mode rest --port 3000

Each request carries its own credentials in params._meta.auth; the server's
baseline key is only used when a request brings none.
"""

import asyncio
import os

import httpx
from dotenv import load_dotenv

load_dotenv()

ENDPOINT = os.getenv("MINIMAX_REST_URL", "http://localhost:3000/rest")


async def rpc(client: httpx.AsyncClient, method: str, params: dict | None = None) -> dict:
    response = await client.post(
        ENDPOINT,
        json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params or {}},
    )
    response.raise_for_status()
    return response.json()


async def main():
    async with httpx.AsyncClient(timeout=120) as client:
        tools = await rpc(client, "tools/list")
        print("Tools:", ", ".join(tool["name"] for tool in tools["result"]["tools"]))

        body = await rpc(
            client,
            "tools/call",
            {
                "name": "list_voices",
                "arguments": {"voiceType": "system"},
                "_meta": {
                    "auth": {
                        "api_key": os.environ["TENANT_API_KEY"],
                        "api_host": os.getenv("TENANT_API_HOST", "https://api.minimax.chat"),
                    }
                },
            },
        )

    result = body["result"]
    status = "error" if result["isError"] else "ok"
    print(f"\n[{status}] {result['content'][0]['text']}")


if __name__ == "__main__":
    asyncio.run(main())
