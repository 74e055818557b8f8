# demo_client.py
from __future__ import annotations

import asyncio
import sys
from typing import Any, Dict, Iterable

from fastmcp import Client

TOOLS = (
    "analyze_sentiment",
    "summarize_text",
    "identify_entities",
    "identify_sensitive_information",
    "summarize_text_with_extracts",
)

DEFAULT_URL = "http://127.0.0.1:8000/mcp"


async def analyze(target: Any, text: str, tools: Iterable[str] = TOOLS) -> Dict[str, str]:
    """Call each text tool on `target` (URL or FastMCP server) and collect the text replies."""
    out: Dict[str, str] = {}
    async with Client(target) as c:
        for name in tools:
            result = await c.call_tool(name, {"text": text})
            out[name] = "".join(getattr(part, "text", "") for part in result.content)
    return out


async def main() -> None:
    text = " ".join(sys.argv[1:]) or (
        "Microsoft was founded by Bill Gates and Paul Allen in Albuquerque. "
        "Call me at 555-0100 if the launch slips again, I am not happy about it."
    )
    for name, reply in (await analyze(DEFAULT_URL, text)).items():
        print(f"== {name}\n{reply}")

if __name__ == "__main__":
    asyncio.run(main())
