# text_analytics_server.py
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import pathlib
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv
from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext

import text_analytics_plugin
from text_analytics_plugin import TextAnalyticsPlugin

log = logging.getLogger("text_analytics")


# ---------------------------------------------------------------------
# Env init: .env from the working directory upward, else next to this file
# ---------------------------------------------------------------------
def _init_env() -> None:
    try:
        dotenv_path = find_dotenv(usecwd=True)
    except OSError:
        dotenv_path = ""
    loaded = False
    if dotenv_path:
        loaded = load_dotenv(dotenv_path)
    if not loaded:
        # MCP hosts may start the server from another CWD
        script_env = pathlib.Path(__file__).resolve().parent / ".env"
        if script_env.exists():
            load_dotenv(script_env)


@dataclass(frozen=True)
class Settings:
    endpoint: str
    key: str
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _require(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise RuntimeError(f"{name} not set")
    return value


def load_settings() -> Settings:
    return Settings(
        endpoint=_require("AZURE_LANGUAGE_ENDPOINT"),
        key=_require("AZURE_LANGUAGE_KEY"),
        log_level=os.environ.get("TEXT_ANALYTICS_LOG_LEVEL", "INFO").upper(),
        log_file=os.environ.get("TEXT_ANALYTICS_LOG_FILE") or None,
    )


# ---------------------------------------------------------------------
# Logging to STDERR (safe for stdio) + optional file
# ---------------------------------------------------------------------
def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s %(message)s", "%Y-%m-%d %H:%M:%S")
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]  # stdout carries stdio transport
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for h in handlers:
        h.setFormatter(fmt)
        root.addHandler(h)


def safe_json(obj: Any) -> str:
    try:
        return json.dumps(obj, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return f"<non-serializable:{type(obj).__name__}>"


class RedactingLoggingMiddleware(Middleware):
    """Logs tool calls and results without leaking secrets or the analyzed text."""

    SENSITIVE_KEYS = {
        "password", "api_key", "key", "token", "secret", "authorization",
        "bearer", "access_token", "refresh_token",
    }
    # tool input may itself contain PII; only its size is logged
    CONTENT_KEYS = {"text"}

    @classmethod
    def _redact(cls, obj: Any) -> Any:
        if isinstance(obj, dict):
            out: Dict[str, Any] = {}
            for k, v in obj.items():
                lk = str(k).lower()
                if lk in cls.SENSITIVE_KEYS:
                    out[k] = "***MASKED***"
                elif lk in cls.CONTENT_KEYS and isinstance(v, str):
                    out[k] = f"<redacted: {len(v)} chars>"
                else:
                    out[k] = cls._redact(v)
            return out
        if isinstance(obj, list):
            return [cls._redact(x) for x in obj]
        return obj

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        message = getattr(context, "message", None)
        tool_name = getattr(message, "name", "<unknown>")
        arguments = getattr(message, "arguments", None) or {}
        log.info("⚙ calling tool: %s :: %s", tool_name, safe_json(self._redact(arguments)))

        result = await call_next(context)

        content = getattr(result, "content", None) or []
        size = sum(len(getattr(part, "text", "") or "") for part in content)
        log.info("◀ %s :: %d chars", tool_name, size)
        return result


def create_server(plugin: TextAnalyticsPlugin) -> FastMCP:
    server = FastMCP("Text Analytics MCP (Azure AI Language)")
    server.add_middleware(RedactingLoggingMiddleware())
    text_analytics_plugin.register(server, plugin)
    return server


async def serve(settings: Settings, transport: str = "stdio", host: str = "127.0.0.1", port: int = 8000) -> None:
    async with TextAnalyticsPlugin.from_endpoint(settings.endpoint, settings.key) as plugin:
        server = create_server(plugin)
        if transport == "http":
            await server.run_async(transport="http", host=host, port=port)
        else:
            await server.run_async(transport="stdio")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Serve Azure AI Language text analysis tools over MCP.")
    ap.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    args = ap.parse_args(argv)

    _init_env()
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)
    log.info("starting text analytics MCP (%s) against %s", args.transport, settings.endpoint)
    asyncio.run(serve(settings, args.transport, args.host, args.port))


if __name__ == "__main__":
    # stdio is convenient for desktop MCP hosts; use --transport http to expose /mcp
    main()
