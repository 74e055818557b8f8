# text_analytics_plugin.py
from __future__ import annotations

import logging
from typing import Annotated, Any, Awaitable, Callable, Union

from azure.ai.textanalytics.aio import TextAnalyticsClient
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import HttpResponseError
from fastmcp import FastMCP

from text_analytics_actions import Operation, build_request
from text_analytics_errors import (
    DocumentFailed,
    Failure,
    classify_input_failure,
    classify_request_failure,
)
from text_analytics_operation import ActionResultStream, submit
from text_analytics_results import (
    collect_entities,
    collect_pii,
    collect_sentiment,
    collect_summary,
    collect_summary_with_extracts,
    format_entities,
    format_pii,
    format_sentiment,
)

log = logging.getLogger(__name__)

Collector = Callable[[ActionResultStream], Awaitable[str]]


class TextAnalyticsPlugin:
    """Text analysis operations backed by Azure AI Language.

    Every operation takes the text to analyze and returns a readable string;
    failures are reported in that string rather than raised.
    """

    def __init__(self, client: TextAnalyticsClient):
        self._client = client

    @classmethod
    def from_endpoint(cls, endpoint: str, key: Union[str, AzureKeyCredential]) -> "TextAnalyticsPlugin":
        credential = key if isinstance(key, AzureKeyCredential) else AzureKeyCredential(key)
        return cls(TextAnalyticsClient(endpoint=endpoint, credential=credential))

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> "TextAnalyticsPlugin":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ---- operations ----

    async def analyze_sentiment(self, text: str) -> str:
        # Only the label is returned; the confidence breakdown is logged at DEBUG.
        async def collect(stream: ActionResultStream) -> str:
            return format_sentiment(await collect_sentiment(stream))

        return await self._run(Operation.ANALYZE_SENTIMENT, text, collect)

    async def summarize_text(self, text: str) -> str:
        return await self._run(Operation.SUMMARIZE, text, collect_summary)

    async def identify_entities(self, text: str) -> str:
        async def collect(stream: ActionResultStream) -> str:
            return format_entities(await collect_entities(stream))

        return await self._run(Operation.IDENTIFY_ENTITIES, text, collect)

    async def identify_sensitive_information(self, text: str) -> str:
        async def collect(stream: ActionResultStream) -> str:
            return format_pii(await collect_pii(stream))

        return await self._run(Operation.IDENTIFY_SENSITIVE_INFORMATION, text, collect)

    async def summarize_text_with_extracts(self, text: str) -> str:
        return await self._run(Operation.SUMMARIZE_WITH_EXTRACTS, text, collect_summary_with_extracts)

    async def _run(self, operation: Operation, text: str, collect: Collector) -> str:
        request = build_request(operation, text)
        try:
            stream = await submit(self._client, request)
            return await collect(stream)
        except HttpResponseError as e:
            failure = classify_request_failure(e, operation)
        except DocumentFailed as e:
            failure = e.failure
        except ValueError as e:
            # extractive summarization raises this for text the service considers too short
            if operation is not Operation.SUMMARIZE_WITH_EXTRACTS:
                raise
            failure = classify_input_failure(e)
        return self._report(operation, failure)

    @staticmethod
    def _report(operation: Operation, failure: Failure) -> str:
        log.warning(
            "%s failed (%s, status=%s, code=%s): %s",
            operation.value, failure.kind.value, failure.status_code, failure.error_code, failure.message,
        )
        return failure.message


# -----------------------------------------------------------------------------
# Host registration
# -----------------------------------------------------------------------------

TextArg = Annotated[str, "The text to analyze"]


def register(server: FastMCP, plugin: TextAnalyticsPlugin) -> None:
    """Attach text analytics tools to the given FastMCP server."""

    @server.tool(
        name="analyze_sentiment",
        description="Given some text, return an analysis of the overall sentiment and how likely it was the sentiment was positive, negative, and neutral",
    )
    async def analyze_sentiment(text: TextArg) -> str:
        return await plugin.analyze_sentiment(text)

    @server.tool(
        name="summarize_text",
        description="Given some text, return a summarization of the text",
    )
    async def summarize_text(text: TextArg) -> str:
        return await plugin.summarize_text(text)

    @server.tool(
        name="identify_entities",
        description="Given some text, identify the entities mentioned in the text and provide additional links to each if able",
    )
    async def identify_entities(text: TextArg) -> str:
        return await plugin.identify_entities(text)

    @server.tool(
        name="identify_sensitive_information",
        description="Given some text, identify potential sensitive strings in the text",
    )
    async def identify_sensitive_information(text: TextArg) -> str:
        return await plugin.identify_sensitive_information(text)

    @server.tool(
        name="summarize_text_with_extracts",
        description="Given some text, return a summarization of the text with accompanying sentence extracts",
    )
    async def summarize_text_with_extracts(text: TextArg) -> str:
        return await plugin.summarize_text_with_extracts(text)
