# text_analytics_operation.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, AsyncIterable, AsyncIterator, Iterator, Tuple

from azure.ai.textanalytics.aio import TextAnalyticsClient

from text_analytics_actions import ActionKind, AnalysisRequest

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    kind: ActionKind
    document: Any  # SDK per-document result, or DocumentError when document.is_error


@dataclass(frozen=True)
class ActionResultPage:
    """Results of every requested action for one document, in request order."""
    results: Tuple[ActionResult, ...]

    def of_kind(self, kind: ActionKind) -> Iterator[Any]:
        for r in self.results:
            if r.kind is kind:
                yield r.document


class ActionResultStream:
    """
    Lazy, finite sequence of result pages from one completed operation.
    It can be iterated once; the underlying pager cannot be restarted.
    """

    def __init__(self, request: AnalysisRequest, pages: AsyncIterable[Any]):
        self._request = request
        self._pages = pages
        self._consumed = False

    def __aiter__(self) -> AsyncIterator[ActionResultPage]:
        if self._consumed:
            raise RuntimeError("result stream has already been consumed")
        self._consumed = True
        return self._iter_pages()

    async def _iter_pages(self) -> AsyncIterator[ActionResultPage]:
        count = 0
        async for document_results in self._pages:
            count += 1
            yield ActionResultPage(
                results=tuple(
                    ActionResult(kind=kind, document=doc)
                    for kind, doc in zip(self._request.kinds, document_results)
                )
            )
        log.debug("drained %d result page(s) for %s", count, [k.value for k in self._request.kinds])


async def submit(client: TextAnalyticsClient, request: AnalysisRequest) -> ActionResultStream:
    """
    Submit a single-document batch and wait for the operation to complete.
    HttpResponseError from submission or completion propagates; there is no retry.
    """
    log.info("submitting actions %s (%d chars)", [k.value for k in request.kinds], len(request.document))
    poller = await client.begin_analyze_actions([request.document], request.actions())
    pages = await poller.result()
    return ActionResultStream(request, pages)
