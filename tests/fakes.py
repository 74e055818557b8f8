"""Stand-ins for the Azure Text Analytics async client and its result objects."""

from types import SimpleNamespace


async def _aiter(items):
    for item in items:
        yield item


class FakePoller:
    def __init__(self, pages, error=None):
        self._pages = pages
        self._error = error

    async def result(self):
        if self._error is not None:
            raise self._error
        return _aiter(self._pages)


class FakeTextAnalyticsClient:
    """Records submitted batches and replays canned per-document result lists."""

    def __init__(self, pages=None, error=None, result_error=None):
        self.pages = pages or []
        self.error = error
        self.result_error = result_error
        self.calls = []
        self.closed = False

    async def begin_analyze_actions(self, documents, actions, **kwargs):
        self.calls.append((list(documents), list(actions)))
        if self.error is not None:
            raise self.error
        return FakePoller(self.pages, self.result_error)

    async def close(self):
        self.closed = True

    @property
    def submitted_actions(self):
        return [type(a).__name__ for a in self.calls[-1][1]]


def doc_error(code="InvalidDocument", message="Document text is empty."):
    return SimpleNamespace(
        is_error=True,
        kind="DocumentError",
        error=SimpleNamespace(code=code, message=message),
    )


def sentiment(label, positive, negative, neutral):
    return SimpleNamespace(
        is_error=False,
        sentiment=label,
        confidence_scores=SimpleNamespace(positive=positive, negative=negative, neutral=neutral),
    )


def abstractive(*texts):
    return SimpleNamespace(is_error=False, summaries=[SimpleNamespace(text=t) for t in texts])


def extractive(*texts):
    return SimpleNamespace(is_error=False, sentences=[SimpleNamespace(text=t) for t in texts])


def entities(*pairs):
    return SimpleNamespace(
        is_error=False,
        entities=[SimpleNamespace(text=t, category=c) for t, c in pairs],
    )


def linked_entities(*pairs):
    return SimpleNamespace(
        is_error=False,
        entities=[SimpleNamespace(name=n, url=u) for n, u in pairs],
    )


def pii_entities(*pairs):
    return SimpleNamespace(
        is_error=False,
        entities=[SimpleNamespace(text=t, category=c) for t, c in pairs],
    )
