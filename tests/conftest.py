import pytest
from azure.core.exceptions import HttpResponseError

from tests.fakes import FakeTextAnalyticsClient
from text_analytics_plugin import TextAnalyticsPlugin


@pytest.fixture
def make_plugin():
    """Build a plugin around a fake client; returns (plugin, client)."""

    def _make(pages=None, error=None, result_error=None):
        client = FakeTextAnalyticsClient(pages=pages, error=error, result_error=result_error)
        return TextAnalyticsPlugin(client), client

    return _make


@pytest.fixture
def http_error():
    def _make(status, message="request failed"):
        e = HttpResponseError(message=message)
        e.status_code = status
        return e

    return _make
