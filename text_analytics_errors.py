# text_analytics_errors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from azure.core.exceptions import HttpResponseError

from text_analytics_actions import Operation

AUTH_FAILED = "Request failed due to authentication failure. The AI services key or endpoint may be misconfigured"
RATE_LIMITED = "The text could not be summarized because too many summarization requests have happened recently."
INPUT_TOO_SHORT = "Text analysis failed due to the input text. This can happen when the provided text is too short."


class FailureKind(Enum):
    TRANSPORT = "transport"
    DOCUMENT = "document"
    INPUT_SHAPE = "input_shape"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    status_code: Optional[int] = None
    error_code: Optional[str] = None


class DocumentFailed(Exception):
    """A per-document action failed and the operation does not tolerate it."""

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure


def document_failure(prefix: str, doc: Any) -> Failure:
    """Failure for a per-document error result, e.g. ``prefix: code - message``."""
    err = doc.error
    return Failure(
        kind=FailureKind.DOCUMENT,
        message=f"{prefix}: {err.code} - {err.message}",
        error_code=err.code,
    )


def classify_request_failure(e: HttpResponseError, operation: Operation) -> Failure:
    status = e.status_code
    if status == 401:
        message = AUTH_FAILED
    elif operation is Operation.ANALYZE_SENTIMENT:
        message = f"Could not analyze sentiment: {e.message}"
    elif status == 429:
        message = RATE_LIMITED
    else:
        message = f"Summarization failed: {e.message}"
    return Failure(kind=FailureKind.TRANSPORT, message=message, status_code=status)


def classify_input_failure(e: ValueError) -> Failure:
    return Failure(kind=FailureKind.INPUT_SHAPE, message=INPUT_TOO_SHORT)
