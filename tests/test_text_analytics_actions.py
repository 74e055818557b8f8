"""Tests for request/action building"""

from azure.ai.textanalytics import (
    AbstractiveSummaryAction,
    ExtractiveSummaryAction,
    RecognizeEntitiesAction,
    RecognizeLinkedEntitiesAction,
)

from text_analytics_actions import (
    EXTRACTIVE_SUMMARY_MIN_LENGTH,
    ActionKind,
    Operation,
    build_request,
)


def test_every_operation_has_a_plan():
    for operation in Operation:
        request = build_request(operation, "Some text to analyze.")
        assert request.kinds, operation
        assert request.document == "Some text to analyze."


def test_entities_batch_plain_before_linked():
    request = build_request(Operation.IDENTIFY_ENTITIES, "Paris is in France.")
    assert request.kinds == (ActionKind.ENTITY_RECOGNITION, ActionKind.LINKED_ENTITY_RECOGNITION)
    actions = request.actions()
    assert isinstance(actions[0], RecognizeEntitiesAction)
    assert isinstance(actions[1], RecognizeLinkedEntitiesAction)


def test_sentiment_and_pii_send_single_action():
    assert build_request(Operation.ANALYZE_SENTIMENT, "x").kinds == (ActionKind.SENTIMENT_ANALYSIS,)
    assert build_request(Operation.IDENTIFY_SENSITIVE_INFORMATION, "x").kinds == (
        ActionKind.PII_ENTITY_RECOGNITION,
    )


def test_extracts_skipped_at_threshold():
    text = "a" * EXTRACTIVE_SUMMARY_MIN_LENGTH
    request = build_request(Operation.SUMMARIZE_WITH_EXTRACTS, text)
    assert request.kinds == (ActionKind.ABSTRACTIVE_SUMMARIZE,)
    assert all(not isinstance(a, ExtractiveSummaryAction) for a in request.actions())


def test_extracts_included_above_threshold():
    text = "a" * (EXTRACTIVE_SUMMARY_MIN_LENGTH + 1)
    request = build_request(Operation.SUMMARIZE_WITH_EXTRACTS, text)
    assert request.kinds == (ActionKind.ABSTRACTIVE_SUMMARIZE, ActionKind.EXTRACTIVE_SUMMARIZE)
    actions = request.actions()
    assert isinstance(actions[0], AbstractiveSummaryAction)
    assert isinstance(actions[1], ExtractiveSummaryAction)


def test_plain_summarize_never_extracts():
    request = build_request(Operation.SUMMARIZE, "a" * 500)
    assert request.kinds == (ActionKind.ABSTRACTIVE_SUMMARIZE,)


def test_actions_are_fresh_objects():
    request = build_request(Operation.SUMMARIZE, "text")
    assert request.actions()[0] is not request.actions()[0]
