# text_analytics_results.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AsyncIterable, Dict, List, Tuple

from text_analytics_actions import ActionKind
from text_analytics_errors import DocumentFailed, Failure, FailureKind, document_failure
from text_analytics_operation import ActionResultPage

log = logging.getLogger(__name__)

NO_ENTITIES = "No entities were found in the text."
NO_SENSITIVE_INFORMATION = "No sensitive information was found."
KEY_SENTENCES_HEADER = "Key sentences in the text:"


@dataclass(frozen=True)
class SentimentOutcome:
    label: str
    positive: float
    negative: float
    neutral: float

    def describe(self) -> str:
        return (
            f"The text has an overall sentiment of {self.label}."
            f"It is {self.positive:.0%} likely the sentiment was positive, "
            f"{self.negative:.0%} likely the sentiment was negative, "
            f"and {self.neutral:.0%} likely the sentiment was neutral."
        )


@dataclass
class EntityOutcome:
    entities: Dict[str, str] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)


def _error_line(prefix: str, doc) -> str:
    return document_failure(prefix, doc).message + "\n"


# -----------------------------------------------------------------------------
# Sentiment
# -----------------------------------------------------------------------------

async def collect_sentiment(pages: AsyncIterable[ActionResultPage]) -> SentimentOutcome:
    outcome = None
    async for page in pages:
        for doc in page.of_kind(ActionKind.SENTIMENT_ANALYSIS):
            if doc.is_error:
                raise DocumentFailed(document_failure("Could not analyze sentiment", doc))
            if outcome is None:
                scores = doc.confidence_scores
                outcome = SentimentOutcome(
                    label=str(doc.sentiment),
                    positive=scores.positive,
                    negative=scores.negative,
                    neutral=scores.neutral,
                )
    if outcome is None:
        raise DocumentFailed(Failure(
            kind=FailureKind.DOCUMENT,
            message="Could not analyze sentiment: the service returned no result for the text",
        ))
    return outcome


def format_sentiment(outcome: SentimentOutcome) -> str:
    # Callers only get the label; the full description goes to the log.
    log.debug(outcome.describe())
    return outcome.label


# -----------------------------------------------------------------------------
# Summaries
# -----------------------------------------------------------------------------

async def collect_summary(pages: AsyncIterable[ActionResultPage]) -> str:
    out: List[str] = []
    async for page in pages:
        for doc in page.of_kind(ActionKind.ABSTRACTIVE_SUMMARIZE):
            if doc.is_error:
                out.append(_error_line("Summarization failed", doc))
                continue
            out.extend(s.text + "\n" for s in doc.summaries)
    return "".join(out)


async def collect_summary_with_extracts(pages: AsyncIterable[ActionResultPage]) -> str:
    out: List[str] = []
    async for page in pages:
        for doc in page.of_kind(ActionKind.ABSTRACTIVE_SUMMARIZE):
            if doc.is_error:
                out.append(_error_line("Abstractive summarization failed", doc))
                continue
            out.extend(s.text + "\n" for s in doc.summaries)

        for doc in page.of_kind(ActionKind.EXTRACTIVE_SUMMARIZE):
            if doc.is_error:
                out.append(_error_line("Extractive summarization failed", doc))
                continue
            sentences = list(doc.sentences)
            if sentences:
                out.append(KEY_SENTENCES_HEADER + "\n")
                out.extend(s.text + "\n" for s in sentences)
    return "".join(out)


# -----------------------------------------------------------------------------
# Entities
# -----------------------------------------------------------------------------

async def collect_entities(pages: AsyncIterable[ActionResultPage]) -> EntityOutcome:
    """
    Merge plain and linked entities into one mapping.
    Plain entities map text -> category; linked entities are applied afterwards
    and map name -> url, replacing any plain entry with the same key.
    """
    outcome = EntityOutcome()
    async for page in pages:
        for doc in page.of_kind(ActionKind.ENTITY_RECOGNITION):
            if doc.is_error:
                outcome.errors.append(_error_line("Entity recognition failed", doc))
                continue
            for entity in doc.entities:
                outcome.entities[entity.text] = str(entity.category)

        for doc in page.of_kind(ActionKind.LINKED_ENTITY_RECOGNITION):
            if doc.is_error:
                outcome.errors.append(_error_line("Linked entity recognition failed", doc))
                continue
            for entity in doc.entities:
                outcome.entities[entity.name] = str(entity.url)
    return outcome


def format_entities(outcome: EntityOutcome) -> str:
    errors = "".join(outcome.errors)
    if not outcome.entities:
        return errors + NO_ENTITIES
    lines = ["Entities found:\n"]
    lines.extend(f"{k}: {v}\n" for k, v in outcome.entities.items())
    return "".join(lines) + errors


# -----------------------------------------------------------------------------
# Sensitive information
# -----------------------------------------------------------------------------

async def collect_pii(pages: AsyncIterable[ActionResultPage]) -> List[Tuple[str, str]]:
    """(text, category) for every PII entity. The first per-document error aborts."""
    entries: List[Tuple[str, str]] = []
    async for page in pages:
        for doc in page.of_kind(ActionKind.PII_ENTITY_RECOGNITION):
            if doc.is_error:
                raise DocumentFailed(document_failure("Pii entity recognition failed", doc))
            entries.extend((e.text, str(e.category)) for e in doc.entities)
    return entries


def format_pii(entries: List[Tuple[str, str]]) -> str:
    if not entries:
        return NO_SENSITIVE_INFORMATION
    lines = ["Sensitive information found:\n"]
    lines.extend(f"- {text} ({category})\n" for text, category in entries)
    return "".join(lines)
