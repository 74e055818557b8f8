# text_analytics_actions.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple

from azure.ai.textanalytics import (
    AbstractiveSummaryAction,
    AnalyzeSentimentAction,
    ExtractiveSummaryAction,
    RecognizeEntitiesAction,
    RecognizeLinkedEntitiesAction,
    RecognizePiiEntitiesAction,
)

# The service rejects extractive summarization on very short documents.
EXTRACTIVE_SUMMARY_MIN_LENGTH = 40


class ActionKind(Enum):
    SENTIMENT_ANALYSIS = "SentimentAnalysis"
    ABSTRACTIVE_SUMMARIZE = "AbstractiveSummarize"
    EXTRACTIVE_SUMMARIZE = "ExtractiveSummarize"
    ENTITY_RECOGNITION = "EntityRecognition"
    LINKED_ENTITY_RECOGNITION = "LinkedEntityRecognition"
    PII_ENTITY_RECOGNITION = "PiiEntityRecognition"


class Operation(Enum):
    ANALYZE_SENTIMENT = "analyze_sentiment"
    SUMMARIZE = "summarize_text"
    IDENTIFY_ENTITIES = "identify_entities"
    IDENTIFY_SENSITIVE_INFORMATION = "identify_sensitive_information"
    SUMMARIZE_WITH_EXTRACTS = "summarize_text_with_extracts"


_ACTION_FACTORIES: Dict[ActionKind, Callable[[], object]] = {
    ActionKind.SENTIMENT_ANALYSIS: AnalyzeSentimentAction,
    ActionKind.ABSTRACTIVE_SUMMARIZE: AbstractiveSummaryAction,
    ActionKind.EXTRACTIVE_SUMMARIZE: ExtractiveSummaryAction,
    ActionKind.ENTITY_RECOGNITION: RecognizeEntitiesAction,
    ActionKind.LINKED_ENTITY_RECOGNITION: RecognizeLinkedEntitiesAction,
    ActionKind.PII_ENTITY_RECOGNITION: RecognizePiiEntitiesAction,
}


@dataclass(frozen=True)
class OperationPlan:
    """Action kinds an operation always sends, plus kinds gated on text length.

    A conditional entry ``(kind, n)`` is included only when ``len(text) > n``.
    """
    actions: Tuple[ActionKind, ...]
    conditional: Tuple[Tuple[ActionKind, int], ...] = ()


PLANS: Dict[Operation, OperationPlan] = {
    Operation.ANALYZE_SENTIMENT: OperationPlan(actions=(ActionKind.SENTIMENT_ANALYSIS,)),
    Operation.SUMMARIZE: OperationPlan(actions=(ActionKind.ABSTRACTIVE_SUMMARIZE,)),
    # plain entities come first so linked entities overwrite them when merged
    Operation.IDENTIFY_ENTITIES: OperationPlan(
        actions=(ActionKind.ENTITY_RECOGNITION, ActionKind.LINKED_ENTITY_RECOGNITION),
    ),
    Operation.IDENTIFY_SENSITIVE_INFORMATION: OperationPlan(actions=(ActionKind.PII_ENTITY_RECOGNITION,)),
    Operation.SUMMARIZE_WITH_EXTRACTS: OperationPlan(
        actions=(ActionKind.ABSTRACTIVE_SUMMARIZE,),
        conditional=((ActionKind.EXTRACTIVE_SUMMARIZE, EXTRACTIVE_SUMMARY_MIN_LENGTH),),
    ),
}


@dataclass(frozen=True)
class AnalysisRequest:
    document: str
    kinds: Tuple[ActionKind, ...]

    def actions(self) -> List[object]:
        """SDK action objects, in the same order as ``kinds``."""
        return [_ACTION_FACTORIES[k]() for k in self.kinds]


def build_request(operation: Operation, text: str) -> AnalysisRequest:
    plan = PLANS[operation]
    kinds = list(plan.actions)
    for kind, min_length in plan.conditional:
        if len(text) > min_length:
            kinds.append(kind)
    return AnalysisRequest(document=text, kinds=tuple(kinds))
