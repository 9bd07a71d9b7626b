# Schemas package
from .evidence_schema import CompetitorRecord, ConsolidationResult, EvidenceRecord, Sentiment
from .rubric_schema import Decision, FinalRubric, KillRuleResult, RubricScores, WedgeOption
from .decision_schema import (
    CredibilityRequest,
    CredibilityResponse,
    DecisionOutcome,
    DecisionRequest,
    DecisionResponse,
)

__all__ = [
    "EvidenceRecord",
    "CompetitorRecord",
    "ConsolidationResult",
    "Sentiment",
    "Decision",
    "WedgeOption",
    "RubricScores",
    "FinalRubric",
    "KillRuleResult",
    "DecisionOutcome",
    "DecisionRequest",
    "DecisionResponse",
    "CredibilityRequest",
    "CredibilityResponse",
]
