from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .evidence_schema import CompetitorRecord, EvidenceRecord
from .rubric_schema import FinalRubric, KillRuleResult, WedgeOption


class DecisionOutcome(BaseModel):
    """Everything the downstream report / persistence consumer needs."""

    rubric: FinalRubric
    evidence: List[EvidenceRecord] = Field(default_factory=list)
    competitors: List[CompetitorRecord] = Field(default_factory=list)
    unique_domain_count: int = Field(..., ge=0, alias="uniqueDomainCount")
    removed_count: int = Field(..., ge=0, alias="removedCount")
    kill_rules: KillRuleResult = Field(..., alias="killRules")
    warnings: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class DecisionRequest(BaseModel):
    """Request body for ``POST /decide``.

    ``draft_rubric`` comes from a model-assisted step and is accepted as
    arbitrary JSON: values are coerced and clamped, never rejected.
    """

    evidence: List[EvidenceRecord] = Field(default_factory=list)
    competitors: List[CompetitorRecord] = Field(default_factory=list)
    wedge_options: List[WedgeOption] = Field(default_factory=list, alias="wedgeOptions")
    wedge_option_count: Optional[int] = Field(
        default=None,
        ge=0,
        alias="wedgeOptionCount",
        description="Overrides len(wedge_options) when the caller only has a count",
    )
    draft_rubric: Dict[str, Any] = Field(
        default_factory=dict,
        alias="draftRubric",
        description="Seven rubric dimensions plus optional decision and reasons",
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "evidence": [
                    {
                        "url": "https://www.g2.com/products/acme/reviews",
                        "sourceType": "review",
                        "quote": "Reconciling invoices takes our team two days a month.",
                        "theme": "time cost",
                        "sentiment": "negative",
                        "credibility": 3,
                    }
                ],
                "wedgeOptions": [
                    {"wedge": "Freelancers first", "whyWorks": "Underserved", "mvp": "CSV import"}
                ],
                "draftRubric": {
                    "painIntensity": 4,
                    "frequency": 3,
                    "buyerClarity": 3,
                    "budgetSignal": 2,
                    "switchingCost": 3,
                    "competition": 2,
                    "distributionFeasibility": 3,
                    "decision": "GO",
                    "reasons": ["Clear recurring pain"],
                },
            }
        }


class DecisionResponse(BaseModel):
    """Response body for ``POST /decide``."""

    success: bool
    outcome: DecisionOutcome


class CredibilityRequest(BaseModel):
    urls: List[str] = Field(..., max_length=500)


class CredibilityResponse(BaseModel):
    tiers: Dict[str, int]
