from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class Decision(str, Enum):
    """Terminal states of a vetting run."""

    GO = "GO"
    NO_GO = "NO_GO"
    UNCLEAR = "UNCLEAR"


class WedgeOption(BaseModel):
    """A proposed differentiation strategy.  The core only counts these."""

    wedge: str
    why_works: str = Field(default="", alias="whyWorks")
    mvp: str = ""

    class Config:
        populate_by_name = True


class RubricScores(BaseModel):
    """The 8-dimension scoring vector, every dimension an int in [0, 5].

    ``evidence_strength`` is always computed by the Decision Engine from
    consolidated evidence and never taken from an upstream draft.
    """

    pain_intensity: int = Field(..., ge=0, le=5, alias="painIntensity")
    frequency: int = Field(..., ge=0, le=5)
    buyer_clarity: int = Field(..., ge=0, le=5, alias="buyerClarity")
    budget_signal: int = Field(..., ge=0, le=5, alias="budgetSignal")
    switching_cost: int = Field(..., ge=0, le=5, alias="switchingCost")
    competition: int = Field(
        ...,
        ge=0,
        le=5,
        description="Higher means less crowded; <= 1 is a saturated market",
    )
    distribution_feasibility: int = Field(
        ..., ge=0, le=5, alias="distributionFeasibility"
    )
    evidence_strength: int = Field(..., ge=0, le=5, alias="evidenceStrength")

    class Config:
        populate_by_name = True


class FinalRubric(RubricScores):
    """Rubric with the code-computed total and the enforced decision."""

    total: int = Field(..., ge=0, le=40)
    decision: Decision
    reasons: List[str] = Field(default_factory=list)


class KillRuleResult(BaseModel):
    """Outcome of ``apply_kill_rules``.  Created fresh on every call."""

    decision: Decision
    overridden: bool = False
    override_reasons: List[str] = Field(default_factory=list, alias="overrideReasons")

    class Config:
        populate_by_name = True
