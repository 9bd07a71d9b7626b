from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Sentiment = Literal["positive", "negative", "neutral", "mixed"]


class EvidenceRecord(BaseModel):
    """One quoted, sourced data point for or against the opportunity.

    Produced by an upstream research step.  ``credibility`` is advisory on
    the way in: the Evidence Consolidator overwrites it with the tier of
    the source domain.
    """

    url: str = Field(..., description="Source URL; may be malformed")
    title: Optional[str] = Field(default=None)
    source_type: str = Field(
        ...,
        alias="sourceType",
        description="Free-text tag, e.g. review, forum, article",
    )
    quote: str = Field(..., description="Verbatim quote from the source")
    theme: str = Field(..., description="Free-text theme tag")
    sentiment: Sentiment
    credibility: int = Field(
        default=2,
        ge=1,
        le=5,
        description="1 = listicle / spam, 5 = review or research platform",
    )

    class Config:
        populate_by_name = True


class CompetitorRecord(BaseModel):
    """A competitor surfaced by the research step."""

    name: str
    url: Optional[str] = None
    positioning: str = ""
    pricing_signals: Optional[str] = Field(default=None, alias="pricingSignals")
    complaints: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class ConsolidationResult(BaseModel):
    """Output of ``EvidenceConsolidator.consolidate``."""

    records: List[EvidenceRecord] = Field(default_factory=list)
    unique_domain_count: int = Field(
        ...,
        ge=0,
        alias="uniqueDomainCount",
        description="Distinct hostnames (www. stripped) among surviving records",
    )
    removed_count: int = Field(
        ...,
        ge=0,
        alias="removedCount",
        description="Records dropped or collapsed into an existing URL slot",
    )

    class Config:
        populate_by_name = True
