"""Decision Packet Assembler.

The code-enforced half of the referee step: combines consolidated
evidence with an untrusted draft rubric and returns the final rubric,
decision, reasons and coverage warnings.

Order is fixed: consolidate → evidence strength → total → kill rules.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..config import Settings, get_settings
from ..schemas.decision_schema import DecisionOutcome
from ..schemas.evidence_schema import CompetitorRecord, EvidenceRecord
from ..schemas.rubric_schema import Decision, FinalRubric, RubricScores
from .credibility import DomainCredibilityTable
from .decision_engine import (
    apply_kill_rules,
    coerce_decision,
    coerce_draft_scores,
    compute_total,
    evidence_strength,
)
from .evidence_consolidator import EvidenceConsolidator, consolidate_competitors

logger = logging.getLogger(__name__)


def coverage_warnings(
    evidence_count: int,
    competitor_count: int,
    unique_domain_count: int,
    settings: Optional[Settings] = None,
) -> list[str]:
    """Soft warnings for thin research.  They never change the decision."""
    settings = settings or get_settings()
    warnings: list[str] = []
    if evidence_count < settings.evidence_target:
        warnings.append(
            f"Evidence count ({evidence_count}) below target of {settings.evidence_target}."
        )
    if competitor_count < settings.competitor_target:
        warnings.append(
            f"Competitor count ({competitor_count}) below target of {settings.competitor_target}."
        )
    if unique_domain_count < settings.domain_diversity_min:
        warnings.append(
            f"Domain diversity ({unique_domain_count}) below minimum of {settings.domain_diversity_min}."
        )
    return warnings


def _draft_reasons(draft: Mapping[str, Any], extra: Iterable[Any]) -> list[str]:
    reasons = draft.get("reasons")
    collected = [str(r) for r in reasons] if isinstance(reasons, (list, tuple)) else []
    collected.extend(str(r) for r in extra)
    return collected


def assemble_decision(
    evidence: Sequence[EvidenceRecord],
    draft_rubric: Optional[Mapping[str, Any]],
    wedge_option_count: int,
    competitors: Sequence[CompetitorRecord] = (),
    draft_decision: Optional[Any] = None,
    draft_reasons: Iterable[Any] = (),
    table: Optional[DomainCredibilityTable] = None,
    settings: Optional[Settings] = None,
) -> DecisionOutcome:
    """Build the final rubric and decision from evidence and a draft.

    Parameters
    ----------
    evidence : sequence of EvidenceRecord
        Raw (unconsolidated) evidence; consolidated here.
    draft_rubric : mapping
        Untrusted draft with the seven supplied dimensions and optionally
        ``decision`` / ``reasons``.  Draft ``evidenceStrength`` and
        ``total`` are ignored.
    wedge_option_count : int
        Number of proposed differentiation strategies.
    draft_decision : optional
        Overrides ``draft_rubric["decision"]``; defaults to UNCLEAR.
    """
    draft = draft_rubric if isinstance(draft_rubric, Mapping) else {}

    consolidated = EvidenceConsolidator(table).consolidate(evidence)
    unique_competitors = consolidate_competitors(competitors)

    supplied = coerce_draft_scores(draft)
    strength = evidence_strength(consolidated.records, table)
    scores = RubricScores(**supplied, evidence_strength=strength)
    total = compute_total(supplied, strength)

    suggested = coerce_decision(
        draft_decision if draft_decision is not None else draft.get("decision", Decision.UNCLEAR)
    )
    evidence_count = len(consolidated.records)
    kill = apply_kill_rules(scores, max(0, int(wedge_option_count)), evidence_count, suggested)

    reasons = _draft_reasons(draft, draft_reasons)
    if kill.overridden:
        reasons = kill.override_reasons + reasons

    rubric = FinalRubric(
        **scores.model_dump(),
        total=total,
        decision=kill.decision,
        reasons=reasons,
    )
    warnings = coverage_warnings(
        evidence_count,
        len(unique_competitors),
        consolidated.unique_domain_count,
        settings,
    )

    logger.info(
        "[DECISION] %s (score %d/40, evidence_strength=%d, overridden=%s)",
        rubric.decision.value, total, strength, kill.overridden,
    )
    return DecisionOutcome(
        rubric=rubric,
        evidence=consolidated.records,
        competitors=unique_competitors,
        unique_domain_count=consolidated.unique_domain_count,
        removed_count=consolidated.removed_count,
        kill_rules=kill,
        warnings=warnings,
    )
