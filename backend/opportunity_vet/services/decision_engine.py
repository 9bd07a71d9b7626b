"""Deterministic Decision Engine.

Computes the one rubric dimension an upstream model must never control
(evidence strength), totals the rubric and enforces the kill rules over
the final decision.

Rules
-----
- NO API calls
- NO DB writes
- NO LLMs
- Pure functions: (rubric, wedge count, evidence count, suggestion)
  → decision + reasons; nothing persists between calls

Evidence strength
-----------------
base = min(5, count // 6)
  +1 if >= 5 distinct domains
  +1 if >= 2 records from tier-4/5 review sources
  -1 if more than 40% of records have credibility <= 1
  -1 if fewer than 10 records
clamped to [0, 5].  Quantity saturates at 30 records (base 5); the two
bonuses cannot lift a capped base any further.

Kill rules (priority order)
---------------------------
1. evidence_strength <= 1                          → NO_GO
2. distribution_feasibility <= 1                   → NO_GO
3. competition <= 1 and no wedge options           → NO_GO
4. buyer_clarity <= 1 and fewer than 10 records    → UNCLEAR
Rules 1-3 are evaluated as a batch and all their reasons surface.  Rule 4
only applies when none of them fired.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..constants import (
    DIMENSION_ALIASES,
    DOMAIN_DIVERSITY_BONUS_MIN,
    EVIDENCE_COUNT_TARGET,
    EVIDENCE_PER_POINT,
    KILL_SCORE_THRESHOLD,
    LOW_CREDIBILITY_MAX,
    LOW_CREDIBILITY_RATIO_LIMIT,
    REASON_INSUFFICIENT_EVIDENCE,
    REASON_NO_DISTRIBUTION,
    REASON_SATURATED_MARKET,
    REASON_UNCLEAR_BUYER,
    REVIEW_SOURCE_BONUS_MIN,
    SCORE_MAX,
    SCORE_MIN,
    SUPPLIED_DIMENSIONS,
    UNCLEAR_EVIDENCE_COUNT,
)
from ..schemas.evidence_schema import EvidenceRecord
from ..schemas.rubric_schema import Decision, KillRuleResult, RubricScores
from .credibility import DEFAULT_TABLE, DomainCredibilityTable, domain_of

logger = logging.getLogger(__name__)


def _clamp(value: int, lo: int = SCORE_MIN, hi: int = SCORE_MAX) -> int:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


# ===================================================================== #
#  Input coercion                                                         #
# ===================================================================== #

def coerce_score(value: Any) -> int:
    """Coerce an untrusted rubric value to an int in [0, 5].

    Numbers are rounded half-up then clamped.  Anything else (None,
    strings, booleans, NaN) becomes 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return SCORE_MIN
    if math.isnan(value):
        return SCORE_MIN
    if math.isinf(value):
        return SCORE_MAX if value > 0 else SCORE_MIN
    return _clamp(math.floor(value + 0.5))


def coerce_draft_scores(draft: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    """Pull the seven supplied dimensions out of an untrusted draft.

    Accepts snake_case or camelCase keys.  Missing keys score 0, and any
    ``evidence_strength`` / ``total`` in the draft is ignored.
    """
    if not isinstance(draft, Mapping):
        draft = {}
    scores: Dict[str, int] = {}
    for name in SUPPLIED_DIMENSIONS:
        raw = draft.get(name, draft.get(DIMENSION_ALIASES[name]))
        scores[name] = coerce_score(raw)
    return scores


def coerce_decision(value: Any) -> Decision:
    """Map an untrusted decision label to ``Decision``; unknown → UNCLEAR."""
    if isinstance(value, Decision):
        return value
    try:
        return Decision(str(value).strip().upper())
    except ValueError:
        return Decision.UNCLEAR


# ===================================================================== #
#  Operation A — evidence strength                                        #
# ===================================================================== #

def evidence_strength(
    records: Sequence[EvidenceRecord],
    table: Optional[DomainCredibilityTable] = None,
) -> int:
    """Deterministic evidence strength in [0, 5] from consolidated evidence."""
    count = len(records)
    if count == 0:
        return 0

    table = table or DEFAULT_TABLE
    domains = [domain_of(record.url) for record in records]
    unique_domains = len(set(domains))
    review_source_count = sum(1 for domain in domains if table.is_review_source(domain))
    low_cred_count = sum(1 for record in records if record.credibility <= LOW_CREDIBILITY_MAX)
    low_cred_ratio = low_cred_count / count

    score = min(SCORE_MAX, count // EVIDENCE_PER_POINT)

    if unique_domains >= DOMAIN_DIVERSITY_BONUS_MIN:
        score += 1
    if review_source_count >= REVIEW_SOURCE_BONUS_MIN:
        score += 1

    if low_cred_ratio > LOW_CREDIBILITY_RATIO_LIMIT:
        score -= 1
    if count < EVIDENCE_COUNT_TARGET:
        score -= 1

    result = _clamp(score)
    logger.debug(
        "Evidence strength %d (count=%d, domains=%d, review=%d, low_cred=%.2f)",
        result, count, unique_domains, review_source_count, low_cred_ratio,
    )
    return result


# ===================================================================== #
#  Operation B — total                                                    #
# ===================================================================== #

def compute_total(
    scores: Union[Mapping[str, Any], RubricScores],
    evidence_strength: int,
) -> int:
    """Sum of the seven supplied dimensions plus evidence strength, in [0, 40].

    This value always replaces any total an upstream source suggested.
    """
    if isinstance(scores, RubricScores):
        scores = scores.model_dump()
    supplied = coerce_draft_scores(scores)
    return sum(supplied.values()) + coerce_score(evidence_strength)


# ===================================================================== #
#  Operation C — kill rules                                               #
# ===================================================================== #

def apply_kill_rules(
    rubric: RubricScores,
    wedge_option_count: int,
    evidence_count: int,
    suggested_decision: Union[Decision, str],
) -> KillRuleResult:
    """Force the final decision when a non-negotiable condition holds."""
    suggested = coerce_decision(suggested_decision)
    reasons = []

    if rubric.evidence_strength <= KILL_SCORE_THRESHOLD:
        reasons.append(REASON_INSUFFICIENT_EVIDENCE)
    if rubric.distribution_feasibility <= KILL_SCORE_THRESHOLD:
        reasons.append(REASON_NO_DISTRIBUTION)
    if rubric.competition <= KILL_SCORE_THRESHOLD and wedge_option_count == 0:
        reasons.append(REASON_SATURATED_MARKET)

    if reasons:
        overridden = suggested != Decision.NO_GO
        if overridden:
            logger.warning("Kill rules forced NO_GO over %s: %s", suggested.value, reasons)
        return KillRuleResult(
            decision=Decision.NO_GO,
            overridden=overridden,
            override_reasons=reasons,
        )

    if rubric.buyer_clarity <= KILL_SCORE_THRESHOLD and evidence_count < UNCLEAR_EVIDENCE_COUNT:
        overridden = suggested not in (Decision.UNCLEAR, Decision.NO_GO)
        if overridden:
            logger.warning(
                "Kill rule forced UNCLEAR over %s (buyer_clarity=%d, evidence=%d)",
                suggested.value, rubric.buyer_clarity, evidence_count,
            )
        return KillRuleResult(
            decision=Decision.UNCLEAR,
            overridden=overridden,
            override_reasons=[REASON_UNCLEAR_BUYER],
        )

    return KillRuleResult(decision=suggested, overridden=False, override_reasons=[])
