"""Decision Engine tests — evidence strength formula, rubric coercion and total, kill-rule precedence."""

import math
import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from opportunity_vet.constants import (
    REASON_INSUFFICIENT_EVIDENCE,
    REASON_NO_DISTRIBUTION,
    REASON_SATURATED_MARKET,
    REASON_UNCLEAR_BUYER,
)
from opportunity_vet.schemas import Decision, EvidenceRecord, RubricScores
from opportunity_vet.services.credibility import DomainCredibilityTable
from opportunity_vet.services.decision_engine import (
    apply_kill_rules,
    coerce_decision,
    coerce_draft_scores,
    coerce_score,
    compute_total,
    evidence_strength,
)


def _make_evidence(count, domain="example.com", credibility=3, offset=0):
    return [
        EvidenceRecord(
            url=f"https://{domain}/page-{offset + i}",
            source_type="review",
            quote=f"Quote {domain} {offset + i}",
            theme="pain",
            sentiment="negative",
            credibility=credibility,
        )
        for i in range(count)
    ]


def _rubric(**overrides):
    scores = dict(
        pain_intensity=3,
        frequency=3,
        buyer_clarity=3,
        budget_signal=3,
        switching_cost=3,
        competition=3,
        distribution_feasibility=3,
        evidence_strength=3,
    )
    scores.update(overrides)
    return RubricScores(**scores)


# ---------------------------------------------------------------------------
# Operation A — evidence strength
# ---------------------------------------------------------------------------

class TestEvidenceStrength:
    def test_empty_is_zero(self):
        assert evidence_strength([]) == 0

    def test_small_single_domain_set_is_zero(self):
        # base 0, count < 10 penalty, clamped
        assert evidence_strength(_make_evidence(5)) == 0

    def test_single_domain_base_only(self):
        assert evidence_strength(_make_evidence(15)) == 2

    def test_diverse_review_sources_score_higher(self):
        diverse = (
            _make_evidence(3, "g2.com")
            + _make_evidence(3, "reddit.com")
            + _make_evidence(3, "capterra.com")
            + _make_evidence(3, "techcrunch.com")
            + _make_evidence(3, "indiehackers.com")
        )
        # base 2, +1 domains, +1 review sources
        assert evidence_strength(diverse) == 4
        assert evidence_strength(diverse) > evidence_strength(_make_evidence(15))

    def test_base_saturates_at_thirty(self):
        assert evidence_strength(_make_evidence(30)) == 5
        assert evidence_strength(_make_evidence(60)) == 5

    def test_clamped_to_five(self):
        assert evidence_strength(_make_evidence(100, "g2.com")) == 5

    def test_low_credibility_penalty(self):
        evidence = _make_evidence(6) + _make_evidence(6, credibility=1, offset=6)
        # base 2, ratio 0.5 > 0.4
        assert evidence_strength(evidence) == 1

    def test_low_credibility_ratio_boundary_not_penalized(self):
        evidence = _make_evidence(6) + _make_evidence(4, credibility=1, offset=6)
        # base 1, ratio exactly 0.4
        assert evidence_strength(evidence) == 1

    def test_under_ten_penalty_with_bonuses(self):
        evidence = (
            _make_evidence(2, "g2.com")
            + _make_evidence(1, "a.com")
            + _make_evidence(1, "b.com")
            + _make_evidence(1, "c.com")
            + _make_evidence(4, "d.com")
        )
        # base 1, +1 domains, +1 review sources, -1 under ten
        assert evidence_strength(evidence) == 2

    def test_www_prefix_counts_as_review_source(self):
        evidence = _make_evidence(2, "www.reddit.com") + _make_evidence(10, offset=2)
        # base 2, +1 review sources
        assert evidence_strength(evidence) == 3

    def test_injected_table_defines_review_sources(self):
        table = DomainCredibilityTable.build({"example.com": 5})
        evidence = _make_evidence(12)
        assert evidence_strength(evidence) == 2
        assert evidence_strength(evidence, table) == 3


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

class TestCoercion:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (3, 3),
            (7, 5),
            (-2, 0),
            (2.5, 3),
            (2.4, 2),
            (4.99, 5),
            ("4", 0),
            (None, 0),
            (True, 0),
            ([3], 0),
            (math.nan, 0),
            (math.inf, 5),
            (-math.inf, 0),
        ],
    )
    def test_coerce_score(self, raw, expected):
        assert coerce_score(raw) == expected

    def test_draft_accepts_camel_and_snake_case(self):
        scores = coerce_draft_scores({"painIntensity": 4, "buyer_clarity": 2, "distributionFeasibility": 9})
        assert scores["pain_intensity"] == 4
        assert scores["buyer_clarity"] == 2
        assert scores["distribution_feasibility"] == 5
        assert scores["frequency"] == 0

    def test_draft_evidence_strength_is_ignored(self):
        scores = coerce_draft_scores({"evidenceStrength": 5, "evidence_strength": 5, "total": 40})
        assert "evidence_strength" not in scores
        assert sum(scores.values()) == 0

    def test_non_mapping_draft(self):
        assert set(coerce_draft_scores(None).values()) == {0}
        assert len(coerce_draft_scores(["bad"])) == 7

    def test_coerce_decision(self):
        assert coerce_decision("GO") is Decision.GO
        assert coerce_decision(" no_go ") is Decision.NO_GO
        assert coerce_decision(Decision.UNCLEAR) is Decision.UNCLEAR
        assert coerce_decision("maybe") is Decision.UNCLEAR
        assert coerce_decision(None) is Decision.UNCLEAR


# ---------------------------------------------------------------------------
# Operation B — total
# ---------------------------------------------------------------------------

class TestComputeTotal:
    def test_sums_all_scores(self):
        scores = {
            "pain_intensity": 3,
            "frequency": 4,
            "buyer_clarity": 2,
            "budget_signal": 3,
            "switching_cost": 4,
            "competition": 3,
            "distribution_feasibility": 3,
        }
        assert compute_total(scores, 3) == 25

    def test_all_zeros(self):
        assert compute_total({}, 0) == 0

    def test_all_fives(self):
        scores = {name: 5 for name in (
            "painIntensity", "frequency", "buyerClarity", "budgetSignal",
            "switchingCost", "competition", "distributionFeasibility",
        )}
        assert compute_total(scores, 5) == 40

    def test_accepts_rubric_model(self):
        assert compute_total(_rubric(evidence_strength=0), 2) == 23

    def test_out_of_range_inputs_stay_bounded(self):
        assert compute_total({"pain_intensity": 99, "frequency": -5}, 12) == 10


# ---------------------------------------------------------------------------
# Operation C — kill rules
# ---------------------------------------------------------------------------

class TestKillRules:
    def test_low_evidence_strength_forces_no_go(self):
        result = apply_kill_rules(_rubric(evidence_strength=1), 1, 10, "GO")
        assert result.decision == Decision.NO_GO
        assert result.overridden is True
        assert result.override_reasons == [REASON_INSUFFICIENT_EVIDENCE]

    def test_zero_evidence_strength_forces_no_go(self):
        result = apply_kill_rules(_rubric(evidence_strength=0), 0, 5, "GO")
        assert result.decision == Decision.NO_GO
        assert result.overridden is True

    def test_distribution_forces_no_go(self):
        result = apply_kill_rules(_rubric(distribution_feasibility=1), 0, 10, "GO")
        assert result.decision == Decision.NO_GO
        assert result.override_reasons == [REASON_NO_DISTRIBUTION]

    def test_saturated_market_without_wedges_forces_no_go(self):
        result = apply_kill_rules(_rubric(competition=1), 0, 10, "GO")
        assert result.decision == Decision.NO_GO
        assert result.override_reasons == [REASON_SATURATED_MARKET]

    def test_saturated_market_with_wedges_passes(self):
        result = apply_kill_rules(_rubric(competition=0), 1, 10, "GO")
        assert result.decision == Decision.GO
        assert result.overridden is False
        assert result.override_reasons == []

    def test_all_hard_rules_report_in_order(self):
        rubric = _rubric(evidence_strength=0, distribution_feasibility=0, competition=0)
        result = apply_kill_rules(rubric, 0, 3, "UNCLEAR")
        assert result.decision == Decision.NO_GO
        assert result.override_reasons == [
            REASON_INSUFFICIENT_EVIDENCE,
            REASON_NO_DISTRIBUTION,
            REASON_SATURATED_MARKET,
        ]

    def test_suggested_no_go_is_not_overridden(self):
        result = apply_kill_rules(_rubric(evidence_strength=1), 1, 10, "NO_GO")
        assert result.decision == Decision.NO_GO
        assert result.overridden is False
        assert result.override_reasons == [REASON_INSUFFICIENT_EVIDENCE]

    def test_unclear_buyer_with_thin_evidence(self):
        result = apply_kill_rules(_rubric(buyer_clarity=1), 0, 7, "GO")
        assert result.decision == Decision.UNCLEAR
        assert result.overridden is True
        assert result.override_reasons == [REASON_UNCLEAR_BUYER]

    def test_unclear_buyer_with_enough_evidence_passes(self):
        result = apply_kill_rules(_rubric(buyer_clarity=1), 0, 10, "GO")
        assert result.decision == Decision.GO
        assert result.overridden is False

    def test_unclear_rule_does_not_flag_unclear_or_no_go_suggestions(self):
        for suggestion in ("UNCLEAR", "NO_GO"):
            result = apply_kill_rules(_rubric(buyer_clarity=0), 0, 5, suggestion)
            assert result.decision == Decision.UNCLEAR
            assert result.overridden is False
            assert result.override_reasons == [REASON_UNCLEAR_BUYER]

    def test_hard_rules_outrank_unclear_rule(self):
        rubric = _rubric(evidence_strength=1, buyer_clarity=1)
        result = apply_kill_rules(rubric, 1, 5, "GO")
        assert result.decision == Decision.NO_GO
        assert REASON_UNCLEAR_BUYER not in result.override_reasons

    def test_no_rules_keeps_suggestion(self):
        result = apply_kill_rules(_rubric(), 0, 10, "GO")
        assert result.decision == Decision.GO
        assert result.overridden is False
        assert result.override_reasons == []

    def test_threshold_two_does_not_fire(self):
        rubric = _rubric(evidence_strength=2, distribution_feasibility=2, competition=2, buyer_clarity=2)
        result = apply_kill_rules(rubric, 0, 0, "GO")
        assert result.decision == Decision.GO

    def test_unknown_suggestion_becomes_unclear(self):
        result = apply_kill_rules(_rubric(), 0, 10, "PROBABLY")
        assert result.decision == Decision.UNCLEAR
        assert result.overridden is False

    def test_result_serializes_decision_as_string(self):
        result = apply_kill_rules(_rubric(evidence_strength=0), 0, 0, Decision.GO)
        dumped = result.model_dump(mode="json", by_alias=True)
        assert dumped["decision"] == "NO_GO"
        assert dumped["overrideReasons"] == [REASON_INSUFFICIENT_EVIDENCE]
