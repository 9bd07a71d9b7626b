"""Centralized constants shared by the consolidator, the decision engine
and the HTTP layer.

This module is the SINGLE SOURCE OF TRUTH for domain credibility tiers,
listicle URL patterns, rubric dimension names and kill-rule thresholds.
None of these values are read from the environment: changing them changes
verdicts, so they only move with a code change.
"""

from __future__ import annotations

# ── Domain credibility tiers ────────────────────────────────────────────
# 5 = review / research platforms
# 4 = trusted communities and forums
# 3 = news and tech press
# 2 = unknown (default)
# 1 = SEO spam / listicle

CREDIBILITY_TIERS: dict[str, int] = {
    # Tier 5 — review / research platforms
    "g2.com": 5,
    "capterra.com": 5,
    "trustpilot.com": 5,
    "gartner.com": 5,
    "forrester.com": 5,
    "trustradius.com": 5,
    "getapp.com": 5,
    # Tier 4 — communities / forums
    "reddit.com": 4,
    "news.ycombinator.com": 4,
    "stackoverflow.com": 4,
    "producthunt.com": 4,
    "indiehackers.com": 4,
    "quora.com": 4,
    "slashdot.org": 4,
    # Tier 3 — news / tech blogs
    "techcrunch.com": 3,
    "theverge.com": 3,
    "arstechnica.com": 3,
    "wired.com": 3,
    "zdnet.com": 3,
    "venturebeat.com": 3,
    "bloomberg.com": 3,
    "forbes.com": 3,
    "hbr.org": 3,
}

DEFAULT_CREDIBILITY_TIER: int = 2
LISTICLE_CREDIBILITY_TIER: int = 1

# Tiers at or above this count as "review sources" for evidence strength.
HIGH_CREDIBILITY_MIN_TIER: int = 4

# Searched case-insensitively anywhere in the full URL.
LISTICLE_PATTERNS: tuple[str, ...] = (
    r"/best[-_].*[-_]tools",     # /best-crm-tools
    r"/top[-_]?\d+",             # /top-10-..., /top5
    r"/\d+[-_]best",             # /10-best-...
    r"best[-_].*[-_]software",   # best-project-software
)

# ── Evidence ────────────────────────────────────────────────────────────
SENTIMENTS: tuple[str, ...] = ("positive", "negative", "neutral", "mixed")

# ── Rubric ──────────────────────────────────────────────────────────────
SCORE_MIN: int = 0
SCORE_MAX: int = 5

# The seven dimensions an upstream (model-assisted) step may supply.
# evidence_strength is deliberately absent: it is always computed here.
SUPPLIED_DIMENSIONS: tuple[str, ...] = (
    "pain_intensity",
    "frequency",
    "buyer_clarity",
    "budget_signal",
    "switching_cost",
    "competition",
    "distribution_feasibility",
)

# camelCase names used by upstream JSON drafts
DIMENSION_ALIASES: dict[str, str] = {
    "pain_intensity": "painIntensity",
    "frequency": "frequency",
    "buyer_clarity": "buyerClarity",
    "budget_signal": "budgetSignal",
    "switching_cost": "switchingCost",
    "competition": "competition",
    "distribution_feasibility": "distributionFeasibility",
    "evidence_strength": "evidenceStrength",
}

TOTAL_MAX: int = SCORE_MAX * (len(SUPPLIED_DIMENSIONS) + 1)  # 40

# ── Evidence strength formula ───────────────────────────────────────────
EVIDENCE_PER_POINT: int = 6
DOMAIN_DIVERSITY_BONUS_MIN: int = 5
REVIEW_SOURCE_BONUS_MIN: int = 2
LOW_CREDIBILITY_MAX: int = 1
LOW_CREDIBILITY_RATIO_LIMIT: float = 0.4
EVIDENCE_COUNT_TARGET: int = 10

# ── Kill rules ──────────────────────────────────────────────────────────
KILL_SCORE_THRESHOLD: int = 1
UNCLEAR_EVIDENCE_COUNT: int = 10

REASON_INSUFFICIENT_EVIDENCE = "insufficient evidence to proceed."
REASON_NO_DISTRIBUTION = "no clear way to reach buyers."
REASON_SATURATED_MARKET = "market is saturated with no differentiation path."
REASON_UNCLEAR_BUYER = "cannot determine buyer — insufficient evidence."
