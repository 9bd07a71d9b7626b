from .credibility import DEFAULT_TABLE, DomainCredibilityTable, credibility_of, domain_of
from .evidence_consolidator import EvidenceConsolidator, consolidate, consolidate_competitors
from .decision_engine import apply_kill_rules, coerce_score, compute_total, evidence_strength
from .packet_assembler import assemble_decision
from .token_usage import TokenUsage

__all__ = [
    "DEFAULT_TABLE",
    "DomainCredibilityTable",
    "credibility_of",
    "domain_of",
    "EvidenceConsolidator",
    "consolidate",
    "consolidate_competitors",
    "apply_kill_rules",
    "coerce_score",
    "compute_total",
    "evidence_strength",
    "assemble_decision",
    "TokenUsage",
]
