"""Evidence Consolidator.

Turns a raw, possibly duplicated, possibly low-quality list of evidence
records into a clean list with code-assigned credibility and a
domain-diversity count.

Pipeline:
  1. Normalize URL and quote of every record
  2. Single in-order pass: drop repeated quotes, collapse repeated URLs
  3. Overwrite credibility with the domain tier (input value is advisory)
  4. Count distinct domains among survivors

Rules
-----
- NO API calls
- NO LLMs
- Never raises on malformed URLs
- Same input list → same output list
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence

from ..schemas.evidence_schema import CompetitorRecord, ConsolidationResult, EvidenceRecord
from .credibility import DEFAULT_TABLE, DomainCredibilityTable, domain_of, split_url, strip_www

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


# ===================================================================== #
#  Normalization                                                          #
# ===================================================================== #

def normalize_url(url: str) -> str:
    """scheme://host/path, lower-cased, ``www.`` and trailing slashes stripped.

    Query string, fragment and port are dropped.  Unparseable input falls
    back to the raw string lower-cased with trailing slashes stripped.
    """
    parts = split_url(url)
    if parts is None:
        return url.lower().rstrip("/")
    host = strip_www(parts.hostname)
    return f"{parts.scheme}://{host}{parts.path}".lower().rstrip("/")


def normalize_quote(quote: str) -> str:
    return _WHITESPACE_RE.sub(" ", quote.lower()).strip()


# ===================================================================== #
#  Tie-break                                                              #
# ===================================================================== #

def prefer_record(candidate: EvidenceRecord, incumbent: EvidenceRecord) -> bool:
    """True when *candidate* should replace *incumbent* in a URL slot.

    Either condition is enough: strictly higher advisory credibility, or a
    strictly longer raw quote.  A longer quote wins the slot even over a
    more credible incumbent.  Otherwise the incumbent stays (first
    occurrence wins).
    """
    return (
        candidate.credibility > incumbent.credibility
        or len(candidate.quote) > len(incumbent.quote)
    )


# ===================================================================== #
#  Consolidator                                                           #
# ===================================================================== #

class EvidenceConsolidator:
    """Dedupe + credibility over a batch of evidence records.

    Holds only the injected, read-only credibility table, so one instance
    can be shared across concurrent runs.
    """

    def __init__(self, table: Optional[DomainCredibilityTable] = None):
        self.table = table or DEFAULT_TABLE

    def consolidate(self, records: Sequence[EvidenceRecord]) -> ConsolidationResult:
        kept: Dict[str, EvidenceRecord] = {}
        seen_quotes: set[str] = set()
        removed_count = 0

        for record in records:
            norm_url = normalize_url(record.url)
            norm_quote = normalize_quote(record.quote)

            # Exact quote already kept under any URL
            if norm_quote in seen_quotes:
                logger.debug("Dropped repeated quote from %s", record.url)
                removed_count += 1
                continue

            incumbent = kept.get(norm_url)
            if incumbent is not None:
                if prefer_record(record, incumbent):
                    # Same slot, so output order follows the first occurrence
                    kept[norm_url] = record
                    seen_quotes.add(norm_quote)
                    logger.debug("Replaced record for %s", norm_url)
                removed_count += 1
                continue

            kept[norm_url] = record
            seen_quotes.add(norm_quote)

        survivors: List[EvidenceRecord] = [
            record.model_copy(update={"credibility": self.table.credibility_of(record.url)})
            for record in kept.values()
        ]
        unique_domain_count = len({domain_of(record.url) for record in survivors})

        logger.info(
            "[CONSOLIDATE] %d in → %d kept, %d removed, %d domains",
            len(records), len(survivors), removed_count, unique_domain_count,
        )
        return ConsolidationResult(
            records=survivors,
            unique_domain_count=unique_domain_count,
            removed_count=removed_count,
        )


def consolidate(
    records: Sequence[EvidenceRecord],
    table: Optional[DomainCredibilityTable] = None,
) -> ConsolidationResult:
    """Functional shortcut for ``EvidenceConsolidator(table).consolidate``."""
    return EvidenceConsolidator(table).consolidate(records)


def consolidate_competitors(records: Sequence[CompetitorRecord]) -> List[CompetitorRecord]:
    """Dedupe competitors by case-insensitive name; first occurrence wins."""
    seen: set[str] = set()
    unique: List[CompetitorRecord] = []
    for record in records:
        key = record.name.lower().strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique
