"""Domain Credibility lookup.

Maps a source URL to a trust tier in [1, 5] using a static table of
registrable domains plus a list of listicle URL patterns.

Rules
-----
- NO network access
- NO mutable module state: tables are read-only once built
- Never raises on malformed URLs; they degrade to the default tier
- Pure function of (table, url)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple
from urllib.parse import SplitResult, urlsplit

from ..constants import (
    CREDIBILITY_TIERS,
    DEFAULT_CREDIBILITY_TIER,
    HIGH_CREDIBILITY_MIN_TIER,
    LISTICLE_CREDIBILITY_TIER,
    LISTICLE_PATTERNS,
)


# ===================================================================== #
#  URL helpers                                                            #
# ===================================================================== #

def strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host


def split_url(url: str) -> Optional[SplitResult]:
    """``urlsplit`` that returns None instead of a partial or failed parse.

    A URL without a scheme or host (``"not a url"``, ``"example.com/x"``)
    is treated as unparseable, as is anything ``urlsplit`` rejects.
    """
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except (ValueError, AttributeError):
        return None
    if not parts.scheme or not host:
        return None
    return parts


def parse_hostname(url: str) -> Optional[str]:
    """Return the lower-cased hostname of *url*, or None if unparseable."""
    parts = split_url(url)
    return parts.hostname if parts is not None else None


def domain_of(url: str) -> str:
    """Hostname with a leading ``www.`` stripped.

    Unparseable URLs are their own "domain": the literal input string.
    """
    host = parse_hostname(url)
    if host is None:
        return url
    return strip_www(host)


# ===================================================================== #
#  Credibility table                                                      #
# ===================================================================== #

@dataclass(frozen=True)
class DomainCredibilityTable:
    """Immutable credibility configuration.

    Build one with :meth:`build` and inject it wherever a lookup is
    needed; ``DEFAULT_TABLE`` wraps the constants shipped with the
    package.
    """

    tiers: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    listicle_patterns: Tuple[re.Pattern, ...] = ()
    default_tier: int = DEFAULT_CREDIBILITY_TIER

    @classmethod
    def build(
        cls,
        tiers: Mapping[str, int],
        listicle_patterns: Iterable[str] = LISTICLE_PATTERNS,
        default_tier: int = DEFAULT_CREDIBILITY_TIER,
    ) -> "DomainCredibilityTable":
        clean = {domain.lower(): max(1, min(5, int(tier))) for domain, tier in tiers.items()}
        compiled = tuple(re.compile(p, re.IGNORECASE) for p in listicle_patterns)
        return cls(
            tiers=MappingProxyType(clean),
            listicle_patterns=compiled,
            default_tier=default_tier,
        )

    def lookup(self, domain: str) -> Optional[int]:
        return self.tiers.get(domain)

    def is_listicle(self, url: str) -> bool:
        return any(p.search(url) for p in self.listicle_patterns)

    def is_review_source(self, domain: str) -> bool:
        """True for tier-4/5 domains (exact match, no parent fallback)."""
        return self.tiers.get(domain, 0) >= HIGH_CREDIBILITY_MIN_TIER

    def credibility_of(self, url: str) -> int:
        host = parse_hostname(url)
        if host is None:
            return self.default_tier

        hostname = strip_www(host)
        tier = self.lookup(hostname)
        if tier is not None:
            return tier

        # Parent domain, e.g. old.reddit.com -> reddit.com
        labels = hostname.split(".")
        if len(labels) > 2:
            tier = self.lookup(".".join(labels[-2:]))
            if tier is not None:
                return tier

        if self.is_listicle(url):
            return LISTICLE_CREDIBILITY_TIER

        return self.default_tier


DEFAULT_TABLE = DomainCredibilityTable.build(CREDIBILITY_TIERS)


def credibility_of(url: str, table: Optional[DomainCredibilityTable] = None) -> int:
    """Credibility tier in [1, 5] for *url*.  Never raises."""
    return (table or DEFAULT_TABLE).credibility_of(url)
