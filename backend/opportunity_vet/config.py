"""Runtime settings read from the environment (and ``.env``).

Only coverage targets, cost estimation and server options live here.
Kill-rule thresholds and the evidence-strength formula are constants in
``opportunity_vet.constants``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    return os.getenv(key, str(default)).strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    evidence_target: int = 10
    competitor_target: int = 5
    domain_diversity_min: int = 3
    cost_per_1k_tokens: float = 0.01
    log_level: str = "INFO"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000


def get_settings() -> Settings:
    """Build a fresh ``Settings`` snapshot from the current environment."""
    return Settings(
        evidence_target=_env_int("EVIDENCE_TARGET", 10),
        competitor_target=_env_int("COMPETITOR_TARGET", 5),
        domain_diversity_min=_env_int("DOMAIN_DIVERSITY_MIN", 3),
        cost_per_1k_tokens=_env_float("COST_PER_1K_TOKENS", 0.01),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        debug=_env_bool("DEBUG", False),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_env_int("PORT", 8000),
    )
