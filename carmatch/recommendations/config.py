from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RecommendationConfig:
    cache_ttl: float = float(os.getenv("CARMATCH_CACHE_TTL", "300"))  # seconds
    default_limit: int = 20
    max_limit: int = 100


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
