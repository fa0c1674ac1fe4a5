"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# API keys – never hardcode
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_AI_API_KEY", "")
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

# Embedding providers, tried in this order
EMBEDDING_PROVIDERS: list = [
    p.strip().lower()
    for p in os.getenv("EMBEDDING_PROVIDERS", "gemini,openai,sentence_transformers").split(",")
    if p.strip()
]
GEMINI_EMBEDDING_MODEL: str = os.getenv("GEMINI_EMBEDDING_MODEL", "text-embedding-004")
OPENAI_EMBEDDING_MODEL: str = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-3-small")
SENTENCE_TRANSFORMERS_MODEL: str = os.getenv("SENTENCE_TRANSFORMERS_MODEL", "all-MiniLM-L6-v2")

# Zero-vector size used when a batch item fails and the provider has no better answer
DEFAULT_EMBEDDING_DIMENSION: int = 768

# Catalog / ranking limits
CAREER_FETCH_LIMIT: int = 100
DEFAULT_MATCH_LIMIT: int = 10
MIN_MATCH_LIMIT: int = 1
MAX_MATCH_LIMIT: int = 20
ENHANCED_MATCH_LIMIT: int = 10
MAX_BROWSE_LIMIT: int = 100
SEARCH_RESULT_LIMIT: int = 20

# Matches at or below this score are discarded
MATCH_SCORE_THRESHOLD: int = 30

# Weights for the compatibility score (sum to 1.0)
WEIGHT_SIMILARITY = 0.4
WEIGHT_SKILL = 0.35
WEIGHT_INTEREST = 0.15
WEIGHT_EXPERIENCE = 0.1

# Concurrency / timeouts
MATCH_CONCURRENCY: int = 8  # Max concurrent career embedding + scoring tasks
EMBEDDING_TIMEOUT_SECONDS: float = 30.0
MATCH_TIMEOUT_SECONDS: float = 120.0

# Write freshly computed career embeddings back to the catalog
CACHE_CAREER_EMBEDDINGS: bool = _env_bool("CACHE_CAREER_EMBEDDINGS", False)

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
