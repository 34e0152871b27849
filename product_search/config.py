"""
Service configuration.

Values are read from environment variables (a local .env file is loaded
first) and exposed as module-level constants. Defaults match a local
single-node Elasticsearch.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


# ============================================================
# Elasticsearch connection
# ============================================================

ELASTICSEARCH_URL = os.getenv("ELASTICSEARCH_URL", "http://localhost:9200")
ELASTICSEARCH_INDEX = os.getenv("ELASTICSEARCH_INDEX", "products")

# Per-request timeout; also caps each write attempt
STORE_TIMEOUT_SECONDS = _float_env("STORE_TIMEOUT_SECONDS", 30.0)

# Max pooled connections kept per host
STORE_POOL_SIZE = _int_env("STORE_POOL_SIZE", 10)

# ============================================================
# HTTP API
# ============================================================

SEARCH_PORT = _int_env("SEARCH_PORT", 8080)

# ============================================================
# Indexing: retry schedule and import size
# ============================================================

WRITE_MAX_ATTEMPTS = _int_env("WRITE_MAX_ATTEMPTS", 3)
WRITE_BACKOFF_BASE_MS = _float_env("WRITE_BACKOFF_BASE_MS", 100.0)

PRODUCT_COUNT = _int_env("PRODUCT_COUNT", 1000)
