"""
Elasticsearch Product Import Script

This script indexes synthetic product documents into Elasticsearch.
Each document is written with an upsert by id, so the script is safe to re-run.

Features:
- Generates PRODUCT_COUNT deterministic products (id, name, description,
  category, price)
- Retries transient write failures with exponential backoff
- Skips products whose retries are exhausted and keeps going
- Prints progress every 100 documents and a final summary

Environment Variables:
- ELASTICSEARCH_URL: Cluster endpoint (default http://localhost:9200)
- ELASTICSEARCH_INDEX: Target index (default products)
- PRODUCT_COUNT: Number of products to generate (default 1000)
- WRITE_MAX_ATTEMPTS / WRITE_BACKOFF_BASE_MS: Retry schedule

Usage (from the repository root, with the package installed):
    python -m data_import.import_products
"""

import sys

from product_search import config
from product_search.bulk_loader import generate_products, load_products
from product_search.store_client import ElasticsearchStore


def main() -> int:
    store = ElasticsearchStore()
    if not store.ping():
        print(f"❌ Error: cannot reach Elasticsearch at {store.endpoint}")
        return 1
    print(f"[Store] Successfully connected to Elasticsearch at {store.endpoint}")

    try:
        summary = load_products(store, generate_products(config.PRODUCT_COUNT))
    finally:
        store.close()

    return 0 if summary["failed"] == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
