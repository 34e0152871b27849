"""
Bulk product loader.

Generates synthetic product documents and writes them to the store one at a
time through the resilient writer. A document whose retries are exhausted is
logged and skipped; the batch always runs to the end.
"""

from typing import Dict, Any, Iterable, Iterator

from product_search import config
from product_search.resilient_writer import write_with_retry

PROGRESS_EVERY = 100


def generate_products(count: int = config.PRODUCT_COUNT) -> Iterator[Dict[str, Any]]:
    """
    Yield deterministic synthetic products numbered 1..count.

    Document Structure:
        {
            "id": "7",
            "name": "Product 7",
            "description": "Description for Product 7",
            "category": "Electronics",
            "price": 70.0
        }
    """
    for i in range(1, count + 1):
        yield {
            "id": str(i),
            "name": f"Product {i}",
            "description": f"Description for Product {i}",
            "category": "Electronics",
            "price": float(i * 10),
        }


def load_products(client, products: Iterable[Dict[str, Any]], **write_options) -> Dict[str, Any]:
    """
    Index every product in order, continuing past failed documents.

    Args:
        client: Store client passed to write_with_retry()
        products: Documents to write, consumed strictly in sequence
        **write_options: Forwarded to write_with_retry() (max_attempts,
            backoff_base_ms, timeout, deadline, sleep)

    Returns:
        Summary dict:
        {
            "attempted": int,   # always the number of input documents
            "indexed": int,
            "failed": int,
            "failed_ids": [str, ...]
        }
    """
    attempted = 0
    indexed = 0
    failed_ids = []

    for product in products:
        attempted += 1
        outcome = write_with_retry(client, product, **write_options)

        if outcome["ok"]:
            indexed += 1
        else:
            failed_ids.append(product.get("id"))
            cause = outcome["error"].__cause__
            detail = f" (last error: {cause})" if cause is not None else ""
            print(f"[Loader] Error indexing product {product.get('id')}: {outcome['reason']}{detail}")

        if attempted % PROGRESS_EVERY == 0:
            print(f"[Loader] Processed {attempted} documents...")

    failed = len(failed_ids)
    if failed:
        print(f"⚠️ Done. {indexed}/{attempted} products indexed, {failed} failed")
    else:
        print(f"✅ Done. Total products indexed: {indexed}")

    return {
        "attempted": attempted,
        "indexed": indexed,
        "failed": failed,
        "failed_ids": failed_ids,
    }
