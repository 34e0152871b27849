"""
Resilient single-document writer.

Writes one product document to the store, retrying failed attempts with
exponential backoff. Per-attempt failures never escape: the caller receives
a write outcome dict and decides what to do with it (the import job logs it
and moves on).

Backoff schedule (zero-based attempt index i): sleep backoff_base_ms * 2**i
after a failed attempt, so the defaults wait 100ms, 200ms, 400ms, ...
No sleep follows the final attempt.
"""

import json
import math
import time
from typing import Dict, Any, Callable, Optional

from product_search import config
from product_search.errors import InternalError, RetriesExhausted

# Exact wire fields of a product document
DOCUMENT_FIELDS = ("id", "name", "description", "category", "price")

MAX_RETRIES_EXCEEDED = "max retries exceeded"
DEADLINE_EXCEEDED = "deadline exceeded"


def serialize_document(document: Dict[str, Any]) -> str:
    """
    Serialize a product document to its JSON wire format.

    Args:
        document: Dict with id, name, description, category, price

    Returns:
        JSON object string with exactly the document fields, price as a number

    Raises:
        InternalError: Missing/unknown fields, non-numeric, negative or
            non-finite price
    """
    missing = [f for f in DOCUMENT_FIELDS if f not in document]
    extra = [f for f in document if f not in DOCUMENT_FIELDS]
    if missing or extra:
        raise InternalError(f"Invalid document fields: missing={missing}, unexpected={extra}")

    price = document["price"]
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise InternalError(f"Price must be a number, got {price!r}")
    if not math.isfinite(price) or price < 0:
        raise InternalError(f"Price must be a finite non-negative number, got {price!r}")

    wire = {field: document[field] for field in DOCUMENT_FIELDS}
    wire["price"] = float(price)
    try:
        return json.dumps(wire, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InternalError(f"Cannot serialize document: {e}") from e


def backoff_delay_ms(attempt_index: int, backoff_base_ms: float = config.WRITE_BACKOFF_BASE_MS) -> float:
    """Delay after failed attempt `attempt_index` (zero-based)."""
    return backoff_base_ms * (2 ** attempt_index)


def write_with_retry(
    client,
    document: Dict[str, Any],
    max_attempts: int = config.WRITE_MAX_ATTEMPTS,
    backoff_base_ms: float = config.WRITE_BACKOFF_BASE_MS,
    timeout: Optional[float] = None,
    deadline: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """
    Write one document with bounded retry and exponential backoff.

    Args:
        client: Store client exposing index_document(doc_id, body, timeout=...)
        document: Product document dict
        max_attempts: Total number of write attempts (default 3)
        backoff_base_ms: Delay after the first failed attempt, doubled each time
        timeout: Per-attempt timeout in seconds (None = client default)
        deadline: Optional time.monotonic() value after which no new attempt
            or backoff is started; also caps each attempt's timeout
        sleep: Sleep function taking seconds (injected by tests)

    Returns:
        Success: {"ok": True, "attempts": n}
        Failure: {"ok": False, "reason": str, "attempts": n, "error": Exception}

        reason is "serialization error: ..." (no attempt made),
        "max retries exceeded" or "deadline exceeded". For the last two,
        error is a RetriesExhausted chained from the last attempt's error.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    try:
        body = serialize_document(document)
    except InternalError as e:
        return {"ok": False, "reason": f"serialization error: {e}", "attempts": 0, "error": e}

    doc_id = document["id"]
    last_error = None

    for attempt in range(max_attempts):
        attempt_timeout = timeout
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return _exhausted(DEADLINE_EXCEEDED, attempt, last_error)
            attempt_timeout = remaining if timeout is None else min(timeout, remaining)

        try:
            client.index_document(doc_id, body, timeout=attempt_timeout)
            if attempt > 0:
                print(f"[Writer] Document {doc_id} indexed after {attempt + 1} attempts")
            return {"ok": True, "attempts": attempt + 1}
        except Exception as e:
            # Any client failure is a failed attempt; retried, never raised
            last_error = e

        if attempt + 1 >= max_attempts:
            break

        delay_ms = backoff_delay_ms(attempt, backoff_base_ms)
        if deadline is not None and time.monotonic() + delay_ms / 1000 > deadline:
            return _exhausted(DEADLINE_EXCEEDED, attempt + 1, last_error)

        print(f"[Writer] Attempt {attempt + 1}/{max_attempts} for document {doc_id} failed: {last_error}; "
              f"retrying in {delay_ms:.0f}ms")
        sleep(delay_ms / 1000)

    return _exhausted(MAX_RETRIES_EXCEEDED, max_attempts, last_error)


def _exhausted(reason: str, attempts: int, last_error: Optional[Exception]) -> Dict[str, Any]:
    error = RetriesExhausted(reason)
    error.__cause__ = last_error
    return {"ok": False, "reason": reason, "attempts": attempts, "error": error}
