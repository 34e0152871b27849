"""
Product Search API (FastAPI).

Routes:
    GET /        static greeting
    GET /search  query, category and priceRange filters forwarded to
                 Elasticsearch as a single bool query

Usage:
    python -m product_search.app

The store client is created at startup and attached to app.state.store;
handlers read it from the request, so tests can pass in a fake store.
"""

import json
import time
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from product_search import config
from product_search.errors import InternalError, InvalidArgument, Unavailable, UpstreamError
from product_search.payload_builder import build_search_payload
from product_search.query_parser import parse_search_params


def create_app(store) -> FastAPI:
    """
    Build the API application around a store client.

    Args:
        store: Object exposing search(payload) -> dict (see store_client)

    Returns:
        FastAPI application with / and /search registered
    """
    app = FastAPI(title="Product Search API")
    app.state.store = store

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Hello, World!"

    @app.get("/search")
    def search(
        request: Request,
        query: Optional[str] = None,
        category: Optional[str] = None,
        price_range: Optional[str] = Query(None, alias="priceRange"),
    ):
        """Run a filtered product search and return Elasticsearch's raw response."""
        t_start = time.time()

        try:
            params = parse_search_params(query, category, price_range)
        except InvalidArgument as e:
            return PlainTextResponse(str(e), status_code=400)

        payload = build_search_payload(params)
        print(f"[Search] Payload JSON: {json.dumps(payload)}")

        try:
            result = request.app.state.store.search(payload)
        except Unavailable as e:
            return PlainTextResponse(f"Error executing search: {e}", status_code=500)
        except UpstreamError as e:
            return PlainTextResponse(f"Error in search response: {e.status_text}", status_code=500)
        except InternalError as e:
            return PlainTextResponse(str(e), status_code=500)
        except Exception as e:
            return PlainTextResponse(f"Error executing search: {e}", status_code=500)

        elapsed_ms = (time.time() - t_start) * 1000
        print(f"[Search] Completed in {elapsed_ms:.2f}ms")
        return JSONResponse(result)

    return app


def main():
    import uvicorn
    from product_search.store_client import ElasticsearchStore

    store = ElasticsearchStore()
    if store.ping():
        print(f"[Store] Successfully connected to Elasticsearch at {store.endpoint}")
    else:
        print(f"❌ Warning: Elasticsearch at {store.endpoint} did not answer; searches will fail until it does")

    print(f"Starting the server on port {config.SEARCH_PORT}...")
    uvicorn.run(create_app(store), host="0.0.0.0", port=config.SEARCH_PORT)


if __name__ == "__main__":
    main()
