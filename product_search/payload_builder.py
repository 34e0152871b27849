"""
Elasticsearch payload builder module.

Converts parsed search parameters into an Elasticsearch _search request body.
Clauses are first collected as an ordered list and only turned into the bool
query wire format by build_search_payload(), so no user text is ever spliced
into a JSON string.
"""

from typing import Dict, Any, List

# Field names are fixed; request input never selects a field.
NAME_FIELD = "name"
CATEGORY_FIELD = "category"
PRICE_FIELD = "price"

# Clause kinds that only restrict results and do not contribute to scoring
FILTER_CLAUSES = ("term", "range")


def build_query_clauses(params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Build the ordered clause list for a set of search parameters.

    Args:
        params: Search parameters from query_parser.parse_search_params()

    Returns:
        List of clauses in evaluation order (text, category, price), e.g.
        [
            {"match": {"name": "phone"}},
            {"term": {"category": "Electronics"}},
            {"range": {"price": {"gte": 100.0, "lte": 500.0}}}
        ]

    Note:
        The text query is passed through untouched (no tokenization or
        escaping). A match query treats its value as literal text, so the
        input cannot change the query structure.
    """
    clauses = []

    text_query = params.get("text_query")
    if text_query:
        clauses.append({"match": {NAME_FIELD: text_query}})

    category = params.get("category")
    if category:
        clauses.append({"term": {CATEGORY_FIELD: category}})

    price_range = params.get("price_range")
    if price_range is not None:
        min_price, max_price = price_range
        clauses.append({"range": {PRICE_FIELD: {"gte": min_price, "lte": max_price}}})

    return clauses


def _clause_kind(clause: Dict[str, Any]) -> str:
    return next(iter(clause))


def build_search_payload(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the Elasticsearch _search JSON body for the given parameters.

    Args:
        params: Search parameters from query_parser.parse_search_params()

    Returns:
        {"query": {"match_all": {}}} when no clause applies, otherwise
        {"query": {"bool": {"must": [...], "filter": [...]}}} with text
        clauses under "must" and term/range clauses under "filter".
        Empty sections are omitted.

    Note:
        This function only builds the JSON body - URL and headers are added
        by the store client.
    """
    clauses = build_query_clauses(params)
    if not clauses:
        return {"query": {"match_all": {}}}

    must = [c for c in clauses if _clause_kind(c) not in FILTER_CLAUSES]
    filters = [c for c in clauses if _clause_kind(c) in FILTER_CLAUSES]

    bool_query: Dict[str, Any] = {}
    if must:
        bool_query["must"] = must
    if filters:
        bool_query["filter"] = filters

    return {"query": {"bool": bool_query}}
