"""
Core modules for the product search service.

This package contains the query parsing, payload building, Elasticsearch
store access and resilient indexing modules used by the search API and the
product import job.
"""
