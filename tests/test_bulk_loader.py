"""
Tests for the bulk product loader
"""
from product_search.bulk_loader import generate_products, load_products
from tests.conftest import FakeStore


def test_generate_products_deterministic():
    products = list(generate_products(3))

    assert len(products) == 3
    assert products[0] == {
        "id": "1",
        "name": "Product 1",
        "description": "Description for Product 1",
        "category": "Electronics",
        "price": 10.0,
    }
    assert products[2]["id"] == "3"
    assert products[2]["price"] == 30.0
    assert products == list(generate_products(3))


def test_all_products_indexed_in_order():
    store = FakeStore()
    summary = load_products(store, generate_products(5), sleep=lambda s: None)

    assert summary == {"attempted": 5, "indexed": 5, "failed": 0, "failed_ids": []}
    assert [call[0] for call in store.write_calls] == ["1", "2", "3", "4", "5"]


def test_failing_document_does_not_abort_batch(capsys):
    """Document 3 always fails; 4 and 5 are still written"""
    store = FakeStore(write_failures={"3": -1})
    summary = load_products(store, generate_products(5), sleep=lambda s: None)

    assert summary["attempted"] == 5
    assert summary["indexed"] == 4
    assert summary["failed"] == 1
    assert summary["failed_ids"] == ["3"]

    written = [call[0] for call in store.write_calls]
    assert written == ["1", "2", "3", "3", "3", "4", "5"]

    out = capsys.readouterr().out
    assert "Error indexing product 3: max retries exceeded" in out
    assert "Done." in out


def test_transient_failure_recovered():
    store = FakeStore(write_failures={"2": 2})
    summary = load_products(store, generate_products(3), sleep=lambda s: None)

    assert summary["indexed"] == 3
    assert summary["failed"] == 0


def test_progress_logged_every_hundred(capsys):
    load_products(FakeStore(), generate_products(200), sleep=lambda s: None)

    out = capsys.readouterr().out
    assert "Processed 100 documents" in out
    assert "Processed 200 documents" in out
    assert "Total products indexed: 200" in out


def test_empty_batch():
    summary = load_products(FakeStore(), [])
    assert summary == {"attempted": 0, "indexed": 0, "failed": 0, "failed_ids": []}


class _RaisingStore(FakeStore):
    """Raises a plain OS-level error for one document id."""

    def __init__(self, bad_id):
        super().__init__()
        self.bad_id = bad_id

    def index_document(self, doc_id, body, timeout=None):
        if doc_id == self.bad_id:
            self.write_calls.append((doc_id, body, timeout))
            raise ConnectionResetError("reset")
        return super().index_document(doc_id, body, timeout)


def test_unexpected_client_error_does_not_abort_batch(capsys):
    """A non-store exception on document 3 still lets 4 and 5 be written"""
    store = _RaisingStore("3")
    summary = load_products(store, generate_products(5), sleep=lambda s: None)

    assert summary["attempted"] == 5
    assert summary["indexed"] == 4
    assert summary["failed_ids"] == ["3"]
    assert [call[0] for call in store.write_calls] == ["1", "2", "3", "3", "3", "4", "5"]
    assert "reset" in capsys.readouterr().out


class _PingableStore(FakeStore):
    endpoint = "http://es:9200"
    closed = False

    def ping(self):
        return True

    def close(self):
        self.closed = True


def test_import_script_runs_as_module(monkeypatch):
    """The script imports through the package, without touching sys.path"""
    import importlib
    import sys

    path_before = list(sys.path)
    script = importlib.import_module("data_import.import_products")
    assert sys.path == path_before

    store = _PingableStore()
    monkeypatch.setattr(script, "ElasticsearchStore", lambda: store)
    monkeypatch.setattr(script.config, "PRODUCT_COUNT", 3)
    monkeypatch.setattr(
        script, "load_products",
        lambda client, products: load_products(client, products, sleep=lambda s: None),
    )

    assert script.main() == 0
    assert [call[0] for call in store.write_calls] == ["1", "2", "3"]
    assert store.closed
