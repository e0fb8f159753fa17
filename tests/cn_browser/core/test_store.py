import threading
import time

from cn_browser.core.dataset import Dataset
from cn_browser.core.exceptions import DatasetLoadError
from cn_browser.core.record import ProteinRecord
from cn_browser.core.resolver import SearchMode
from cn_browser.core.store import LOAD_ERROR_MESSAGE, DataStore, LoadStatus


def _make_dataset() -> Dataset:
    records = [
        ProteinRecord("P04406;E7EUT4", "GAPDH; G3PD", copy_numbers={"A549": 1000.0, "HELA": 10.0}),
        ProteinRecord("P60709", "ACTB", copy_numbers={"A549": 100.0}),
    ]
    return Dataset(records=records, cell_lines=["A549", "HELA"], source="memory")


class _CountingLoader:
    """Loader stub that records how often it was called."""

    def __init__(self, dataset=None, error=None, delay=0.0):
        self.dataset = dataset if dataset is not None else _make_dataset()
        self.error = error
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, source):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.dataset


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
def test_store_starts_idle_and_empty():
    store = DataStore("memory", loader=_CountingLoader())

    assert store.status is LoadStatus.IDLE
    assert store.dataset.is_empty
    assert store.cell_lines == []
    assert store.error_message is None


def test_load_populates_dataset_and_resolver():
    loader = _CountingLoader()
    store = DataStore("memory", loader=loader)

    ds = store.load()

    assert store.status is LoadStatus.LOADED
    assert len(ds) == 2
    assert store.cell_lines == ["A549", "HELA"]
    assert store.resolve_gene("G3PD") == "GAPDH"


def test_load_is_idempotent_once_records_are_present():
    loader = _CountingLoader()
    store = DataStore("memory", loader=loader)

    first = store.load()
    second = store.load()

    assert first is second
    assert loader.calls == 1


def test_concurrent_loads_parse_once():
    loader = _CountingLoader(delay=0.05)
    store = DataStore("memory", loader=loader)

    threads = [threading.Thread(target=store.load) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert loader.calls == 1
    assert len(store.dataset) == 2


def test_load_failure_sets_sticky_error_and_keeps_empty_dataset():
    loader = _CountingLoader(error=DatasetLoadError("boom"))
    store = DataStore("memory", loader=loader)

    ds = store.load()

    assert ds.is_empty
    assert store.status is LoadStatus.ERROR
    assert store.error_message == LOAD_ERROR_MESSAGE
    assert not store.is_loading


def test_unexpected_loader_exception_is_reported_the_same_way():
    store = DataStore("memory", loader=_CountingLoader(error=RuntimeError("unexpected")))

    store.load()

    assert store.status is LoadStatus.ERROR
    assert store.error_message == LOAD_ERROR_MESSAGE


def test_explicit_load_after_error_retries():
    loader = _CountingLoader(error=DatasetLoadError("boom"))
    store = DataStore("memory", loader=loader)
    store.load()

    loader.error = None
    store.load()

    assert loader.calls == 2
    assert store.status is LoadStatus.LOADED
    assert store.error_message is None


def test_start_background_load_runs_on_a_thread():
    loader = _CountingLoader()
    store = DataStore("memory", loader=loader)

    thread = store.start_background_load()
    assert thread is not None
    thread.join(timeout=5)

    assert store.status is LoadStatus.LOADED
    assert store.start_background_load() is None
    assert loader.calls == 1


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def test_queries_on_unloaded_store_are_empty():
    store = DataStore("memory", loader=_CountingLoader())

    assert store.list_genes("GA") == []
    assert store.resolve_gene("GAPDH") is None
    assert store.resolve_many_genes(["GAPDH"]) == []
    assert store.find_record_by_gene("GAPDH") is None
    assert store.scatter_series("A549") == []
    assert store.bar_series("GAPDH", ["A549"]) == []


def test_query_surface_after_load():
    store = DataStore("memory", loader=_CountingLoader())
    store.load()

    assert store.list_genes("ac") == ["ACTB"]
    assert store.list_accessions("P6") == ["P60709"]
    assert store.resolve_accession("E7EUT4") == "GAPDH"
    assert store.resolve_many_accessions(["P60709", "P04406"]) == ["ACTB", "GAPDH"]

    details = store.resolve_many_genes_with_details(["ACTB", "NOPE"])
    assert details.matched == ["ACTB"]
    assert details.unmatched == ["NOPE"]

    assert store.find_record_by_accession("P60709").gene_names == "ACTB"
    assert [p.gene_names for p in store.scatter_series("A549")] == ["GAPDH; G3PD", "ACTB"]


def test_bar_series_dispatches_on_mode():
    store = DataStore("memory", loader=_CountingLoader())
    store.load()

    by_gene = store.bar_series("GAPDH", ["HELA", "A549"])
    by_accession = store.bar_series("P04406", ["HELA", "A549"], mode=SearchMode.ACCESSION)

    assert [(e.cell_line, e.copy_number) for e in by_gene] == [("HELA", 10.0), ("A549", 1000.0)]
    assert by_accession == by_gene


def test_store_with_default_loader_reads_csv(tmp_path):
    path = tmp_path / "cn.csv"
    path.write_text(
        "T: Protein.Group,T: Gene Names,N: Copy number A549.raw\n"
        "P04637,TP53,21000\n"
    )
    store = DataStore(path)

    store.load()

    assert store.status is LoadStatus.LOADED
    assert store.resolve_gene("tp53") == "TP53"
