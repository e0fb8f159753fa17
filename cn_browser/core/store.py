from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Union

from cn_browser.core.dataset import Dataset
from cn_browser.core.exceptions import CnBrowserError
from cn_browser.core.loader import DEFAULT_SCHEMA, ColumnSchema, load_dataset
from cn_browser.core.record import ProteinRecord
from cn_browser.core.resolver import DEFAULT_SEARCH_LIMIT, IdentifierResolver, ResolutionResult, SearchMode
from cn_browser.core.series import (
    BarEntry,
    ScatterPoint,
    bar_series,
    bar_series_for_accession,
    scatter_series,
)

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load data"

Loader = Callable[[Union[str, Path]], Dataset]


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class DataStore:
    """
    Session-wide owner of the copy-number snapshot.

    Holds the current Dataset plus the IdentifierResolver built on it, and
    exposes the read-only query surface used by views and callbacks.

    Loading:
    - load() parses the source once; when records are already present it is
      a no-op returning the same Dataset
    - concurrent load() calls are serialised by a lock, so only one parse runs
    - a failure leaves the empty Dataset in place and sets a sticky error
      message; nothing retries automatically
    """

    def __init__(
        self,
        source: Union[str, Path],
        loader: Optional[Loader] = None,
        schema: ColumnSchema = DEFAULT_SCHEMA,
    ) -> None:
        self._source = source
        self._loader: Loader = loader or (lambda src: load_dataset(src, schema))

        self._lock = threading.Lock()
        self._in_flight = False
        self._status = LoadStatus.IDLE
        self._error_message: Optional[str] = None

        self._dataset = Dataset.empty()
        self._resolver = IdentifierResolver(self._dataset)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------
    @property
    def source(self) -> Union[str, Path]:
        return self._source

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def is_loading(self) -> bool:
        return self._in_flight or self._status is LoadStatus.LOADING

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def resolver(self) -> IdentifierResolver:
        return self._resolver

    @property
    def cell_lines(self) -> List[str]:
        return list(self._dataset.cell_lines)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------
    def load(self) -> Dataset:
        if not self._dataset.is_empty:
            return self._dataset

        with self._lock:
            # Another caller may have finished loading while we waited
            if not self._dataset.is_empty:
                return self._dataset

            self._in_flight = True
            self._status = LoadStatus.LOADING
            self._error_message = None
            logger.info("Loading dataset", extra={"source": str(self._source)})

            try:
                dataset = self._loader(self._source)
            except CnBrowserError as e:
                logger.error(
                    "Dataset load failed",
                    extra={"source": str(self._source), "error": str(e)},
                )
                self._fail()
                return self._dataset
            except Exception:
                logger.exception(
                    "Unexpected error while loading dataset",
                    extra={"source": str(self._source)},
                )
                self._fail()
                return self._dataset
            finally:
                self._in_flight = False

            self._dataset = dataset
            self._resolver = IdentifierResolver(dataset)
            self._status = LoadStatus.LOADED

        logger.info(
            "Dataset loaded",
            extra={
                "source": str(self._source),
                "n_records": len(dataset),
                "cell_lines": list(dataset.cell_lines),
            },
        )
        return self._dataset

    def _fail(self) -> None:
        self._status = LoadStatus.ERROR
        self._error_message = LOAD_ERROR_MESSAGE

    def start_background_load(self) -> Optional[threading.Thread]:
        """
        Kick off load() on a daemon thread so the UI can poll `status`.
        Returns None when data is already present or a load is in flight.
        """
        if not self._dataset.is_empty or self._in_flight:
            return None

        self._status = LoadStatus.LOADING
        thread = threading.Thread(target=self.load, name="cn-browser-load", daemon=True)
        thread.start()
        return thread

    # -------------------------------------------------------------------------
    # Query surface
    # -------------------------------------------------------------------------
    def list_genes(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[str]:
        return self._resolver.search_genes(query, limit)

    def list_accessions(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[str]:
        return self._resolver.search_accessions(query, limit)

    def resolve_gene(self, query: str) -> Optional[str]:
        return self._resolver.resolve_gene(query)

    def resolve_accession(self, query: str) -> Optional[str]:
        return self._resolver.resolve_accession(query)

    def resolve_many_genes(self, queries: Iterable[str]) -> List[str]:
        return self._resolver.resolve_many_genes(queries)

    def resolve_many_accessions(self, queries: Iterable[str]) -> List[str]:
        return self._resolver.resolve_many_accessions(queries)

    def resolve_many_genes_with_details(self, queries: Iterable[str]) -> ResolutionResult:
        return self._resolver.resolve_many_genes_with_details(queries)

    def resolve_many_accessions_with_details(self, queries: Iterable[str]) -> ResolutionResult:
        return self._resolver.resolve_many_accessions_with_details(queries)

    def find_record_by_gene(self, name: str) -> Optional[ProteinRecord]:
        return self._resolver.find_record_by_gene(name)

    def find_record_by_accession(self, identifier: str) -> Optional[ProteinRecord]:
        return self._resolver.find_record_by_accession(identifier)

    def scatter_series(self, cell_line: str) -> List[ScatterPoint]:
        return scatter_series(self._dataset, cell_line)

    def bar_series(
        self,
        identifier: str,
        cell_lines: Sequence[str],
        mode: SearchMode = SearchMode.GENE,
    ) -> List[BarEntry]:
        if SearchMode(mode) is SearchMode.ACCESSION:
            return bar_series_for_accession(self._dataset, identifier, cell_lines)
        return bar_series(self._dataset, identifier, cell_lines)
