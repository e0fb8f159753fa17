from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from cn_browser.core.dataset import Dataset
from cn_browser.core.record import ProteinRecord, find_first_record, split_identifiers, tokens_match

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2
DEFAULT_SEARCH_LIMIT = 10


class SearchMode(str, Enum):
    GENE = "gene"
    ACCESSION = "accession"


@dataclass
class ResolutionResult:
    """
    Outcome of a batch resolution.

    - matched: distinct primary gene symbols, in first-resolved order
    - unmatched: original query strings that resolved to nothing, in input order
    """
    matched: List[str] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)


def _primary_symbol(gene_names: str) -> Optional[str]:
    tokens = split_identifiers(gene_names)
    return tokens[0] if tokens else None


def _lookup(index: Dict[str, str], query: str) -> Optional[str]:
    """
    Exact-then-fuzzy probe of an identifier index.

    1. exact key lookup on the uppercased, trimmed query
    2. otherwise the first key (in index order) that contains the query or
       is contained in it

    An exact hit on a record without gene names counts as a miss and the
    substring scan still runs. Returns the primary symbol of the owning
    record, or None.
    """
    upper = (query or "").strip().upper()
    if not upper:
        return None

    exact = index.get(upper)
    if exact:
        symbol = _primary_symbol(exact)
        if symbol:
            return symbol

    for key, gene_names in index.items():
        if tokens_match(key, upper):
            return _primary_symbol(gene_names)

    return None


class IdentifierResolver:
    """
    Resolves gene symbols, aliases and protein accessions against one Dataset.

    Built once per Dataset; all operations are read-only over the dataset's
    cached indexes and are safe to call from concurrent callbacks.
    """

    def __init__(self, dataset: Dataset) -> None:
        self.dataset = dataset

    # ------------------------------------------------------------------
    # Single identifiers
    # ------------------------------------------------------------------
    def resolve_gene(self, query: str) -> Optional[str]:
        return _lookup(self.dataset.alias_index, query)

    def resolve_accession(self, query: str) -> Optional[str]:
        return _lookup(self.dataset.accession_index, query)

    def resolve(self, query: str, mode: SearchMode = SearchMode.GENE) -> Optional[str]:
        if SearchMode(mode) is SearchMode.ACCESSION:
            return self.resolve_accession(query)
        return self.resolve_gene(query)

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------
    def _resolve_many(self, index: Dict[str, str], queries: Iterable[str]) -> ResolutionResult:
        result = ResolutionResult()
        seen = set()

        for query in queries:
            if not query or not query.strip():
                continue

            symbol = _lookup(index, query)
            if symbol is None:
                result.unmatched.append(query)
                continue

            if symbol not in seen:
                seen.add(symbol)
                result.matched.append(symbol)

        logger.debug(
            "Batch resolution finished",
            extra={"n_matched": len(result.matched), "n_unmatched": len(result.unmatched)},
        )
        return result

    def resolve_many_genes(self, queries: Iterable[str]) -> List[str]:
        return self._resolve_many(self.dataset.alias_index, queries).matched

    def resolve_many_accessions(self, queries: Iterable[str]) -> List[str]:
        return self._resolve_many(self.dataset.accession_index, queries).matched

    def resolve_many_genes_with_details(self, queries: Iterable[str]) -> ResolutionResult:
        return self._resolve_many(self.dataset.alias_index, queries)

    def resolve_many_accessions_with_details(self, queries: Iterable[str]) -> ResolutionResult:
        return self._resolve_many(self.dataset.accession_index, queries)

    def resolve_many(self, queries: Iterable[str], mode: SearchMode = SearchMode.GENE) -> ResolutionResult:
        if SearchMode(mode) is SearchMode.ACCESSION:
            return self.resolve_many_accessions_with_details(queries)
        return self.resolve_many_genes_with_details(queries)

    # ------------------------------------------------------------------
    # Record lookups (scan the records directly, dataset order)
    # ------------------------------------------------------------------
    def find_record_by_gene(self, name: str) -> Optional[ProteinRecord]:
        return find_first_record(self.dataset.records, name)

    def find_record_by_accession(self, identifier: str) -> Optional[ProteinRecord]:
        return find_first_record(self.dataset.records, identifier, by_accession=True)

    # ------------------------------------------------------------------
    # Search-as-you-type suggestions
    # ------------------------------------------------------------------
    @staticmethod
    def _search(values: List[str], query: str, limit: int) -> List[str]:
        if not query or len(query) < MIN_SEARCH_LENGTH or limit <= 0:
            return []
        upper = query.upper()
        hits: List[str] = []
        for value in values:
            if upper in value.upper():
                hits.append(value)
                if len(hits) >= limit:
                    break
        return hits

    def search_genes(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[str]:
        return self._search(self.dataset.gene_list, query, limit)

    def search_accessions(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[str]:
        return self._search(self.dataset.accession_list, query, limit)

    def search(self, query: str, mode: SearchMode = SearchMode.GENE, limit: int = DEFAULT_SEARCH_LIMIT) -> List[str]:
        if SearchMode(mode) is SearchMode.ACCESSION:
            return self.search_accessions(query, limit)
        return self.search_genes(query, limit)

    def display_gene_for(self, value: str, mode: SearchMode = SearchMode.GENE) -> str:
        """
        Primary gene symbol to show when a suggestion is picked.

        Gene suggestions are raw gene-name fields, so their first token is
        used. Accession suggestions are mapped back to the owning record's
        primary gene. Falls back to the value itself.
        """
        if SearchMode(mode) is SearchMode.ACCESSION:
            record = self.find_record_by_accession(value)
            if record is not None and record.primary_gene:
                return record.primary_gene
            return value
        return _primary_symbol(value) or value
