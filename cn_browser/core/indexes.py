"""
Identifier indexes over a record sequence.

Both indexes map an uppercased token to the raw gene-name field of the
record that contributed it. The accession index also maps to the gene-name
field (not the accession) because accession searches are resolved into gene
identities for the series lookups.

Iteration order of the returned dicts is the fuzzy tie-break order: keys
appear in first-insertion order. When two records share a token the later
record overwrites the value but the key keeps its original position.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from cn_browser.core.record import ProteinRecord


def _build_index(
    records: Iterable[ProteinRecord],
    tokens_of: Callable[[ProteinRecord], List[str]],
) -> Dict[str, str]:
    index: Dict[str, str] = {}
    for record in records:
        for token in tokens_of(record):
            index[token.upper()] = record.gene_names
    return index


def build_alias_index(records: Iterable[ProteinRecord]) -> Dict[str, str]:
    return _build_index(records, lambda r: r.aliases)


def build_accession_index(records: Iterable[ProteinRecord]) -> Dict[str, str]:
    return _build_index(records, lambda r: r.accessions)
