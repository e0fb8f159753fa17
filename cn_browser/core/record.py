from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

_IDENTIFIER_SPLIT = re.compile(r"[;\s]+")


def split_identifiers(raw: Optional[str]) -> List[str]:
    """
    Split a multi-valued identifier field ("GAPDH; G3PD", "P04406;E7EUT4")
    into its individual tokens, in field order.

    Splits on ';' and whitespace runs, trims, drops empty pieces.
    """
    if not raw:
        return []
    return [part.strip() for part in _IDENTIFIER_SPLIT.split(raw) if part.strip()]


def tokens_match(token: str, query: str) -> bool:
    """
    Bidirectional substring match on already-uppercased strings.
    Equality is covered by either containment.
    """
    return query in token or token in query


@dataclass(frozen=True)
class ProteinRecord:
    """
    One protein group row of the copy-number table.

    copy_numbers only holds strictly positive measurements; cell lines with
    missing, zero or unparsable values are absent rather than stored as 0.
    """

    protein_group: str
    gene_names: str
    protein_names: str = ""
    is_histone: bool = False
    mass: float = 0.0
    copy_numbers: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mapping so a snapshot can be shared across callbacks
        object.__setattr__(self, "copy_numbers", MappingProxyType(dict(self.copy_numbers)))

    @property
    def aliases(self) -> List[str]:
        return split_identifiers(self.gene_names)

    @property
    def accessions(self) -> List[str]:
        return split_identifiers(self.protein_group)

    @property
    def primary_gene(self) -> Optional[str]:
        aliases = self.aliases
        return aliases[0] if aliases else None

    @property
    def primary_accession(self) -> Optional[str]:
        accessions = self.accessions
        return accessions[0] if accessions else None

    def copy_number(self, cell_line: str) -> Optional[float]:
        return self.copy_numbers.get(cell_line)

    def matches_gene(self, upper_query: str) -> bool:
        return any(tokens_match(alias.upper(), upper_query) for alias in self.aliases)

    def matches_accession(self, upper_query: str) -> bool:
        return any(tokens_match(acc.upper(), upper_query) for acc in self.accessions)


def find_first_record(
    records: Iterable[ProteinRecord],
    query: Optional[str],
    by_accession: bool = False,
) -> Optional[ProteinRecord]:
    """
    First record (in sequence order) with a gene alias, or accession when
    by_accession is set, that fuzzy-matches the query. Blank query -> None.
    """
    upper = (query or "").strip().upper()
    if not upper:
        return None
    for record in records:
        hit = record.matches_accession(upper) if by_accession else record.matches_gene(upper)
        if hit:
            return record
    return None
