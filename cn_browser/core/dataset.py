from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from cn_browser.core.indexes import build_accession_index, build_alias_index
from cn_browser.core.record import ProteinRecord


class Dataset:
    """
    Immutable in-memory snapshot of one copy-number table.

    Includes:
    - records in source row order
    - cell-line labels in header order (drives colour and legend order)
    - cached suggestion lists and identifier indexes, computed on first use

    A Dataset is never mutated after construction; loading new data means
    building a new Dataset (and a new resolver on top of it).
    """

    def __init__(
        self,
        records: Iterable[ProteinRecord],
        cell_lines: Sequence[str],
        source: Optional[str] = None,
    ) -> None:
        self._records: Tuple[ProteinRecord, ...] = tuple(records)
        self._cell_lines: Tuple[str, ...] = tuple(cell_lines)
        self.source = source

        # ---------------------------------------------------------------------
        # Caches
        # ---------------------------------------------------------------------
        self._gene_list: Optional[List[str]] = None
        self._accession_list: Optional[List[str]] = None
        self._alias_index: Optional[Dict[str, str]] = None
        self._accession_index: Optional[Dict[str, str]] = None
        self._frame: Optional[pd.DataFrame] = None

    @classmethod
    def empty(cls) -> Dataset:
        return cls(records=(), cell_lines=(), source=None)

    # -------------------------------------------------------------------------
    # Basic accessors
    # -------------------------------------------------------------------------
    @property
    def records(self) -> Tuple[ProteinRecord, ...]:
        return self._records

    @property
    def cell_lines(self) -> Tuple[str, ...]:
        return self._cell_lines

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return (
            f"Dataset(source={self.source!r}, n_records={len(self._records)}, "
            f"n_cell_lines={len(self._cell_lines)})"
        )

    # -------------------------------------------------------------------------
    # Suggestion lists
    # -------------------------------------------------------------------------
    @property
    def gene_list(self) -> List[str]:
        """Distinct, sorted, non-blank raw gene-name fields."""
        if self._gene_list is None:
            self._gene_list = sorted({r.gene_names for r in self._records if r.gene_names.strip()})
        return self._gene_list

    @property
    def accession_list(self) -> List[str]:
        """Distinct, sorted, non-blank raw protein-group fields."""
        if self._accession_list is None:
            self._accession_list = sorted({r.protein_group for r in self._records if r.protein_group.strip()})
        return self._accession_list

    # -------------------------------------------------------------------------
    # Identifier indexes
    # -------------------------------------------------------------------------
    @property
    def alias_index(self) -> Dict[str, str]:
        if self._alias_index is None:
            self._alias_index = build_alias_index(self._records)
        return self._alias_index

    @property
    def accession_index(self) -> Dict[str, str]:
        if self._accession_index is None:
            self._accession_index = build_accession_index(self._records)
        return self._accession_index

    # -------------------------------------------------------------------------
    # Tabular view
    # -------------------------------------------------------------------------
    def to_frame(self) -> pd.DataFrame:
        """
        Records x cell lines copy-number matrix (NaN where no positive value),
        with the identifier fields as leading columns. Backs the full-table
        CSV download.
        """
        if self._frame is None:
            meta = pd.DataFrame(
                {
                    "protein_group": [r.protein_group for r in self._records],
                    "gene_names": [r.gene_names for r in self._records],
                    "protein_names": [r.protein_names for r in self._records],
                    "is_histone": [r.is_histone for r in self._records],
                    "mass": [r.mass for r in self._records],
                }
            )
            distinct_lines = list(dict.fromkeys(self._cell_lines))
            values = pd.DataFrame(
                [[r.copy_numbers.get(cl) for cl in distinct_lines] for r in self._records],
                columns=distinct_lines,
                dtype=float,
            )
            self._frame = pd.concat([meta, values], axis=1)
        return self._frame
