from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from cn_browser.core.dataset import Dataset
from cn_browser.core.record import ProteinRecord, find_first_record


@dataclass(frozen=True)
class ScatterPoint:
    rank: int
    log_copy_number: float
    gene_names: str
    copy_number: float

    @property
    def primary_gene(self) -> str:
        return self.gene_names.split(";")[0].strip()


@dataclass(frozen=True)
class BarEntry:
    cell_line: str
    copy_number: float
    gene_names: str


@dataclass(frozen=True)
class ProteinRow:
    gene: str
    cell_line: str
    copy_number: float
    accession: str


def scatter_series(dataset: Dataset, cell_line: str) -> List[ScatterPoint]:
    """
    Rank-ordered series for the rank-vs-copy-number plot of one cell line.

    Records without a positive value for the cell line are skipped; the rest
    are sorted by copy number descending (stable: ties keep record order) and
    ranked from 1.
    """
    measured = [
        (record.gene_names, record.copy_numbers[cell_line])
        for record in dataset.records
        if record.copy_numbers.get(cell_line, 0) > 0
    ]
    measured.sort(key=lambda item: item[1], reverse=True)

    return [
        ScatterPoint(
            rank=i + 1,
            log_copy_number=math.log10(copy_number),
            gene_names=gene_names,
            copy_number=copy_number,
        )
        for i, (gene_names, copy_number) in enumerate(measured)
    ]


def bar_series_for_record(record: Optional[ProteinRecord], cell_lines: Sequence[str]) -> List[BarEntry]:
    """Per-cell-line values of one record, in caller order, positive only."""
    if record is None:
        return []

    entries: List[BarEntry] = []
    for cell_line in cell_lines:
        copy_number = record.copy_numbers.get(cell_line)
        if copy_number is not None and copy_number > 0:
            entries.append(BarEntry(cell_line=cell_line, copy_number=copy_number, gene_names=record.gene_names))
    return entries


def bar_series(dataset: Dataset, gene_query: str, cell_lines: Sequence[str]) -> List[BarEntry]:
    """
    Bar series for the first record (dataset order) whose aliases fuzzy-match
    gene_query. Emitted in caller-supplied cell-line order; sorting for
    display is left to the view.
    """
    return bar_series_for_record(find_first_record(dataset.records, gene_query), cell_lines)


def bar_series_for_accession(dataset: Dataset, accession: str, cell_lines: Sequence[str]) -> List[BarEntry]:
    return bar_series_for_record(find_first_record(dataset.records, accession, by_accession=True), cell_lines)


def highlight_mask(points: Sequence[ScatterPoint], genes: Iterable[str]) -> List[bool]:
    """
    True for points whose ';'-separated gene tokens intersect the
    highlighted genes (case-insensitive).
    """
    wanted = {g.strip().upper() for g in genes if g and g.strip()}
    if not wanted:
        return [False] * len(points)
    return [
        any(token.strip().upper() in wanted for token in point.gene_names.split(";"))
        for point in points
    ]


def selected_proteins_table(
    dataset: Dataset,
    genes: Sequence[str],
    cell_lines: Sequence[str],
) -> List[ProteinRow]:
    """
    Detail rows for highlighted genes across the selected cell lines, sorted by
    copy number descending. Genes are matched to records with the same fuzzy
    rule as the bar series.
    """
    rows: List[ProteinRow] = []
    if not genes or not cell_lines:
        return rows

    for gene in genes:
        record = find_first_record(dataset.records, gene)
        if record is None:
            continue
        accession = record.protein_group.split(";")[0]
        for cell_line in cell_lines:
            copy_number = record.copy_numbers.get(cell_line)
            if copy_number is not None:
                rows.append(ProteinRow(gene=gene, cell_line=cell_line, copy_number=copy_number, accession=accession))

    rows.sort(key=lambda row: row.copy_number, reverse=True)
    return rows


def to_frame(items: Sequence, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """DataFrame from a list of series dataclasses (empty frame with columns if none)."""
    if not items:
        return pd.DataFrame(columns=list(columns) if columns else None)
    return pd.DataFrame([asdict(item) for item in items])
