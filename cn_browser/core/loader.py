from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from cn_browser.core.dataset import Dataset
from cn_browser.core.exceptions import DatasetLoadError, DatasetSchemaError
from cn_browser.core.record import ProteinRecord

logger = logging.getLogger(__name__)

_PATH_TAIL = re.compile(r"\\([^\\]+)$")
_RUN_PREFIX = re.compile(r"\d+_\d+_")

Source = Union[str, Path]


@dataclass(frozen=True)
class ColumnSchema:
    """
    Header naming convention of the copy-number export.

    Cell-line columns are recognised by prefix; the remaining fields are read
    by exact header name. Column order is irrelevant and unknown columns are
    ignored.
    """
    cell_line_prefix: str = "N: Copy number"
    extension: str = ".raw"
    protein_group: str = "T: Protein.Group"
    gene_names: str = "T: Gene Names"
    protein_names: str = "T: Protein names"
    histones: str = "C: Histones"
    mass: str = "N: Mass"
    histone_marker: str = "+"
    sample_prefix: str = "GS-"

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return (self.protein_group, self.gene_names)


DEFAULT_SCHEMA = ColumnSchema()


def extract_cell_line_name(column: str, schema: ColumnSchema = DEFAULT_SCHEMA) -> str:
    """
    Turn a raw copy-number column header into a short cell-line label.

        "N: Copy number A549.raw"                         -> "A549"
        "N: Copy number-D:\\runs\\GS-20230101_01_HELA.raw" -> "HELA"

    Names that don't carry an instrument file path are only trimmed, so the
    transformation is idempotent for already-short labels.
    """
    name = column.replace(schema.cell_line_prefix, "", 1).replace(schema.extension, "", 1).strip()
    if name.startswith("-"):
        name = name[1:]
    if name.startswith(" "):
        name = name[1:]

    path_match = _PATH_TAIL.search(name)
    if path_match:
        name = (
            path_match.group(1)
            .replace(schema.extension, "", 1)
            .replace(schema.sample_prefix, "", 1)
        )
        name = _RUN_PREFIX.sub("", name, count=1)

    return name.strip()


def _validate_header(columns: Sequence[str], schema: ColumnSchema, source: str) -> List[str]:
    missing = [name for name in schema.required_fields if name not in columns]
    if missing:
        msg = f"Copy-number table '{source}' is missing required columns: {missing}"
        logger.error(msg, extra={"source": source, "missing": missing})
        raise DatasetSchemaError(msg)

    cell_line_columns = [c for c in columns if c.startswith(schema.cell_line_prefix)]
    if not cell_line_columns:
        msg = (
            f"Copy-number table '{source}' has no columns starting with "
            f"'{schema.cell_line_prefix}'"
        )
        logger.error(msg, extra={"source": source})
        raise DatasetSchemaError(msg)

    return cell_line_columns


def _text_column(df: pd.DataFrame, name: str) -> pd.Series:
    if name in df.columns:
        return df[name].astype(str)
    return pd.Series([""] * len(df), index=df.index, dtype=object)


def _parse_mass(df: pd.DataFrame, schema: ColumnSchema) -> np.ndarray:
    if schema.mass not in df.columns:
        return np.zeros(len(df))
    mass = pd.to_numeric(df[schema.mass], errors="coerce").to_numpy(dtype=float)
    # unparsable, infinite or negative masses collapse to 0
    return np.where(np.isfinite(mass) & (mass > 0), mass, 0.0)


def frame_to_dataset(
    df: pd.DataFrame,
    schema: ColumnSchema = DEFAULT_SCHEMA,
    source: str = "<memory>",
) -> Dataset:
    """
    Normalise a string-typed copy-number DataFrame into a Dataset.

    A row becomes a ProteinRecord only if at least one cell-line value parses
    as a finite, strictly positive float. Other rows are dropped silently.
    """
    columns = [str(c) for c in df.columns]
    cell_line_columns = _validate_header(columns, schema, source)
    cell_lines = [extract_cell_line_name(c, schema) for c in cell_line_columns]

    numeric = df[cell_line_columns].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
    positive = np.isfinite(numeric) & (numeric > 0)
    keep = positive.any(axis=1)

    protein_groups = _text_column(df, schema.protein_group).to_numpy()
    gene_names = _text_column(df, schema.gene_names).to_numpy()
    protein_names = _text_column(df, schema.protein_names).to_numpy()
    histones = (_text_column(df, schema.histones) == schema.histone_marker).to_numpy()
    masses = _parse_mass(df, schema)

    records: List[ProteinRecord] = []
    for i in np.flatnonzero(keep):
        copy_numbers = {
            cell_line: float(value)
            for cell_line, value, ok in zip(cell_lines, numeric[i], positive[i])
            if ok
        }
        records.append(
            ProteinRecord(
                protein_group=protein_groups[i],
                gene_names=gene_names[i],
                protein_names=protein_names[i],
                is_histone=bool(histones[i]),
                mass=float(masses[i]),
                copy_numbers=copy_numbers,
            )
        )

    n_dropped = int(len(df) - len(records))
    logger.info(
        "Copy-number table parsed",
        extra={
            "source": source,
            "n_rows": int(len(df)),
            "n_records": len(records),
            "n_dropped": n_dropped,
            "n_cell_lines": len(cell_lines),
        },
    )

    return Dataset(records=records, cell_lines=cell_lines, source=source)


def _read_frame(buffer, source: str) -> pd.DataFrame:
    try:
        return pd.read_csv(
            buffer,
            sep=",",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error("Failed to read copy-number table", extra={"source": source, "error": str(e)})
        raise DatasetLoadError(f"Failed to read copy-number table from {source}: {e}") from e


def parse_copy_number_table(text: str, schema: ColumnSchema = DEFAULT_SCHEMA, source: str = "<text>") -> Dataset:
    """Parse already-fetched CSV text into a Dataset."""
    df = _read_frame(io.StringIO(text), source)
    return frame_to_dataset(df, schema, source)


def load_dataset(source: Source, schema: ColumnSchema = DEFAULT_SCHEMA) -> Dataset:
    """
    Read a copy-number CSV from a local path or URL (anything pandas.read_csv
    accepts) and build a Dataset.

    :raises DatasetLoadError: if the source cannot be read or parsed
    :raises DatasetSchemaError: if the header lacks required columns
    """
    label = str(source)
    if isinstance(source, Path) and not source.is_file():
        raise DatasetLoadError(f"Copy-number file not found at {source}.")

    logger.info("Loading copy-number table", extra={"source": label})
    df = _read_frame(source, label)
    return frame_to_dataset(df, schema, label)
