import math

import pandas as pd
import pytest

from cn_browser.core.exceptions import DatasetLoadError, DatasetSchemaError
from cn_browser.core.loader import (
    ColumnSchema,
    extract_cell_line_name,
    frame_to_dataset,
    load_dataset,
    parse_copy_number_table,
)

HEADER = (
    "T: Protein.Group,T: Gene Names,T: Protein names,C: Histones,N: Mass,"
    "N: Copy number A549.raw,N: Copy number HELA.raw"
)


def _make_csv(*rows: str, header: str = HEADER) -> str:
    """
    Tiny copy-number export with two cell lines (A549, HELA).
    Each row is the raw CSV line after the header.
    """
    return "\n".join([header, *rows]) + "\n"


# ---------------------------------------------------------------------------
# Cell-line names
# ---------------------------------------------------------------------------
def test_extract_cell_line_name_plain_header():
    assert extract_cell_line_name("N: Copy number A549.raw") == "A549"
    assert extract_cell_line_name("N: Copy number HELA.raw") == "HELA"


def test_extract_cell_line_name_windows_path_header():
    column = "N: Copy number-D:\\runs\\batch2\\GS-20230101_01_MCF7.raw"
    assert extract_cell_line_name(column) == "MCF7"


def test_extract_cell_line_name_strips_only_one_leading_separator():
    assert extract_cell_line_name("N: Copy number - HEK293.raw") == "HEK293"


def test_extract_cell_line_name_is_idempotent_without_path():
    once = extract_cell_line_name("N: Copy number U2OS.raw")
    assert extract_cell_line_name(once) == once


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def test_parse_extracts_cell_lines_in_header_order():
    text = _make_csv("P04406,GAPDH,GAPDH protein,,36053,100,200")
    ds = parse_copy_number_table(text)

    assert ds.cell_lines == ("A549", "HELA")


def test_parse_builds_records_with_fields():
    text = _make_csv(
        'P68431;P84243,H3C1;H3-3A,"Histone H3.1, variant",+,15404,8100000,7700000',
    )
    ds = parse_copy_number_table(text)

    assert len(ds) == 1
    record = ds.records[0]
    assert record.protein_group == "P68431;P84243"
    assert record.gene_names == "H3C1;H3-3A"
    assert record.protein_names == "Histone H3.1, variant"
    assert record.is_histone is True
    assert record.mass == pytest.approx(15404.0)
    assert dict(record.copy_numbers) == {"A549": 8100000.0, "HELA": 7700000.0}


def test_parse_omits_non_positive_and_unparsable_values():
    text = _make_csv(
        "P1,G1,,,100,0,250",
        "P2,G2,,,100,abc,-5",
        "P3,G3,,,100,,12.5",
    )
    ds = parse_copy_number_table(text)

    by_gene = {r.gene_names: dict(r.copy_numbers) for r in ds.records}
    assert by_gene == {"G1": {"HELA": 250.0}, "G3": {"HELA": 12.5}}


def test_parse_drops_rows_without_any_positive_value():
    text = _make_csv(
        "P1,G1,,,100,0,0",
        "P2,G2,,,100,NaN,",
        "P3,G3,,,100,5,",
    )
    ds = parse_copy_number_table(text)

    assert [r.gene_names for r in ds.records] == ["G3"]
    # every retained record has at least one positive measurement
    for record in ds.records:
        assert record.copy_numbers
        assert all(v > 0 for v in record.copy_numbers.values())


def test_parse_preserves_row_order_and_skips_blank_lines():
    text = _make_csv("P1,G1,,,1,5,", "", "P2,G2,,,1,6,", "", "P3,G3,,,1,7,")
    ds = parse_copy_number_table(text)

    assert [r.gene_names for r in ds.records] == ["G1", "G2", "G3"]


def test_parse_mass_defaults_to_zero_when_unparsable():
    text = _make_csv("P1,G1,,,not-a-number,5,", "P2,G2,,,,5,")
    ds = parse_copy_number_table(text)

    assert [r.mass for r in ds.records] == [0.0, 0.0]


def test_parse_ignores_unknown_columns_and_column_order():
    header = "N: Copy number HELA.raw,Extra,T: Gene Names,T: Protein.Group"
    text = _make_csv("42,whatever,TP53,P04637", header=header)
    ds = parse_copy_number_table(text)

    assert ds.cell_lines == ("HELA",)
    record = ds.records[0]
    assert record.gene_names == "TP53"
    assert record.protein_names == ""
    assert record.is_histone is False
    assert record.mass == 0.0


def test_parse_missing_required_header_raises_schema_error():
    header = "T: Protein.Group,N: Copy number A549.raw"
    with pytest.raises(DatasetSchemaError):
        parse_copy_number_table(_make_csv("P1,5", header=header))


def test_parse_without_cell_line_columns_raises_schema_error():
    header = "T: Protein.Group,T: Gene Names"
    with pytest.raises(DatasetSchemaError):
        parse_copy_number_table(_make_csv("P1,G1", header=header))


def test_parse_empty_text_raises_load_error():
    with pytest.raises(DatasetLoadError):
        parse_copy_number_table("")


def test_frame_to_dataset_with_custom_schema():
    schema = ColumnSchema(cell_line_prefix="CN:", extension=".d")
    df = pd.DataFrame(
        {
            "T: Protein.Group": ["P1"],
            "T: Gene Names": ["G1"],
            "CN: K562.d": ["3.5"],
        }
    )
    ds = frame_to_dataset(df, schema)

    assert ds.cell_lines == ("K562",)
    assert math.isclose(ds.records[0].copy_numbers["K562"], 3.5)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------
def test_load_dataset_from_file(tmp_path):
    path = tmp_path / "copy_numbers.csv"
    path.write_text(_make_csv("P04406,GAPDH; G3PD,,,36053,100,200"))

    ds = load_dataset(path)

    assert len(ds) == 1
    assert ds.source == str(path)
    assert ds.records[0].primary_gene == "GAPDH"


def test_load_dataset_missing_file_raises_load_error(tmp_path):
    with pytest.raises(DatasetLoadError):
        load_dataset(tmp_path / "does_not_exist.csv")
