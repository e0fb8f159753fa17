from cn_browser.core.indexes import build_accession_index, build_alias_index
from cn_browser.core.record import ProteinRecord, split_identifiers


def _record(protein_group: str, gene_names: str) -> ProteinRecord:
    return ProteinRecord(protein_group=protein_group, gene_names=gene_names, copy_numbers={"A549": 1.0})


def test_split_identifiers_handles_semicolons_and_whitespace():
    assert split_identifiers("GAPDH; G3PD") == ["GAPDH", "G3PD"]
    assert split_identifiers(" H3C1;;H3-3A  H3F3A ") == ["H3C1", "H3-3A", "H3F3A"]
    assert split_identifiers("") == []
    assert split_identifiers(None) == []


def test_alias_index_maps_every_token_to_gene_field_uppercased():
    records = [_record("P04406", "GAPDH; g3pd"), _record("P60709", "ACTB")]

    index = build_alias_index(records)

    assert index == {
        "GAPDH": "GAPDH; g3pd",
        "G3PD": "GAPDH; g3pd",
        "ACTB": "ACTB",
    }


def test_accession_index_maps_accessions_to_gene_field():
    records = [_record("P04406;e7eut4", "GAPDH; G3PD")]

    index = build_accession_index(records)

    assert index == {"P04406": "GAPDH; G3PD", "E7EUT4": "GAPDH; G3PD"}


def test_records_without_tokens_contribute_nothing():
    records = [_record("", ""), _record("P1", "G1")]

    assert build_alias_index(records) == {"G1": "G1"}
    assert build_accession_index(records) == {"P1": "G1"}


def test_duplicate_token_last_record_wins_but_keeps_first_position():
    # Current behaviour: a token shared by two records is owned by the later
    # record, silently hiding the earlier one from exact lookups.
    records = [
        _record("P1", "SHARED;FIRST"),
        _record("P2", "SECOND;SHARED"),
    ]

    index = build_alias_index(records)

    assert index["SHARED"] == "SECOND;SHARED"
    assert index["FIRST"] == "SHARED;FIRST"
    assert list(index) == ["SHARED", "FIRST", "SECOND"]


def test_index_iteration_follows_record_then_token_order():
    records = [_record("P1", "B A"), _record("P2", "C")]

    assert list(build_alias_index(records)) == ["B", "A", "C"]
