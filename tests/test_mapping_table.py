import pandas as pd
import pytest

from invoice_labeler.numbering.guidelines import (
    find_guidelines_sheet,
    import_guidelines_file,
    import_guidelines_frame,
)
from invoice_labeler.numbering.mapping_table import MappingTable, classify_token, parse_label
from invoice_labeler.numbering.sequence_registry import SequenceRegistry
from invoice_labeler.utils.errors import UserInputError

from conftest import write_guidelines


@pytest.fixture()
def registry(clock):
    return SequenceRegistry(clock=clock)


@pytest.fixture()
def mapping(registry):
    return MappingTable(registry)


def test_parse_label_classifies_tokens_by_shape():
    assert parse_label("3/8;MPK610;180/2025") == {
        "cost_center": "MPK610",
        "group": "3/8",
        "number": "180/2025",
    }


def test_parse_label_in_any_order_and_case():
    assert parse_label(" 180/2025 ; mpk610 ;3/8") == {
        "cost_center": "MPK610",
        "group": "3/8",
        "number": "180/2025",
    }


def test_classify_token_rule_order():
    assert classify_token("MPK12/2025") == "cost_center"
    assert classify_token("12/34") == "group"
    assert classify_token("12/2025") == "number"
    assert classify_token("opis") is None


def test_codes_are_found_inside_descriptive_tokens():
    assert parse_label("Grupa 3/8;MPK610;nr 180/2025") == {
        "cost_center": "MPK610",
        "group": "3/8",
        "number": "180/2025",
    }
    assert classify_token("180/20251") is None


def test_descriptive_label_seeds_registry(mapping, registry):
    mapping.import_entry("Acme", "Grupa 3/8; MPK610; nr 180/2025")
    assert mapping.lookup("acme").group == "3/8"
    assert registry.get("MPK610|3/8").last_value == 180


def test_import_entry_stores_normalized_vendor(mapping):
    assert mapping.import_entry("  ACME Sp. z o.o. ", "3/8;MPK610")
    entry = mapping.lookup("acme sp. z o.o.")
    assert (entry.cost_center, entry.group) == ("MPK610", "3/8")
    assert "Acme SP. Z O.O." in mapping


def test_last_import_wins_without_merge(mapping):
    mapping.import_entry("Acme", "3/8;MPK610")
    mapping.import_entry("acme ", "MPK200")
    entry = mapping.lookup("ACME")
    assert (entry.cost_center, entry.group) == ("MPK200", "")
    assert len(mapping) == 1


def test_rows_with_empty_vendor_or_label_are_skipped(mapping):
    assert not mapping.import_entry("", "3/8;MPK610")
    assert not mapping.import_entry("Acme", "   ")
    assert mapping.is_empty


def test_lookup_of_unknown_vendor_is_empty(mapping):
    entry = mapping.lookup("Nieznana firma")
    assert (entry.cost_center, entry.group) == ("", "")
    assert mapping.lookup(None).is_empty


def test_historical_number_seeds_registry(mapping, registry):
    mapping.import_entry("Acme", "3/8;MPK610;180/2025")
    mapping.import_entry("Acme 2", "3/8;MPK610;150/2025")
    state = registry.get("MPK610|3/8")
    assert (state.last_value, state.last_year) == (180, 2025)


def test_historical_number_needs_cost_center_and_group(mapping, registry):
    mapping.import_entry("Acme", "MPK610;180/2025")
    assert len(registry) == 0


def test_import_guidelines_frame_skips_incomplete_rows(mapping):
    frame = pd.DataFrame({
        "Nazwa kontrahenta": ["Acme", "", "Beta", None],
        "Etykieta": ["3/8;MPK610", "1/1;MPK1", "", "2/2;MPK2"],
    })
    assert import_guidelines_frame(mapping, frame) == 1
    assert "acme" in mapping


def test_import_guidelines_file_reads_example_sheet(tmp_path, mapping, registry):
    path = write_guidelines(
        tmp_path / "wytyczne.xlsx",
        [
            ["Acme Sp. z o.o.", "3/8;MPK610;180/2025"],
            ["Gamma", "1/2;MPK100"],
            ["Gamma", "4/4;MPK400"],
        ],
    )
    assert import_guidelines_file(mapping, path) == 3
    assert mapping.lookup("gamma").cost_center == "MPK400"
    assert registry.get("MPK610|3/8").last_value == 180


def test_import_guidelines_file_without_matching_sheet(tmp_path, mapping):
    path = write_guidelines(tmp_path / "inne.xlsx", [["Acme", "3/8;MPK610"]], sheet_name="Dane")
    assert import_guidelines_file(mapping, path) == 0
    assert mapping.is_empty


def test_import_guidelines_file_missing(tmp_path, mapping):
    with pytest.raises(UserInputError):
        import_guidelines_file(mapping, tmp_path / "brak.xlsx")


def test_find_guidelines_sheet_ignores_case():
    assert find_guidelines_sheet(["Opis", "Koszty - PRZYKLADY"]) == "Koszty - PRZYKLADY"
    assert find_guidelines_sheet(["Opis"]) is None
