import re

from invoice_labeler.extraction.field_extractor import (
    BUYER_TAX_ID_RULES,
    INVOICE_NUMBER_RULES,
    VENDOR_RULES,
    FieldExtractor,
    PatternRule,
    extract_buyer_tax_id,
    extract_invoice_number,
    extract_vendor,
    find_vendor,
)

from conftest import INVOICE_TEXT


def test_vendor_from_seller_label():
    assert extract_vendor(INVOICE_TEXT) == "Acme Sp. z o.o."


def test_vendor_on_same_line_as_label():
    text = "Sprzedawca: Delta Sp. z o.o.\nNabywca: Beta\n"
    assert extract_vendor(text) == "Delta Sp. z o.o."


def test_vendor_skips_blank_lines_after_label():
    text = "SPRZEDAWCA\n\n   Omega Sp. k.\nNIP 1111111111\n"
    assert extract_vendor(text) == "Omega Sp. k."


def test_vendor_falls_back_to_company_line():
    text = "Faktura nr 1\nNabywca: Beta sp. z o.o.\nNIP 123 sp. z o.o.\nFirma Krol sp. z o.o.  \n"
    assert extract_vendor(text) == "Firma Krol sp. z o.o."


def test_vendor_not_found_sentinel():
    assert extract_vendor("Faktura\n123\n") == "Nie znaleziono"
    assert find_vendor("Faktura\n123\n") is None
    assert extract_vendor("") == "Nie znaleziono"


def test_buyer_tax_id_from_buyer_section():
    assert extract_buyer_tax_id(INVOICE_TEXT) == "1234567890"


def test_buyer_tax_id_without_buyer_section_uses_first_labelled_nip():
    assert extract_buyer_tax_id("Dane\nNIP:5260001111\n") == "5260001111"


def test_buyer_tax_id_falls_back_to_any_ten_digits():
    text = "NIP 5260001111\nNabywca: Beta\nbez numeru\n"
    assert extract_buyer_tax_id(text) == "5260001111"


def test_buyer_tax_id_ignores_longer_numbers():
    assert extract_buyer_tax_id("Konto 12345678901234\n") == "Brak"


def test_invoice_number_with_prefix():
    assert extract_invoice_number("Faktura VAT FZ 328/01/2023\n") == "FZ 328/01/2023"


def test_invoice_number_prefix_whitespace_is_collapsed():
    assert extract_invoice_number("Nr FV   12-3-24\n") == "FV 12-3-24"


def test_invoice_number_without_prefix():
    assert extract_invoice_number("numer 18/11/2023\n") == "18/11/2023"


def test_invoice_number_unknown_sentinel():
    assert extract_invoice_number("Faktura bez numeru\n") == "Nieznany"


def test_rule_order_is_fixed():
    assert [rule.name for rule in VENDOR_RULES] == ["seller_label", "company_line"]
    assert [rule.name for rule in BUYER_TAX_ID_RULES] == ["buyer_section_nip", "any_ten_digits"]
    assert [rule.name for rule in INVOICE_NUMBER_RULES] == ["prefixed_number", "bare_number"]


def test_extractor_returns_none_for_missing_fields():
    fields = FieldExtractor().extract("nic tu nie ma\n")
    assert fields.vendor is None
    assert fields.buyer_tax_id is None
    assert fields.invoice_number is None
    assert fields.display_vendor == "Nie znaleziono"
    assert fields.display_buyer_tax_id == "Brak"
    assert fields.display_invoice_number == "Nieznany"


def test_extractor_accepts_custom_rules():
    extractor = FieldExtractor(
        invoice_number_rules=[PatternRule("ref", re.compile(r'Ref: (\S+)'))],
    )
    fields = extractor.extract("Ref: ABC-1\n" + INVOICE_TEXT)
    assert fields.invoice_number == "ABC-1"
    assert fields.vendor == "Acme Sp. z o.o."
