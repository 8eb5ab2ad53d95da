"""
Field Extractor for Polish Invoices

Pulls the seller name, the buyer's tax ID (NIP) and the invoice number
out of the plain document text. Every field is an ordered list of
rules; the first rule that matches wins, later rules are fallbacks.

All functions here are pure: they only read the text they are given.
"""

import re
from typing import List, Optional, Pattern

from ..utils.models import (
    ExtractedFields,
    INVOICE_NUMBER_UNKNOWN,
    TAX_ID_MISSING,
    VENDOR_NOT_FOUND,
)


class ExtractionRule:
    """A single named matching rule."""

    name = "rule"

    def try_match(self, text: str) -> Optional[str]:
        raise NotImplementedError


class PatternRule(ExtractionRule):
    """
    Returns a capture group of the first regex match in the text.

    Args:
        name: Rule name used in logs and tests
        pattern: Compiled regular expression
        group: Capture group to return
        collapse_whitespace: Replace whitespace runs in the match by one space
    """

    def __init__(
        self,
        name: str,
        pattern: Pattern,
        group: int = 1,
        collapse_whitespace: bool = False
    ):
        self.name = name
        self.pattern = pattern
        self.group = group
        self.collapse_whitespace = collapse_whitespace

    def try_match(self, text: str) -> Optional[str]:
        match = self.pattern.search(text)
        if not match:
            return None
        value = match.group(self.group)
        if self.collapse_whitespace:
            value = re.sub(r'\s+', ' ', value)
        value = value.strip()
        return value or None


class SectionPatternRule(PatternRule):
    """
    Like PatternRule, but searches only from the first occurrence of a
    section marker onwards (the whole text when the marker is absent).
    """

    def __init__(self, name: str, section_marker: Pattern, pattern: Pattern, group: int = 1):
        super().__init__(name, pattern, group)
        self.section_marker = section_marker

    def try_match(self, text: str) -> Optional[str]:
        marker = self.section_marker.search(text)
        search_area = text[marker.start():] if marker else text
        return super().try_match(search_area)


class CompanyLineRule(ExtractionRule):
    """First line carrying a company-form marker and no excluded marker."""

    name = "company_line"

    def __init__(self, company_marker: Pattern, excluded: Pattern):
        self.company_marker = company_marker
        self.excluded = excluded

    def try_match(self, text: str) -> Optional[str]:
        for line in text.split('\n'):
            if self.company_marker.search(line) and not self.excluded.search(line):
                return line.strip()
        return None


def first_match(rules: List[ExtractionRule], text: str) -> Optional[str]:
    """Run rules in order and return the first result, or None."""
    if not text:
        return None
    for rule in rules:
        value = rule.try_match(text)
        if value is not None:
            return value
    return None


# Seller: the line after "Sprzedawca", else the first line that looks like a company
VENDOR_RULES: List[ExtractionRule] = [
    PatternRule(
        "seller_label",
        re.compile(r'Sprzedawca:?\s*\n?([^\n]+)\n', re.IGNORECASE),
    ),
    CompanyLineRule(
        company_marker=re.compile(r'sp\.?', re.IGNORECASE),
        excluded=re.compile(r'Nabywca|NIP', re.IGNORECASE),
    ),
]

# Buyer NIP: labelled NIP in the buyer section, else any standalone 10-digit number
BUYER_TAX_ID_RULES: List[ExtractionRule] = [
    SectionPatternRule(
        "buyer_section_nip",
        section_marker=re.compile(r'Nabywca', re.IGNORECASE),
        pattern=re.compile(r'NIP[:\s]*([0-9]{10})'),
    ),
    PatternRule(
        "any_ten_digits",
        re.compile(r'(?<![0-9])([0-9]{10})(?![0-9])'),
    ),
]

# Invoice number: FZ 328/01/2023 style, else bare 18/11/2023
INVOICE_NUMBER_RULES: List[ExtractionRule] = [
    PatternRule(
        "prefixed_number",
        re.compile(r'([A-Z]{1,3}\s*\d+[/-]\d+[/-]\d{2,4})'),
        collapse_whitespace=True,
    ),
    PatternRule(
        "bare_number",
        re.compile(r'(\d+[/-]\d+[/-]\d{4})'),
    ),
]


def find_vendor(text: str) -> Optional[str]:
    return first_match(VENDOR_RULES, text)


def find_buyer_tax_id(text: str) -> Optional[str]:
    return first_match(BUYER_TAX_ID_RULES, text)


def find_invoice_number(text: str) -> Optional[str]:
    return first_match(INVOICE_NUMBER_RULES, text)


def extract_vendor(text: str) -> str:
    """Seller name, or the "not found" sentinel."""
    value = find_vendor(text)
    return value if value is not None else VENDOR_NOT_FOUND


def extract_buyer_tax_id(text: str) -> str:
    """Buyer NIP, or the "missing" sentinel."""
    value = find_buyer_tax_id(text)
    return value if value is not None else TAX_ID_MISSING


def extract_invoice_number(text: str) -> str:
    """Invoice number, or the "unknown" sentinel."""
    value = find_invoice_number(text)
    return value if value is not None else INVOICE_NUMBER_UNKNOWN


class FieldExtractor:
    """
    Extracts all header fields from invoice text.

    The rule lists can be replaced per instance, which keeps each chain
    independently testable.
    """

    def __init__(
        self,
        vendor_rules: Optional[List[ExtractionRule]] = None,
        buyer_tax_id_rules: Optional[List[ExtractionRule]] = None,
        invoice_number_rules: Optional[List[ExtractionRule]] = None
    ):
        self.vendor_rules = vendor_rules if vendor_rules is not None else VENDOR_RULES
        self.buyer_tax_id_rules = (
            buyer_tax_id_rules if buyer_tax_id_rules is not None else BUYER_TAX_ID_RULES
        )
        self.invoice_number_rules = (
            invoice_number_rules if invoice_number_rules is not None else INVOICE_NUMBER_RULES
        )

    def extract(self, text: str) -> ExtractedFields:
        """
        Extract vendor, buyer tax ID and invoice number.

        Args:
            text: Full document text, pages separated by newlines

        Returns:
            ExtractedFields with None for every field no rule matched
        """
        return ExtractedFields(
            vendor=first_match(self.vendor_rules, text),
            buyer_tax_id=first_match(self.buyer_tax_id_rules, text),
            invoice_number=first_match(self.invoice_number_rules, text),
        )
