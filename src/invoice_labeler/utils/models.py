"""
Data Models for the Invoice Labeler

This module defines the Pydantic models shared by the extraction,
numbering and reporting components.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict


# Output sentinels used when a field could not be extracted
VENDOR_NOT_FOUND = "Nie znaleziono"
TAX_ID_MISSING = "Brak"
INVOICE_NUMBER_UNKNOWN = "Nieznany"

# Report column headers, in export order
REPORT_COLUMNS = [
    "Nazwa kontrahenta",
    "NIP nabywcy",
    "Numer faktury",
    "MPK",
    "Grupa",
    "Numer kolejny",
    "Etykieta",
]


class VendorEntry(BaseModel):
    """
    Cost center and group assigned to a vendor by the guidelines.

    An entry with empty fields means the vendor is not mapped.
    """
    cost_center: str = Field(
        default="",
        description="Cost center code (MPK), e.g. MPK610"
    )
    group: str = Field(
        default="",
        description="Group code formatted as digits/digits, e.g. 3/8"
    )

    @property
    def is_empty(self) -> bool:
        return not self.cost_center and not self.group


class SequenceState(BaseModel):
    """Last issued sequence value for one (cost center, group) key."""
    last_value: int = Field(ge=1, description="Highest value issued or observed")
    last_year: int = Field(description="Year the last value belongs to")


class AssignedNumber(BaseModel):
    """A sequence number handed out by the registry."""
    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=1)
    year: int

    @property
    def formatted(self) -> str:
        """Zero-padded display form, e.g. 007/2025."""
        return f"{self.value:03d}/{self.year}"


class ExtractedFields(BaseModel):
    """
    Fields pulled out of the invoice text.

    Each field is independent; ``None`` means no rule matched. The
    ``display_*`` properties substitute the output sentinels.
    """
    vendor: Optional[str] = Field(default=None, description="Seller name")
    buyer_tax_id: Optional[str] = Field(default=None, description="Buyer NIP (10 digits)")
    invoice_number: Optional[str] = Field(default=None, description="Invoice number")

    @property
    def display_vendor(self) -> str:
        return self.vendor if self.vendor is not None else VENDOR_NOT_FOUND

    @property
    def display_buyer_tax_id(self) -> str:
        return self.buyer_tax_id if self.buyer_tax_id is not None else TAX_ID_MISSING

    @property
    def display_invoice_number(self) -> str:
        return self.invoice_number if self.invoice_number is not None else INVOICE_NUMBER_UNKNOWN


class OutputRecord(BaseModel):
    """
    One processed invoice, as it appears in the report.

    Immutable once composed.
    """
    model_config = ConfigDict(frozen=True)

    vendor: str
    buyer_tax_id: str
    invoice_number: str
    cost_center: str
    group: str
    sequence_number: str = Field(description="Formatted sequence number, e.g. 181/2025")
    label: str = Field(description="Machine label group;costCenter;number")

    def to_row(self) -> Dict[str, str]:
        """Report row keyed by the report column headers."""
        values = [
            self.vendor,
            self.buyer_tax_id,
            self.invoice_number,
            self.cost_center,
            self.group,
            self.sequence_number,
            self.label,
        ]
        return dict(zip(REPORT_COLUMNS, values))
