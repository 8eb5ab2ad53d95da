"""
Vendor Mapping Table

Maps vendor names to the cost center (MPK) and group taken from the
guidelines workbook. Each guideline label is a semicolon separated list
such as ``3/8;MPK610;180/2025``; its tokens are classified by shape.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..utils.models import VendorEntry
from .sequence_registry import SequenceRegistry, sequence_key

logger = logging.getLogger(__name__)


COST_CENTER = "cost_center"
GROUP = "group"
HISTORICAL_NUMBER = "number"

# Checked in this order; a token takes the role of the first rule found in it.
# Codes may sit inside other text ("Grupa 3/8"), digits around them may not.
GROUP_PATTERN = re.compile(r'(?<!\d)\d+/\d{1,3}(?!\d)')
NUMBER_PATTERN = re.compile(r'(?<!\d)(\d+)/(\d{4})(?!\d)')


def match_token(token: str) -> Tuple[Optional[str], str]:
    """Role of a label token and the code found in it; (None, '') when no rule matches."""
    if token.upper().startswith('MPK'):
        return COST_CENTER, token.upper()
    match = GROUP_PATTERN.search(token)
    if match:
        return GROUP, match.group(0)
    match = NUMBER_PATTERN.search(token)
    if match:
        return HISTORICAL_NUMBER, match.group(0)
    return None, ''


def classify_token(token: str) -> Optional[str]:
    """Role of a single label token, or None when it matches no rule."""
    return match_token(token)[0]


def parse_label(label: str) -> Dict[str, str]:
    """
    Split a guideline label into its cost center, group and number.

    Later tokens with the same role replace earlier ones; roles that do
    not occur are empty strings.
    """
    parts = {COST_CENTER: '', GROUP: '', HISTORICAL_NUMBER: ''}
    for token in label.split(';'):
        role, code = match_token(token.strip())
        if role is not None:
            parts[role] = code
    return parts


def normalize_vendor(name: Optional[str]) -> str:
    return (name or '').strip().lower()


class MappingTable:
    """
    Vendor name to {cost center, group} lookup for one session.

    Args:
        registry: Receives the historical numbers found in imported labels
    """

    def __init__(self, registry: SequenceRegistry):
        self.registry = registry
        self._entries: Dict[str, VendorEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, vendor_name: str) -> bool:
        return normalize_vendor(vendor_name) in self._entries

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def import_entry(self, vendor_name: str, label: str) -> bool:
        """
        Store the guideline for a vendor, replacing any earlier one.

        Args:
            vendor_name: Vendor as written in the guidelines
            label: Guideline label, e.g. ``3/8;MPK610;180/2025``

        Returns:
            False if the row was skipped for an empty vendor or label
        """
        vendor_key = normalize_vendor(vendor_name)
        label = (label or '').strip()
        if not vendor_key or not label:
            return False

        parts = parse_label(label)
        self._entries[vendor_key] = VendorEntry(
            cost_center=parts[COST_CENTER],
            group=parts[GROUP],
        )

        if parts[COST_CENTER] and parts[GROUP] and parts[HISTORICAL_NUMBER]:
            match = NUMBER_PATTERN.fullmatch(parts[HISTORICAL_NUMBER])
            value = int(match.group(1))
            # 000/yyyy carries no watermark
            if value >= 1:
                self.registry.observe_historical(
                    sequence_key(parts[COST_CENTER], parts[GROUP]),
                    value,
                    int(match.group(2)),
                )
        return True

    def import_entries(self, rows: List[Tuple[str, str]]) -> int:
        """Import (vendor, label) pairs in order; returns how many were stored."""
        imported = sum(1 for vendor, label in rows if self.import_entry(vendor, label))
        logger.info(f"Imported {imported} of {len(rows)} guideline rows")
        return imported

    def lookup(self, vendor_name: Optional[str]) -> VendorEntry:
        """Guideline for a vendor; an empty entry when there is none."""
        entry = self._entries.get(normalize_vendor(vendor_name))
        return entry if entry is not None else VendorEntry()
