"""
Number Assigner

Resolves a vendor to its cost center and group and issues the next
sequence number for that pair.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from ..utils.models import AssignedNumber
from .mapping_table import MappingTable
from .sequence_registry import SequenceRegistry, sequence_key

logger = logging.getLogger(__name__)

DEFAULT_COST_CENTER = "MPK000"
DEFAULT_GROUP = "0/0"

DISPLAY_SEPARATOR = " – "


class Assignment(BaseModel):
    """Resolved codes plus the number issued for them."""
    cost_center: str
    group: str
    number: AssignedNumber
    from_guidelines: bool

    @property
    def sequence_number(self) -> str:
        return self.number.formatted

    @property
    def label(self) -> str:
        """Machine label: group;costCenter;number."""
        return ';'.join([self.group, self.cost_center, self.sequence_number])

    @property
    def display_label(self) -> str:
        """Human label drawn on the document: group – costCenter – number."""
        return DISPLAY_SEPARATOR.join([self.group, self.cost_center, self.sequence_number])


class NumberAssigner:
    """
    Issues sequence numbers for vendors.

    Vendors without a guideline get the default cost center and group
    instead of an error, so every invoice still receives a number.
    """

    def __init__(
        self,
        mapping: MappingTable,
        registry: SequenceRegistry,
        default_cost_center: str = DEFAULT_COST_CENTER,
        default_group: str = DEFAULT_GROUP
    ):
        self.mapping = mapping
        self.registry = registry
        self.default_cost_center = default_cost_center
        self.default_group = default_group

    def resolve_and_assign(self, vendor: Optional[str]) -> Assignment:
        """
        Look up the vendor and advance its counter.

        Args:
            vendor: Extracted vendor name, None when extraction found nothing

        Returns:
            Assignment with the resolved codes and the new number
        """
        entry = self.mapping.lookup(vendor)
        cost_center = entry.cost_center or self.default_cost_center
        group = entry.group or self.default_group

        if entry.is_empty:
            logger.info(f"No guideline for vendor {vendor!r}, using {cost_center} {group}")

        number = self.registry.assign_next(sequence_key(cost_center, group))
        return Assignment(
            cost_center=cost_center,
            group=group,
            number=number,
            from_guidelines=not entry.is_empty,
        )
