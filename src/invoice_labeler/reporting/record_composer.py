"""
Record Composer

Combines the extracted fields and the number assignment into the
output record and keeps the session's records in processing order.
"""

import logging
from typing import List, Tuple

from ..numbering.assigner import Assignment
from ..utils.models import ExtractedFields, OutputRecord

logger = logging.getLogger(__name__)


class RecordComposer:
    """Builds output records and collects them for the report."""

    def __init__(self):
        self._records: List[OutputRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[OutputRecord, ...]:
        return tuple(self._records)

    def compose(self, fields: ExtractedFields, assignment: Assignment) -> OutputRecord:
        """Create the record for one invoice and append it to the session list."""
        record = OutputRecord(
            vendor=fields.display_vendor,
            buyer_tax_id=fields.display_buyer_tax_id,
            invoice_number=fields.display_invoice_number,
            cost_center=assignment.cost_center,
            group=assignment.group,
            sequence_number=assignment.sequence_number,
            label=assignment.label,
        )
        self._records.append(record)
        logger.info(f"Record {len(self._records)}: {record.label} ({record.vendor})")
        return record
