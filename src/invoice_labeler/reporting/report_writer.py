"""Excel report export."""

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from ..utils.errors import UserInputError
from ..utils.models import OutputRecord, REPORT_COLUMNS

logger = logging.getLogger(__name__)


class ReportWriter:
    """Writes output records to a single-sheet Excel workbook."""

    def __init__(self, sheet_name: str = "Raport"):
        self.sheet_name = sheet_name

    def to_frame(self, records: Sequence[OutputRecord]) -> pd.DataFrame:
        """One row per record, columns in report order."""
        return pd.DataFrame(
            [record.to_row() for record in records],
            columns=REPORT_COLUMNS,
        )

    def write(self, records: Sequence[OutputRecord], path: Union[str, Path]) -> Path:
        """
        Write the report workbook.

        Raises:
            UserInputError: There are no records to export
        """
        if not records:
            raise UserInputError(
                "No data to save. Process at least one invoice first."
            )

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        frame = self.to_frame(records)
        frame.to_excel(path, sheet_name=self.sheet_name, index=False)
        logger.info(f"Report with {len(frame)} row(s) written to {path}")
        return path
