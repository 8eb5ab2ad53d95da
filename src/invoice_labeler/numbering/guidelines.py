"""
Guidelines Workbook Import

Reads the vendor guidelines spreadsheet into a MappingTable (and, via
the table, seeds the SequenceRegistry with historical numbers).
"""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..utils.errors import UserInputError
from .mapping_table import MappingTable

logger = logging.getLogger(__name__)


def find_guidelines_sheet(sheet_names, keyword: str = "przyklady") -> Optional[str]:
    """First sheet whose name contains the keyword, ignoring case."""
    keyword = keyword.lower()
    for name in sheet_names:
        if keyword in str(name).lower():
            return name
    return None


def import_guidelines_frame(
    mapping: MappingTable,
    frame: pd.DataFrame,
    vendor_column: str = "Nazwa kontrahenta",
    label_column: str = "Etykieta"
) -> int:
    """
    Import guideline rows from a DataFrame, top to bottom.

    Missing columns are treated as empty, so every row is skipped.

    Returns:
        Number of rows stored in the mapping table
    """
    rows = []
    for _, row in frame.iterrows():
        vendor = _cell_text(row.get(vendor_column, ''))
        label = _cell_text(row.get(label_column, ''))
        rows.append((vendor, label))

    return mapping.import_entries(rows)


def import_guidelines_file(
    mapping: MappingTable,
    path: Union[str, Path],
    sheet_keyword: str = "przyklady",
    vendor_column: str = "Nazwa kontrahenta",
    label_column: str = "Etykieta"
) -> int:
    """
    Import the guidelines workbook.

    Args:
        mapping: Table to populate
        path: Excel workbook path
        sheet_keyword: Substring identifying the guideline sheet

    Returns:
        Number of rows stored; 0 when no sheet matches the keyword

    Raises:
        UserInputError: The file is missing or is not a readable workbook
    """
    path = Path(path)
    if not path.is_file():
        raise UserInputError(f"Guidelines file not found: {path}")

    try:
        workbook = pd.ExcelFile(path)
    except Exception as e:
        raise UserInputError(f"Unable to read guidelines workbook {path.name}: {e}") from e

    with workbook:
        sheet_name = find_guidelines_sheet(workbook.sheet_names, sheet_keyword)
        if sheet_name is None:
            logger.warning(
                f"No sheet containing '{sheet_keyword}' in {path.name}, nothing imported"
            )
            return 0

        frame = workbook.parse(sheet_name, dtype=str, keep_default_na=False)

    logger.info(f"Reading guidelines from sheet '{sheet_name}' ({len(frame)} rows)")
    return import_guidelines_frame(mapping, frame, vendor_column, label_column)


def _cell_text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ''
    return str(value).strip()
