"""
Configuration for the Invoice Labeler

Values come from the environment (a local .env file is loaded first)
and fall back to the defaults used by the original guidelines workbook.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def _get_bool(key: str, default: bool) -> bool:
    value = _get_env(key)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in {"1", "true", "yes", "y", "on"}:
        return True
    if value_lower in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean")


class LabelerConfig(BaseModel):
    """Settings for one labeling session."""
    default_cost_center: str = Field(
        default="MPK000",
        description="Cost center used when the vendor has no guideline"
    )
    default_group: str = Field(
        default="0/0",
        description="Group used when the vendor has no guideline"
    )
    guidelines_sheet_keyword: str = Field(
        default="przyklady",
        description="Substring identifying the guideline sheet (case-insensitive)"
    )
    vendor_column: str = Field(default="Nazwa kontrahenta")
    label_column: str = Field(default="Etykieta")
    report_file_name: str = Field(default="raport_faktury.xlsx")
    report_sheet_name: str = Field(default="Raport")
    output_dir: str = Field(default="output")
    use_ocr_fallback: bool = Field(default=True)
    tesseract_path: Optional[str] = Field(default=None)
    ocr_language: str = Field(default="pol")
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls) -> "LabelerConfig":
        """Build the configuration from environment variables."""
        load_dotenv()

        defaults = cls()
        return cls(
            default_cost_center=_get_env(
                "LABELER_DEFAULT_COST_CENTER", defaults.default_cost_center
            ).upper(),
            default_group=_get_env("LABELER_DEFAULT_GROUP", defaults.default_group),
            guidelines_sheet_keyword=_get_env(
                "LABELER_GUIDELINES_SHEET", defaults.guidelines_sheet_keyword
            ),
            vendor_column=_get_env("LABELER_VENDOR_COLUMN", defaults.vendor_column),
            label_column=_get_env("LABELER_LABEL_COLUMN", defaults.label_column),
            report_file_name=_get_env("LABELER_REPORT_FILE", defaults.report_file_name),
            report_sheet_name=_get_env("LABELER_REPORT_SHEET", defaults.report_sheet_name),
            output_dir=_get_env("LABELER_OUTPUT_DIR", defaults.output_dir),
            use_ocr_fallback=_get_bool("LABELER_OCR_FALLBACK", defaults.use_ocr_fallback),
            tesseract_path=_get_env("TESSERACT_PATH"),
            ocr_language=_get_env("LABELER_OCR_LANGUAGE", defaults.ocr_language),
            log_level=_get_env("LOG_LEVEL", defaults.log_level).upper(),
        )
