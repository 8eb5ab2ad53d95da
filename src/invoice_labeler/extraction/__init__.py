"""
Extraction Module

Document text extraction and heuristic header field extraction.
"""

from .field_extractor import (
    FieldExtractor,
    extract_vendor,
    extract_buyer_tax_id,
    extract_invoice_number,
)
from .text_layer import TextLayerExtractor

__all__ = [
    "FieldExtractor",
    "TextLayerExtractor",
    "extract_vendor",
    "extract_buyer_tax_id",
    "extract_invoice_number",
]
