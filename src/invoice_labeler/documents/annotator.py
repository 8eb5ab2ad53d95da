"""
Document Annotator

Draws the display label near the top of the first page of a PDF using
PyMuPDF. Annotation is best effort: the record is valid without it, so
any failure hands back the original bytes.
"""

import logging
import re
from typing import Tuple

import fitz

logger = logging.getLogger(__name__)

ANNOTATED_PREFIX = "faktura_z_opisem_"


def annotated_document_name(display_label: str) -> str:
    """Download name for an annotated invoice, whitespace runs replaced by '_'."""
    return ANNOTATED_PREFIX + re.sub(r'\s+', '_', display_label) + ".pdf"


def safe_file_name(name: str) -> str:
    """File name usable on disk: path separators become '-'."""
    return re.sub(r'[\\/]', '-', name)


class DocumentAnnotator:
    """
    Writes a label onto the first page of a PDF.

    Args:
        font_name: Built-in font code understood by fitz.Font
        font_size: Label size in points
        color: RGB colour, components in 0..1
        margin_left: Distance of the label from the left edge in points
        margin_top: Distance of the label baseline from the top edge in points
    """

    def __init__(
        self,
        font_name: str = "hebo",
        font_size: float = 20,
        color: Tuple[float, float, float] = (0.8, 0.0, 0.0),
        margin_left: float = 50,
        margin_top: float = 40
    ):
        self.font_name = font_name
        self.font_size = font_size
        self.color = color
        self.margin_left = margin_left
        self.margin_top = margin_top

    def annotate(self, data: bytes, label: str) -> bytes:
        """
        Return a copy of the PDF with the label on page one.

        Args:
            data: Original PDF bytes
            label: Display label, e.g. "3/8 – MPK610 – 181/2025"

        Returns:
            Annotated PDF bytes, or the original bytes if annotation failed
        """
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                if doc.page_count == 0:
                    logger.warning("Document has no pages, returning it unchanged")
                    return data

                first_page = doc[0]
                writer = fitz.TextWriter(first_page.rect, color=self.color)
                writer.append(
                    (self.margin_left, self.margin_top),
                    label,
                    font=fitz.Font(self.font_name),
                    fontsize=self.font_size,
                )
                writer.write_text(first_page)
                return doc.tobytes()
        except Exception as e:
            logger.error(f"Annotation failed, keeping the original document: {e}")
            return data
