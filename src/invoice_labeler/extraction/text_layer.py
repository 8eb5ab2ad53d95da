"""
Text Layer Extraction for Invoice Documents

Turns a PDF or image document into the plain text consumed by the
field extractor.
- PDFs are read with pdfplumber, page by page, in page order
- Pages without a text layer can be OCR'd with pytesseract
- Images are processed using pytesseract OCR as a single page
"""

import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pdfplumber
import pytesseract
from PIL import Image

from ..utils.errors import CollaboratorFailure

logger = logging.getLogger(__name__)


class TextLayerExtractor:
    """
    Extracts the full text of an invoice document.

    Each page contributes its text fragments (lines) joined with
    newlines and terminated by a newline; pages are concatenated in
    order.
    """

    # Supported image extensions
    SUPPORTED_IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp', '.tiff', '.tif'}

    # Supported PDF extensions
    SUPPORTED_PDF_EXTENSIONS = {'.pdf'}

    def __init__(
        self,
        tesseract_path: Optional[str] = None,
        use_ocr_fallback: bool = True,
        ocr_language: str = 'pol'
    ):
        """
        Initialize the extractor.

        Args:
            tesseract_path: Optional path to tesseract executable
            use_ocr_fallback: OCR pages that have no text layer
            ocr_language: Language for OCR
        """
        if tesseract_path:
            pytesseract.pytesseract.tesseract_cmd = tesseract_path

        self.use_ocr_fallback = use_ocr_fallback
        self.ocr_language = ocr_language
        self._ocr_available = None

    @property
    def ocr_available(self) -> bool:
        """Whether Tesseract can be called; checked once, on first use."""
        if self._ocr_available is None:
            self._ocr_available = check_tesseract_installation()['installed']
        return self._ocr_available

    def extract(self, data: bytes, file_name: str = 'document.pdf') -> str:
        """
        Extract the document text.

        Args:
            data: Document bytes
            file_name: Original file name, used to pick PDF or image handling

        Returns:
            Full document text

        Raises:
            CollaboratorFailure: The document could not be read
        """
        file_ext = Path(file_name).suffix.lower() or '.pdf'

        if file_ext in self.SUPPORTED_IMAGE_EXTENSIONS:
            pages = [self._image_fragments(data)]
        elif file_ext in self.SUPPORTED_PDF_EXTENSIONS:
            pages = self._pdf_fragments(data)
        else:
            raise CollaboratorFailure(
                f"Unsupported file format: {file_ext}. "
                f"Supported formats: PDF and images"
            )

        return join_pages(pages)

    def _pdf_fragments(self, data: bytes) -> List[List[str]]:
        pages = []
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                for page_num, page in enumerate(pdf.pages, start=1):
                    page_text = page.extract_text() or ''
                    if not page_text.strip() and self.use_ocr_fallback and self.ocr_available:
                        logger.info(f"Page {page_num} has no text layer, trying OCR...")
                        page_text = self._ocr_page(page)
                    logger.debug(f"Page {page_num}: {len(page_text)} characters")
                    pages.append(page_text.split('\n') if page_text else [])
        except Exception as e:
            logger.error(f"Error reading PDF text layer: {e}")
            raise CollaboratorFailure("Unable to read the document text", e) from e

        logger.info(f"Extracted text from {len(pages)} page(s)")
        return pages

    def _image_fragments(self, data: bytes) -> List[str]:
        if not self.ocr_available:
            raise CollaboratorFailure("Tesseract OCR is not available for image processing")

        try:
            image = Image.open(io.BytesIO(data))
            logger.info("Performing OCR on image document")
            text = pytesseract.image_to_string(image, lang=self.ocr_language)
        except Exception as e:
            logger.error(f"Error processing image: {e}")
            raise CollaboratorFailure("Unable to OCR the image document", e) from e

        return text.split('\n') if text else []

    def _ocr_page(self, page) -> str:
        """Perform OCR on a single PDF page."""
        try:
            page_image = page.to_image(resolution=300)
            text = pytesseract.image_to_string(page_image.original, lang=self.ocr_language)
            return text if text else ''
        except Exception as e:
            logger.warning(f"OCR failed for page: {e}")
            return ''


def join_pages(pages: List[List[str]]) -> str:
    """Join per-page fragments: newline between fragments, newline after each page."""
    return ''.join('\n'.join(fragments) + '\n' for fragments in pages)


def check_tesseract_installation() -> Dict[str, Any]:
    """Check Tesseract OCR installation and configuration."""
    result = {
        'installed': False,
        'version': None,
        'path': None,
        'error': None,
    }

    try:
        version = pytesseract.get_tesseract_version()
        result['installed'] = True
        result['version'] = str(version)
        result['path'] = pytesseract.pytesseract.tesseract_cmd
    except pytesseract.TesseractNotFoundError:
        result['error'] = "Tesseract executable not found"
    except Exception as e:
        result['error'] = str(e)

    return result
