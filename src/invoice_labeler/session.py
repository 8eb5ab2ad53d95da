"""
Labeling Session

Owns the state of one working session: the vendor mapping table, the
sequence registry and the processed records. Nothing is persisted; a
new session starts with empty guidelines and counters.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from pydantic import BaseModel

from .documents.annotator import DocumentAnnotator, annotated_document_name, safe_file_name
from .extraction.field_extractor import FieldExtractor
from .extraction.text_layer import TextLayerExtractor
from .numbering.assigner import Assignment, NumberAssigner
from .numbering.guidelines import import_guidelines_file
from .numbering.mapping_table import MappingTable
from .numbering.sequence_registry import SequenceRegistry
from .reporting.record_composer import RecordComposer
from .reporting.report_writer import ReportWriter
from .utils.config import LabelerConfig
from .utils.errors import CollaboratorFailure, UserInputError
from .utils.models import ExtractedFields, OutputRecord

logger = logging.getLogger(__name__)


class ProcessingResult(BaseModel):
    """Everything produced for one invoice."""
    record: OutputRecord
    fields: ExtractedFields
    assignment: Assignment
    display_label: str
    document_name: str


class LabelingSession:
    """
    Main orchestrator for invoice labeling.

    Coordinates:
    - Guideline import (mapping table and historical numbers)
    - Text extraction and field extraction
    - Number assignment and record composition
    - Report export and document annotation
    """

    def __init__(
        self,
        config: Optional[LabelerConfig] = None,
        text_extractor: Optional[TextLayerExtractor] = None,
        annotator: Optional[DocumentAnnotator] = None,
        clock: Callable[[], date] = date.today
    ):
        """
        Initialize the session.

        Args:
            config: Session settings, defaults when omitted
            text_extractor: Text layer collaborator
            annotator: Annotation collaborator
            clock: Source of today's date for the sequence registry
        """
        self.config = config or LabelerConfig()

        self.registry = SequenceRegistry(clock=clock)
        self.mapping = MappingTable(self.registry)
        self.assigner = NumberAssigner(
            self.mapping,
            self.registry,
            default_cost_center=self.config.default_cost_center,
            default_group=self.config.default_group,
        )
        self.field_extractor = FieldExtractor()
        self.composer = RecordComposer()
        self.report_writer = ReportWriter(sheet_name=self.config.report_sheet_name)

        self.text_extractor = text_extractor or TextLayerExtractor(
            tesseract_path=self.config.tesseract_path,
            use_ocr_fallback=self.config.use_ocr_fallback,
            ocr_language=self.config.ocr_language,
        )
        self.annotator = annotator or DocumentAnnotator()

        self.last_label = ''
        self.last_document: Optional[bytes] = None

    @property
    def has_guidelines(self) -> bool:
        return not self.mapping.is_empty

    @property
    def records(self) -> Tuple[OutputRecord, ...]:
        return self.composer.records

    def import_guidelines(self, path: Union[str, Path]) -> int:
        """
        Load the guidelines workbook into this session.

        Returns:
            Number of imported rows
        """
        imported = import_guidelines_file(
            self.mapping,
            path,
            sheet_keyword=self.config.guidelines_sheet_keyword,
            vendor_column=self.config.vendor_column,
            label_column=self.config.label_column,
        )
        logger.info(f"Guidelines loaded: {len(self.mapping)} vendor(s), {len(self.registry)} counter(s)")
        return imported

    def process_file(self, file_path: Optional[Union[str, Path]], annotate: bool = True) -> ProcessingResult:
        """
        Process an invoice file.

        Raises:
            UserInputError: No file given or the file does not exist
            CollaboratorFailure: The document text could not be extracted
        """
        if not file_path:
            raise UserInputError("Please select an invoice document.")
        path = Path(file_path)
        if not path.is_file():
            raise UserInputError(f"File not found: {path}")

        return self.process_bytes(path.read_bytes(), file_name=path.name, annotate=annotate)

    def process_bytes(self, data: bytes, file_name: str = 'invoice.pdf', annotate: bool = True) -> ProcessingResult:
        """
        Process one invoice document.

        The counters are only advanced once the text has been extracted;
        a failed extraction leaves the session unchanged.

        Args:
            data: Document bytes
            file_name: Original name, selects PDF or image handling
            annotate: Produce the labelled copy of the document

        Returns:
            ProcessingResult for the invoice
        """
        if not data:
            raise UserInputError("Please select an invoice document.")

        logger.info(f"Processing {file_name}")
        try:
            text = self.text_extractor.extract(data, file_name=file_name)
        except CollaboratorFailure:
            raise
        except Exception as e:
            raise CollaboratorFailure("Error while processing the invoice", e) from e

        fields = self.field_extractor.extract(text)
        assignment = self.assigner.resolve_and_assign(fields.vendor)
        record = self.composer.compose(fields, assignment)

        display_label = assignment.display_label
        if annotate:
            self.last_label = display_label
            self.last_document = self.annotator.annotate(data, display_label)

        return ProcessingResult(
            record=record,
            fields=fields,
            assignment=assignment,
            display_label=display_label,
            document_name=annotated_document_name(display_label),
        )

    def export_report(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write all records of this session to the Excel report."""
        if path is None:
            path = Path(self.config.output_dir) / self.config.report_file_name
        return self.report_writer.write(self.composer.records, path)

    def save_annotated(self, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """
        Save the most recently processed document with its label.

        Raises:
            UserInputError: No invoice has been processed yet
        """
        if not self.last_document:
            raise UserInputError(
                "No annotated invoice to download. Process an invoice first."
            )

        output_dir = Path(output_dir or self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        path = output_dir / safe_file_name(annotated_document_name(self.last_label))
        path.write_bytes(self.last_document)
        logger.info(f"Annotated invoice saved to {path}")
        return path
