"""
Documents Module

Writes the assigned label onto the invoice document.
"""

from .annotator import DocumentAnnotator, annotated_document_name

__all__ = ["DocumentAnnotator", "annotated_document_name"]
