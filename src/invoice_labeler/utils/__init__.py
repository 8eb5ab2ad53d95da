"""
Utilities Module

Data models, configuration and error types.
"""

from .models import (
    VendorEntry,
    SequenceState,
    AssignedNumber,
    ExtractedFields,
    OutputRecord,
    REPORT_COLUMNS,
)
from .errors import LabelingError, UserInputError, CollaboratorFailure
from .config import LabelerConfig

__all__ = [
    "VendorEntry",
    "SequenceState",
    "AssignedNumber",
    "ExtractedFields",
    "OutputRecord",
    "REPORT_COLUMNS",
    "LabelingError",
    "UserInputError",
    "CollaboratorFailure",
    "LabelerConfig",
]
