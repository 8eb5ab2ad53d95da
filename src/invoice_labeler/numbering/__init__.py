"""
Numbering Module

Vendor guidelines, sequence counters and number assignment.
"""

from .sequence_registry import SequenceRegistry, sequence_key, format_sequence_number
from .mapping_table import MappingTable, parse_label
from .assigner import NumberAssigner, Assignment
from .guidelines import import_guidelines_file, import_guidelines_frame

__all__ = [
    "SequenceRegistry",
    "sequence_key",
    "format_sequence_number",
    "MappingTable",
    "parse_label",
    "NumberAssigner",
    "Assignment",
    "import_guidelines_file",
    "import_guidelines_frame",
]
