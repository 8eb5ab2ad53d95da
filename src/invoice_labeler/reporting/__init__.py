"""
Reporting Module

Output record composition and the Excel report.
"""

from .record_composer import RecordComposer
from .report_writer import ReportWriter

__all__ = ["RecordComposer", "ReportWriter"]
