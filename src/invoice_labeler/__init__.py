"""
Invoice Labeler

Extracts vendor, buyer tax ID and invoice number from invoice documents,
resolves the vendor's cost center and group, assigns a year-scoped
sequence number and labels the document with it.
"""

__version__ = "1.0.0"
