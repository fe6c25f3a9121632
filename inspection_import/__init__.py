"""Inbound inspection workbook importer for the QMS dashboard."""

__version__ = "0.1.0"
