"""
Output Module - PDF report generation and formatting.
"""

from .writer import (
    PDFReportWriter,
    ReportWriteError,
    generate_pdf_report
)

__all__ = [
    'PDFReportWriter',
    'ReportWriteError',
    'generate_pdf_report',
]
