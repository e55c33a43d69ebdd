"""
PDF Report Writer Module
Generates a formatted PDF expense summary from parsed chat-log transactions.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import letter
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.enums import TA_CENTER
from extractors.chat_extractor import Transaction
from aggregators.expense_aggregator import ExpenseSummary, resolve_category

logger = logging.getLogger(__name__)

ACCENT = colors.HexColor('#ef8145')
STRIPE = colors.HexColor('#e8e0dc')
GRID = colors.HexColor('#808183')


class ReportWriteError(Exception):
    """Raised when the PDF report cannot be written."""
    pass


class PDFReportWriter:
    """Generates PDF reports from aggregated expense data."""

    def __init__(self, output_path: str, page_size=letter):
        """
        Initialize PDF writer.

        Args:
            output_path: Path where PDF will be saved
            page_size: Page size (default: letter)
        """
        self.output_path = output_path
        self.page_size = page_size
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles."""
        self.styles.add(ParagraphStyle(
            name='CustomTitle',
            parent=self.styles['Heading1'],
            fontSize=24,
            textColor=colors.HexColor('#1a1a1a'),
            spaceAfter=30,
            alignment=TA_CENTER,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeading',
            parent=self.styles['Heading2'],
            fontSize=16,
            textColor=colors.HexColor('#2c5aa0'),
            spaceAfter=12,
            spaceBefore=20,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='InfoText',
            parent=self.styles['Normal'],
            fontSize=11,
            textColor=colors.HexColor('#444444'),
            spaceAfter=6
        ))

    def generate_report(
        self,
        transactions: list[Transaction],
        category_totals: list[tuple[str, int]],
        monthly_totals: list[tuple[str, int]],
        summary: ExpenseSummary,
        title: str = "Expense Report",
        category_names: Optional[dict[str, str]] = None
    ):
        """
        Build the PDF.

        Args:
            transactions: Parsed transactions, in source order
            category_totals: (name, total) pairs, largest first
            monthly_totals: (MM/YYYY, total) pairs in calendar order
            summary: Scalar aggregates
            title: Report title
            category_names: Code -> display name mapping for the transaction table

        Raises:
            ReportWriteError: If the file cannot be written
        """
        if transactions is None or summary is None:
            raise ValueError("transactions and summary are required")

        logger.info(f"Generating PDF report: {self.output_path} ({summary.count} transactions)")

        try:
            output_path = Path(self.output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)

            doc = SimpleDocTemplate(
                str(output_path),
                pagesize=self.page_size,
                rightMargin=0.75*inch,
                leftMargin=0.75*inch,
                topMargin=0.75*inch,
                bottomMargin=0.75*inch
            )

            story = []
            story.extend(self._create_header(title, summary))

            if not transactions:
                story.append(Paragraph("No transactions found in the chat log.", self.styles['InfoText']))
            else:
                story.append(Paragraph("Expenses by Category", self.styles['SectionHeading']))
                story.append(self._create_totals_table(category_totals, 'Category', summary.total))

                story.append(Paragraph("Monthly Expenses", self.styles['SectionHeading']))
                story.append(self._create_totals_table(
                    [(self._format_month_heading(m), t) for m, t in monthly_totals],
                    'Month',
                    summary.total
                ))

                story.append(Paragraph("Recent Transactions", self.styles['SectionHeading']))
                story.append(self._create_transaction_table(transactions, category_names))

            doc.build(story)
            logger.info(f"PDF report generated successfully: {self.output_path}")

        except PermissionError as e:
            logger.error(f"Permission denied writing to {self.output_path}: {e}")
            raise ReportWriteError(
                f"Cannot write to {self.output_path}. File may be open or directory is read-only."
            ) from e

        except OSError as e:
            logger.error(f"OS error writing PDF: {e}", exc_info=True)
            raise ReportWriteError(f"Failed to write PDF file: {e}") from e

    def _create_header(self, title: str, summary: ExpenseSummary) -> list:
        """Create report header with the summary figures."""
        elements = [
            Paragraph(escape(title), self.styles['CustomTitle']),
            Paragraph(
                f"<b>Generated:</b> {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                self.styles['InfoText']
            ),
            Spacer(1, 0.2 * inch),
        ]

        data = [
            ['Total Expenses', 'Total Transactions', 'Average per Transaction'],
            [str(summary.total), str(summary.count), summary.average_display],
        ]
        table = Table(data, colWidths=[2.3 * inch, 2.3 * inch, 2.3 * inch])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), ACCENT),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, 1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 1), (-1, 1), 14),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
            ('GRID', (0, 0), (-1, -1), 1, GRID),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 0.3 * inch))
        return elements

    def _create_totals_table(
        self,
        rows: list[tuple[str, int]],
        label: str,
        grand_total: int
    ) -> Table:
        """(label, amount, share) table with a TOTAL row."""
        data = [[label, 'Amount', 'Share']]
        for name, total in rows:
            share = f"{total / grand_total * 100:.0f}%" if grand_total else "-"
            data.append([name, str(total), share])
        data.append(['TOTAL', str(grand_total), ''])

        table = Table(data, colWidths=[3.5 * inch, 1.7 * inch, 1.7 * inch])
        table.setStyle(self._table_style(len(data)))
        return table

    def _create_transaction_table(
        self,
        transactions: list[Transaction],
        category_names: Optional[dict[str, str]] = None
    ) -> Table:
        """Transaction listing, most recent entry first."""
        data = [['Date', 'Category', 'Amount']]
        for txn in reversed(transactions):
            data.append([
                txn.date,
                self._truncate(resolve_category(txn.category, category_names), max_length=50),
                str(txn.amount),
            ])
        data.append(['', 'TOTAL', str(sum(t.amount for t in transactions))])

        table = Table(data, colWidths=[1.5 * inch, 3.9 * inch, 1.5 * inch], repeatRows=1)
        table.setStyle(self._table_style(len(data), numeric_from=2))
        return table

    @staticmethod
    def _table_style(row_count: int, numeric_from: int = 1) -> TableStyle:
        """Header row, striped body and bold total row."""
        return TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), ACCENT),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 12),

            ('FONTNAME', (0, 1), (-1, -2), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -2), 10),
            ('ALIGN', (numeric_from, 1), (-1, -1), 'RIGHT'),

            ('BACKGROUND', (0, -1), (-1, -1), ACCENT),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('LINEABOVE', (0, -1), (-1, -1), 2, colors.black),

            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
            ('GRID', (0, 0), (-1, -1), 1, GRID),

            *[('BACKGROUND', (0, i), (-1, i), STRIPE) for i in range(2, row_count - 1, 2)]
        ])

    @staticmethod
    def _format_month_heading(month_key: str) -> str:
        """
        Format a MM/YYYY key for display (e.g. "January 2026").
        Unparseable keys are returned unchanged.
        """
        try:
            return datetime.strptime(month_key, '%m/%Y').strftime('%B %Y')
        except ValueError:
            return month_key

    @staticmethod
    def _truncate(text: str, max_length: int = 50) -> str:
        if len(text) <= max_length:
            return text
        return text[:max_length - 3] + "..."


def generate_pdf_report(
    output_path: str,
    transactions: list[Transaction],
    category_totals: list[tuple[str, int]],
    monthly_totals: list[tuple[str, int]],
    summary: ExpenseSummary,
    title: str = "Expense Report",
    category_names: Optional[dict[str, str]] = None
):
    """
    Convenience function to generate the expense PDF report.

    Args:
        output_path: Path where PDF will be saved
        transactions: Parsed transactions
        category_totals: (name, total) pairs
        monthly_totals: (MM/YYYY, total) pairs
        summary: Scalar aggregates
        title: Report title
        category_names: Code -> display name mapping
    """
    writer = PDFReportWriter(output_path)
    writer.generate_report(
        transactions,
        category_totals,
        monthly_totals,
        summary,
        title=title,
        category_names=category_names
    )
