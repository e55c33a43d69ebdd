import pytest

from aggregators.expense_aggregator import aggregate_by_category, aggregate_by_month, summarize
from extractors.chat_extractor import extract_transactions_from_text
from output.writer import PDFReportWriter, ReportWriteError, generate_pdf_report


def test_generates_pdf(tmp_path, sample_text, category_names):
    txns = extract_transactions_from_text(sample_text)
    output = tmp_path / "nested" / "report.pdf"

    generate_pdf_report(
        output_path=str(output),
        transactions=txns,
        category_totals=aggregate_by_category(txns, category_names),
        monthly_totals=aggregate_by_month(txns),
        summary=summarize(txns),
        title="Amina & co <expenses>",
        category_names=category_names,
    )

    assert output.read_bytes().startswith(b"%PDF")


def test_generates_pdf_without_transactions(tmp_path):
    output = tmp_path / "empty.pdf"
    generate_pdf_report(str(output), [], [], [], summarize([]))
    assert output.exists()


def test_missing_summary_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        PDFReportWriter(str(tmp_path / "x.pdf")).generate_report([], [], [], None)


def test_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(ReportWriteError):
        generate_pdf_report(str(blocker / "report.pdf"), [], [], [], summarize([]))


def test_month_heading_format():
    assert PDFReportWriter._format_month_heading("01/2026") == "January 2026"
    assert PDFReportWriter._format_month_heading("bad") == "bad"
