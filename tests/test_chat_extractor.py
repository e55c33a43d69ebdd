from extractors.chat_extractor import (
    ContentPayload,
    DateToken,
    Transaction,
    TransactionExtractor,
    extract_transactions_from_text,
)
from extractors.date_rules import YearPolicy


def test_extracts_line_with_spaced_hyphen():
    txns = extract_transactions_from_text("[27/10/2025, 9:39 pm] X: Tng - 50")
    assert txns == [Transaction(date="27/10/2025", category="Tng", amount=50)]


def test_year_less_date_gets_fallback_year():
    txns = extract_transactions_from_text("[02/01, 1:15 pm] X: F-15", fallback_year=2026)
    assert txns == [Transaction(date="02/01/2026", category="F", amount=15)]


def test_sender_only_line_yields_nothing():
    assert extract_transactions_from_text("[27/10/2025, 9:39 pm] X: hello") == []


def test_empty_text_yields_nothing():
    assert extract_transactions_from_text("") == []
    assert extract_transactions_from_text(None) == []


def test_hyphen_spacing_variants():
    lines = [
        "[01/11/2025, 8:00 am] X: F-20",
        "[01/11/2025, 8:00 am] X: Tng - 50",
        "[01/11/2025, 8:00 am] X: Tng -50",
        "[01/11/2025, 8:00 am] X: Coffee - 60",
        "[01/11/2025, 8:00 am] X: Shp- 5",
    ]
    txns = extract_transactions_from_text("\n".join(lines))
    assert [(t.category, t.amount) for t in txns] == [
        ("F", 20), ("Tng", 50), ("Tng", 50), ("Coffee", 60), ("Shp", 5),
    ]


def test_multi_word_category_is_trimmed():
    txns = extract_transactions_from_text("[03/11/2025, 7:15 pm] X:   Phone bill   -  30")
    assert txns[0].category == "Phone bill"
    assert txns[0].amount == 30


def test_time_of_day_colon_does_not_leak_into_category(sample_text):
    txns = extract_transactions_from_text(sample_text)
    assert {t.category for t in txns} == {"Tng", "F", "Shp", "Coffee"}


def test_phone_number_sender_does_not_shift_payload():
    txns = extract_transactions_from_text("[27/10/2025, 9:39 pm] +60 12-345 6789: F-20")
    assert txns == [Transaction(date="27/10/2025", category="F", amount=20)]


def test_phone_number_sender_chatter_yields_nothing():
    line = "[27/10/2025, 9:39 pm] +60 12-345 6789: hello"
    assert extract_transactions_from_text(line) == []
    assert TransactionExtractor.probe_line(line).skip_reason == "no_content"


def test_blank_category_is_rejected():
    assert extract_transactions_from_text("[27/10/2025, 9:39 pm] X: - 20") == []


def test_date_must_lead_the_line():
    assert extract_transactions_from_text("X: F-20 [27/10/2025]") == []
    assert extract_transactions_from_text("27/10/2025, 9:39 pm - X: F-20") == []


def test_direction_mark_before_date_is_tolerated():
    txns = extract_transactions_from_text("\u200e[02/01, 1:15 pm] X: F-15")
    assert txns == [Transaction(date="02/01/2026", category="F", amount=15)]


def test_order_follows_source_lines(sample_text):
    txns = extract_transactions_from_text(sample_text)
    assert [t.date for t in txns] == [
        "27/10/2025",
        "27/10/2025",
        "28/10/2025",
        "05/11/2025",
        "11/11/2025",
        "09/12/2025",
        "31/12/2025",
        "02/01/2026",
    ]


def test_extraction_is_idempotent(sample_text):
    extractor = TransactionExtractor()
    first = extractor.extract_transactions(sample_text)
    second = extractor.extract_transactions(sample_text)
    assert first == second
    assert extractor.get_stats()["transactions_found"] == 8


def test_explicit_year_is_never_altered():
    text = "\n".join([
        "[15/06/2019, 1:00 pm] X: F-10",
        "[16/06, 1:00 pm] X: F-10",
    ])
    txns = extract_transactions_from_text(text, fallback_year=2031)
    assert txns[0].date == "15/06/2019"
    assert txns[1].date == "16/06/2031"


def test_next_after_latest_policy_uses_one_year_for_the_run():
    text = "\n".join([
        "[01/01, 9:00 am] X: F-1",
        "[20/12/2022, 9:00 am] X: F-2",
        "[05/03/2023, 9:00 am] X: F-3",
        "[02/01, 9:00 am] X: F-4",
    ])
    extractor = TransactionExtractor(fallback_year=2030, year_policy=YearPolicy.NEXT_AFTER_LATEST)
    txns = extractor.extract_transactions(text)
    assert [t.date for t in txns] == ["01/01/2024", "20/12/2022", "05/03/2023", "02/01/2024"]
    assert extractor.get_stats()["fallback_year"] == 2024


def test_stats_count_skip_reasons(sample_text):
    extractor = TransactionExtractor()
    extractor.extract_transactions(sample_text)
    stats = extractor.get_stats()
    assert stats["lines_processed"] == 11
    assert stats["transactions_found"] == 8
    assert stats["blank_lines"] == 1
    assert stats["skipped_no_date"] == 1
    assert stats["skipped_no_content"] == 1
    assert stats["fallback_year"] == 2026


def test_probe_date_shapes():
    assert TransactionExtractor.probe_date("[27/10/2025, 9:39 pm] X: hi") == DateToken(27, 10, 2025, "27/10/2025")
    assert TransactionExtractor.probe_date("[02/01, 1:15 pm] X: hi") == DateToken(2, 1, None, "02/01")
    assert TransactionExtractor.probe_date("no date here") is None


def test_probe_content_shapes():
    assert TransactionExtractor.probe_content("X: Tng -50") == ContentPayload("Tng", 50)
    assert TransactionExtractor.probe_content("X: F-007") == ContentPayload("F", 7)
    assert TransactionExtractor.probe_content("X: no amount") is None


def test_probe_line_reports_why_a_line_was_skipped():
    probe = TransactionExtractor.probe_line
    assert probe("[27/10/2025, 9:39 pm] X: F-20").skip_reason is None
    assert probe("   ").skip_reason == "blank"
    assert probe("X: F-20").skip_reason == "no_date"
    assert probe("[27/10/2025, 9:39 pm] X: hello").skip_reason == "no_content"


def test_transaction_helpers():
    txn = Transaction(date="02/01/2026", category="F", amount=15)
    assert (txn.day, txn.month, txn.year) == (2, 1, 2026)
    assert txn.month_key == "01/2026"
    assert txn.to_dict() == {"date": "02/01/2026", "category": "F", "amount": 15}
