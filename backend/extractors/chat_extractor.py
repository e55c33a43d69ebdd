"""
Chat Extractor Module
Parses exported chat-log text into structured expense transactions.

Each line is checked by two independent probes: a date probe for the leading
bracketed date token, and a content probe for the ``category - amount``
payload. A line yields a transaction only when both succeed; everything else
(sender metadata, blank lines, chatter without an amount) is skipped silently.
"""

import re
import logging
from dataclasses import dataclass
from typing import Optional
from .date_rules import DEFAULT_FALLBACK_YEAR, YearInference, YearPolicy, format_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    """A single expense parsed from the chat log."""
    date: str
    category: str
    amount: int

    @property
    def day(self) -> int:
        return int(self.date.split('/')[0])

    @property
    def month(self) -> int:
        return int(self.date.split('/')[1])

    @property
    def year(self) -> int:
        return int(self.date.split('/')[2])

    @property
    def month_key(self) -> str:
        """MM/YYYY key used for monthly grouping."""
        _, month, year = self.date.split('/')
        return f"{month}/{year}"

    def to_dict(self) -> dict:
        """Convert transaction to dictionary."""
        return {
            "date": self.date,
            "category": self.category,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class DateToken:
    """Result of the date probe. ``year`` is None for DD/MM tokens."""
    day: int
    month: int
    year: Optional[int]
    raw: str

    @property
    def has_year(self) -> bool:
        return self.year is not None

    def normalize(self, fallback_year: int) -> str:
        """Render as DD/MM/YYYY, filling a missing year with ``fallback_year``."""
        return format_date(self.day, self.month, self.year if self.has_year else fallback_year)


@dataclass(frozen=True)
class ContentPayload:
    """Result of the content probe."""
    category: str
    amount: int


@dataclass(frozen=True)
class LineProbe:
    """Both probe results for one line, kept for introspection."""
    line: str
    date: Optional[DateToken]
    content: Optional[ContentPayload]

    @property
    def matched(self) -> bool:
        return self.date is not None and self.content is not None

    @property
    def skip_reason(self) -> Optional[str]:
        """Why the line produced no transaction: 'blank', 'no_date', 'no_content' or None."""
        if self.matched:
            return None
        if not self.line.strip():
            return "blank"
        if self.date is None:
            return "no_date"
        return "no_content"


class TransactionExtractor:
    """
    Extracts expense transactions from chat-log text.
    Holds no state between runs; stats describe the most recent run only.
    """

    # Leading bracketed date: [DD/MM/YYYY or [DD/MM. Anything after the token
    # (", 9:39 pm]") is ignored. Exports sometimes prefix lines with
    # direction marks or a BOM.
    DATE_PATTERN = re.compile(
        r'^[\s\u200e\u200f\ufeff]*'
        r'\[(\d{2})/(\d{2})(?:/(\d{4}))?'
    )

    # ":<ws>category<ws>-<ws>amount" anywhere in the line. The category cannot
    # contain a colon or a closing bracket, so a match never starts inside the
    # "[date, 9:39 pm]" header, even when the sender is "+60 12-345 6789".
    CONTENT_PATTERN = re.compile(r':\s*([^:\]]+?)\s*-\s*(\d+)')

    def __init__(
        self,
        fallback_year: int = DEFAULT_FALLBACK_YEAR,
        year_policy=YearPolicy.FIXED
    ):
        """
        Args:
            fallback_year: Year appended to dates written without one
            year_policy: YearPolicy (or its name) deciding how the fallback year is chosen
        """
        self.year_inference = YearInference(fallback_year, year_policy)
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "lines_processed": 0,
            "transactions_found": 0,
            "blank_lines": 0,
            "skipped_no_date": 0,
            "skipped_no_content": 0,
            "fallback_year": None,
        }

    @classmethod
    def probe_date(cls, line: str) -> Optional[DateToken]:
        """Locate the leading bracketed date token, if any."""
        match = cls.DATE_PATTERN.match(line)
        if not match:
            return None

        day, month, year = match.groups()
        raw = f"{day}/{month}" if year is None else f"{day}/{month}/{year}"
        return DateToken(
            day=int(day),
            month=int(month),
            year=int(year) if year is not None else None,
            raw=raw
        )

    @classmethod
    def probe_content(cls, line: str) -> Optional[ContentPayload]:
        """Locate the ``category - amount`` payload, if any."""
        match = cls.CONTENT_PATTERN.search(line)
        if not match:
            return None

        category = match.group(1).strip()
        if not category:
            return None

        return ContentPayload(category=category, amount=int(match.group(2)))

    @classmethod
    def probe_line(cls, line: str) -> LineProbe:
        """Run both probes on one line."""
        return LineProbe(
            line=line,
            date=cls.probe_date(line),
            content=cls.probe_content(line)
        )

    def extract_transactions(self, text: str) -> list[Transaction]:
        """
        Extract all transactions from chat-log text.

        Args:
            text: Full chat export, one message per line

        Returns:
            Transactions in the order they appear in the text
        """
        self.stats = self._empty_stats()

        if not text or not isinstance(text, str):
            logger.debug("No text provided for extraction")
            self.stats["fallback_year"] = self.year_inference.fallback_year
            return []

        probes = [self.probe_line(line) for line in text.splitlines()]

        # One fallback year for the whole run, chosen before any line is built
        fallback_year = self.year_inference.resolve(
            probe.date.year for probe in probes if probe.date is not None
        )
        self.stats["fallback_year"] = fallback_year

        transactions = []
        for probe in probes:
            self.stats["lines_processed"] += 1

            reason = probe.skip_reason
            if reason == "blank":
                self.stats["blank_lines"] += 1
                continue
            if reason == "no_date":
                self.stats["skipped_no_date"] += 1
                continue
            if reason == "no_content":
                self.stats["skipped_no_content"] += 1
                continue

            transactions.append(Transaction(
                date=probe.date.normalize(fallback_year),
                category=probe.content.category,
                amount=probe.content.amount
            ))

        self.stats["transactions_found"] = len(transactions)
        logger.info(
            f"Extraction complete: {len(transactions)} transactions from "
            f"{self.stats['lines_processed']} lines (fallback year {fallback_year})"
        )

        return transactions

    def get_stats(self) -> dict:
        """Get statistics for the most recent extraction."""
        return self.stats.copy()


def extract_transactions_from_text(
    text: str,
    fallback_year: int = DEFAULT_FALLBACK_YEAR,
    year_policy=YearPolicy.FIXED
) -> list[Transaction]:
    """
    Convenience function to extract transactions from chat-log text.

    Args:
        text: Chat export text
        fallback_year: Year appended to dates written without one
        year_policy: How the fallback year is chosen

    Returns:
        List of Transaction objects
    """
    extractor = TransactionExtractor(fallback_year=fallback_year, year_policy=year_policy)
    return extractor.extract_transactions(text)
