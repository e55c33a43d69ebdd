"""
Date Rules Module
Defines the fallback-year policies applied to chat dates written without a year.
"""

from enum import Enum
from typing import Iterable, Optional
import logging

logger = logging.getLogger(__name__)

# The explicitly-dated messages in the source chat run through 2025; the
# year-less ones that follow belong to the next year.
DEFAULT_FALLBACK_YEAR = 2026


class YearPolicy(Enum):
    """How the fallback year for year-less dates is chosen."""
    FIXED = "fixed"
    NEXT_AFTER_LATEST = "next_after_latest"

    @classmethod
    def from_value(cls, value) -> "YearPolicy":
        """
        Coerce a policy name (or member) into a YearPolicy.

        Raises:
            ValueError: If the name is not a known policy
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown year policy '{value}'. Valid policies: {valid}") from None


class YearInference:
    """
    Chooses the single fallback year used for every year-less date in one run.

    FIXED always answers the configured year. NEXT_AFTER_LATEST answers one
    year after the latest explicit year seen in the run, and the configured
    year when the run has no explicit years at all.
    """

    def __init__(self, fallback_year: int, policy=YearPolicy.FIXED):
        if not isinstance(fallback_year, int) or fallback_year < 1:
            raise ValueError(f"fallback_year must be a positive integer, got {fallback_year!r}")
        self.fallback_year = fallback_year
        self.policy = YearPolicy.from_value(policy)

    def resolve(self, explicit_years: Iterable[Optional[int]]) -> int:
        """
        Pick the fallback year for a run.

        Args:
            explicit_years: Years of every date token in the run (None for year-less tokens)

        Returns:
            The year to append to year-less dates
        """
        if self.policy is YearPolicy.FIXED:
            return self.fallback_year

        years = [y for y in explicit_years if y is not None]
        if not years:
            logger.debug(f"No explicit years seen, using fallback year {self.fallback_year}")
            return self.fallback_year

        return max(years) + 1

    def __repr__(self) -> str:
        return f"YearInference(fallback_year={self.fallback_year}, policy={self.policy.value})"


def format_date(day: int, month: int, year: int) -> str:
    """Render a date as DD/MM/YYYY."""
    return f"{day:02d}/{month:02d}/{year:04d}"
