import pytest

from extractors.date_rules import YearInference, YearPolicy, format_date


def test_policy_from_name():
    assert YearPolicy.from_value("fixed") is YearPolicy.FIXED
    assert YearPolicy.from_value(" Next_After_Latest ") is YearPolicy.NEXT_AFTER_LATEST
    assert YearPolicy.from_value(YearPolicy.FIXED) is YearPolicy.FIXED


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError, match="Unknown year policy"):
        YearPolicy.from_value("clock")


def test_fixed_policy_ignores_explicit_years():
    assert YearInference(2026).resolve([2019, 2030, None]) == 2026


def test_next_after_latest_without_explicit_years_uses_fallback():
    inference = YearInference(2026, "next_after_latest")
    assert inference.resolve([None, None]) == 2026
    assert inference.resolve([2024, None, 2021]) == 2025


@pytest.mark.parametrize("year", [0, -1, "2026"])
def test_invalid_fallback_year(year):
    with pytest.raises(ValueError):
        YearInference(year)


def test_format_date_pads():
    assert format_date(2, 1, 2026) == "02/01/2026"
