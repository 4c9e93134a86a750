"""Test day picker generation and date formatting."""
from datetime import date, datetime

from slotbook.calendar_days import Day, today, upcoming_days, days_until, format_date


def test_today_uses_reference_time():
    assert today(datetime(2026, 3, 16, 23, 59)) == "2026-03-16"


def test_upcoming_days_labels_and_weekdays():
    days = upcoming_days(3, start=date(2026, 3, 16))  # Monday

    assert days == [
        Day(value="2026-03-16", label="16.03", weekday="пн"),
        Day(value="2026-03-17", label="17.03", weekday="вт"),
        Day(value="2026-03-18", label="18.03", weekday="ср"),
    ]


def test_upcoming_days_crosses_month_boundary():
    days = upcoming_days(2, start=date(2026, 2, 28))
    assert [d.label for d in days] == ["28.02", "01.03"]
    assert days[1].weekday == "вс"


def test_upcoming_days_zero():
    assert upcoming_days(0) == []


def test_days_until_counts_today():
    """From March 10 00:00 to March 20 00:00 is 10 days, plus today."""
    assert days_until(3, 20, now=datetime(2026, 3, 10)) == 11


def test_days_until_partial_day_rounds_down():
    assert days_until(3, 20, now=datetime(2026, 3, 18, 10, 0)) == 2


def test_days_until_after_cutoff_is_one():
    assert days_until(3, 20, now=datetime(2026, 10, 17)) == 1


def test_days_until_uses_configured_cutoff():
    assert days_until(now=datetime(2026, 3, 19)) == 2


def test_format_date_genitive_month():
    assert format_date("2026-03-20") == "20 марта"
    assert format_date(date(2026, 5, 1)) == "01 мая"
