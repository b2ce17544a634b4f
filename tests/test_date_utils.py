from datetime import date, timedelta

from date_utils import (
    date_range,
    day_name,
    earliest_of,
    is_weekend,
    latest_of,
    month_label,
    month_range,
    next_day,
    span_contains,
    to_days,
    weekday_index,
)


def test_earliest_and_latest_of():
    a, b = date(2024, 5, 1), date(2024, 5, 2)
    assert earliest_of(a, b) == a
    assert earliest_of(b, a) == a
    assert latest_of(a, b) == b
    assert latest_of(b, a) == b
    assert earliest_of(a, a) == a


def test_next_day_crosses_month_and_year():
    assert next_day(date(2024, 2, 28)) == date(2024, 2, 29)
    assert next_day(date(2024, 2, 29)) == date(2024, 3, 1)
    assert next_day(date(2023, 12, 31)) == date(2024, 1, 1)
    # DST change in Europe, still one calendar day
    assert next_day(date(2024, 3, 30)) == date(2024, 3, 31)


def test_to_days_floors_milliseconds_and_timedeltas():
    day_ms = 24 * 60 * 60 * 1000
    assert to_days(0) == 0
    assert to_days(day_ms - 1) == 0
    assert to_days(day_ms) == 1
    assert to_days(3 * day_ms + 5) == 3
    assert to_days(timedelta(days=2, hours=23)) == 2
    assert to_days(date(2024, 5, 9) - date(2024, 5, 8)) == 1


def test_date_range_inclusive():
    days = date_range(date(2024, 5, 8), date(2024, 5, 12))
    assert days == [date(2024, 5, d) for d in range(8, 13)]


def test_date_range_single_day():
    assert date_range(date(2024, 5, 8), date(2024, 5, 8)) == [date(2024, 5, 8)]


def test_date_range_reversed_bounds_is_empty():
    assert date_range(date(2024, 5, 9), date(2024, 5, 8)) == []
    assert month_range(date(2024, 5, 9), date(2024, 5, 8)) == []


def test_date_range_length_matches_day_count():
    first, last = date(2023, 11, 17), date(2024, 3, 2)
    assert len(date_range(first, last)) == to_days(last - first) + 1


def test_month_range_partitions_the_date_range():
    first, last = date(2024, 1, 30), date(2024, 3, 2)
    months = month_range(first, last)

    assert [(m.year, m.month) for m in months] == [(2024, 0), (2024, 1), (2024, 2)]
    assert [len(m.days) for m in months] == [2, 29, 2]

    joined = [d for m in months for d in m.days]
    assert joined == date_range(first, last)
    assert len(set(joined)) == len(joined)


def test_month_range_across_new_year_keeps_chronological_order():
    months = month_range(date(2023, 12, 30), date(2024, 1, 2))
    assert [(m.year, m.month) for m in months] == [(2023, 11), (2024, 0)]
    assert month_label(months[0].year, months[0].month) == "December, 2023"
    assert month_label(months[1].year, months[1].month) == "January, 2024"


def test_span_contains_is_inclusive():
    start, end = date(2024, 5, 8), date(2024, 5, 10)
    assert span_contains(start, end, start)
    assert span_contains(start, end, end)
    assert span_contains(start, end, date(2024, 5, 9))
    assert not span_contains(start, end, date(2024, 5, 7))
    assert not span_contains(start, end, date(2024, 5, 11))


def test_weekday_names_are_sunday_based():
    assert weekday_index(date(2024, 5, 12)) == 0  # Sunday
    assert weekday_index(date(2024, 5, 11)) == 6  # Saturday
    assert day_name(date(2024, 5, 12)) == "Sunday"
    assert day_name(date(2024, 5, 8)) == "Wednesday"


def test_is_weekend():
    week = date_range(date(2024, 5, 6), date(2024, 5, 12))
    assert [d for d in week if is_weekend(d)] == [date(2024, 5, 11), date(2024, 5, 12)]
