import pytest

from receipt_processor.datetimes import days_in_month, is_time_in_range, normalize_date, normalize_time
from receipt_processor.errors import ParseError


def test_normalize_date_accepted_formats():
    expected_dates = {
        "2022-01-01": "2022-01-01",
        "  2022-03-20  ": "2022-03-20",
        "03/20/2022": "2022-03-20",
        "20/03/2022": "2022-03-20",
        "2022/03/20": "2022-03-20",
        "Mar 20, 2022": "2022-03-20",
        "Mar 5, 2022": "2022-03-05",
        "5 Mar 2022": "2022-03-05",
        "20 Mar 2022": "2022-03-20",
    }
    for date, canonical in expected_dates.items():
        assert normalize_date(date) == canonical


def test_normalize_date_is_idempotent_on_canonical_dates():
    for date in ["1900-01-01", "2000-02-29", "2024-02-29", "2022-12-31", "2100-12-31"]:
        assert normalize_date(date) == date
        assert normalize_date(normalize_date(date)) == date


def test_normalize_date_prefers_us_reading_of_ambiguous_dates():
    assert normalize_date("01/02/2024") == "2024-01-02"


def test_normalize_date_does_not_fall_through_after_first_match():
    # 02/30 matches MM/DD and must not be retried as DD/MM
    with pytest.raises(ParseError):
        normalize_date("02/30/2024")


def test_normalize_date_leap_years():
    assert normalize_date("2024-02-29") == "2024-02-29"
    assert normalize_date("2000-02-29") == "2000-02-29"
    for date in ["2023-02-29", "1900-02-29", "2100-02-29"]:
        with pytest.raises(ParseError):
            normalize_date(date)


def test_normalize_date_rejects_invalid_dates():
    invalid_dates = ["", "   ", "test", "2024-13-01", "2024-00-10", "2024-04-31", "2024-01-00",
                     "1899-12-31", "2101-01-01", "13/13/2023", "2024-1-1", "Foo 1, 2024",
                     "Feb 30, 2024", "0 Jan 2024", "2024.01.01"]
    for date in invalid_dates:
        with pytest.raises(ParseError) as exc_info:
            normalize_date(date)
        assert exc_info.value.input == date
        assert exc_info.value.reason


def test_days_in_month():
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert days_in_month(2024, 4) == 30
    assert days_in_month(2024, 12) == 31


def test_normalize_time_accepted_formats():
    expected_times = {
        "13:01": "13:01",
        "00:00": "00:00",
        "23:59": "23:59",
        "9:05": "09:05",
        "13:01:59": "13:01",
        "1:01 PM": "13:01",
        "01:01 pm": "13:01",
        "1:01PM": "13:01",
        "12:00 AM": "00:00",
        "12:30 PM": "12:30",
        "11:59:30 am": "11:59",
        "  2:45 PM  ": "14:45",
    }
    for time, canonical in expected_times.items():
        assert normalize_time(time) == canonical


def test_normalize_time_rejects_invalid_times():
    invalid_times = ["", "test", "25:00", "24:00", "13:60", "13:99", "99:13", "13-13", "13",
                     "13:00 PM", "0:30 AM", "10:00:60", "10:00:00:00", "1:5 PM"]
    for time in invalid_times:
        with pytest.raises(ParseError):
            normalize_time(time)


def test_is_time_in_range_excludes_boundaries():
    assert is_time_in_range("15:00", "14:00", "16:00")
    assert is_time_in_range("14:01", "14:00", "16:00")
    assert is_time_in_range("15:59", "14:00", "16:00")
    assert not is_time_in_range("13:00", "14:00", "16:00")
    assert not is_time_in_range("14:00", "14:00", "16:00")
    assert not is_time_in_range("16:00", "14:00", "16:00")


def test_is_time_in_range_wrapping_midnight_includes_boundaries():
    assert is_time_in_range("23:00", "22:00", "02:00")
    assert is_time_in_range("01:00", "22:00", "02:00")
    assert is_time_in_range("22:00", "22:00", "02:00")
    assert is_time_in_range("02:00", "22:00", "02:00")
    assert not is_time_in_range("12:00", "22:00", "02:00")


def test_is_time_in_range_rejects_malformed_times():
    with pytest.raises(ParseError):
        is_time_in_range("3 PM", "14:00", "16:00")


def test_normalizers_accept_ascii_digits_only():
    for date in ["٢٠٢٢-٠١-٠١", "٠١/٠٢/٢٠٢٢", "٥ Mar ٢٠٢٢"]:
        with pytest.raises(ParseError):
            normalize_date(date)
    for time in ["١٣:٠١", "١:٠١ PM"]:
        with pytest.raises(ParseError):
            normalize_time(time)
