"""Tests for simple_sitemap.dates — lastmod normalisation."""

from datetime import UTC, date, datetime, timedelta, timezone

from simple_sitemap.dates import normalise_date


class TestNormaliseDate:
    def test_date_string(self) -> None:
        assert normalise_date("2024-01-01") == "2024-01-01T00:00:00+00:00"

    def test_zulu_string(self) -> None:
        assert normalise_date("2024-03-05T10:20:30Z") == "2024-03-05T10:20:30+00:00"

    def test_offset_converted_to_utc(self) -> None:
        assert normalise_date("2024-01-01T10:00:00+02:00") == "2024-01-01T08:00:00+00:00"

    def test_aware_datetime(self) -> None:
        moment = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert normalise_date(moment) == "2024-06-01T17:00:00+00:00"

    def test_naive_datetime_is_utc(self) -> None:
        assert normalise_date(datetime(2024, 6, 1, 12, 0)) == "2024-06-01T12:00:00+00:00"

    def test_date(self) -> None:
        assert normalise_date(date(2023, 12, 31)) == "2023-12-31T00:00:00+00:00"

    def test_timestamp(self) -> None:
        assert normalise_date(0) == "1970-01-01T00:00:00+00:00"

    def test_already_normalised_is_stable(self) -> None:
        value = normalise_date(datetime(2024, 1, 1, tzinfo=UTC))
        assert normalise_date(value) == value

    def test_invalid_values(self) -> None:
        assert normalise_date("not a date") is None
        assert normalise_date("") is None
        assert normalise_date(None) is None
        assert normalise_date(True) is None
        assert normalise_date(["2024-01-01"]) is None
