from __future__ import annotations

from datetime import datetime

from yrno.models.location import Location, forecasts_between
from yrno.models.weather import Forecast


def _starts(forecasts: list[Forecast]) -> list[int]:
    return [f.valid_from.hour for f in forecasts if f.valid_from is not None]


def test_window_is_inclusive_at_both_ends(location: Location) -> None:
    result = forecasts_between(
        location.hourly, datetime(2014, 3, 7, 11, 0, 0), datetime(2014, 3, 7, 14, 0, 0)
    )
    assert _starts(result) == [11, 13, 14]


def test_window_checks_start_of_forecast_only(location: Location) -> None:
    result = forecasts_between(
        location.hourly, datetime(2014, 3, 7, 10, 30, 0), datetime(2014, 3, 7, 10, 59, 59)
    )
    assert result == []


def test_unset_bounds_default_to_now_and_one_year(location: Location, morning: datetime) -> None:
    assert forecasts_between(location.hourly, now=morning) == forecasts_between(
        location.hourly, morning, datetime(2015, 3, 7, 9, 0, 0)
    )
    assert _starts(forecasts_between(location.hourly, now=morning)) == [10, 11, 13, 14, 15]
    assert _starts(forecasts_between(location.hourly, now=datetime(2014, 3, 7, 12, 30))) == [
        13,
        14,
        15,
    ]


def test_default_end_is_one_year_after_now(location: Location) -> None:
    result = forecasts_between(location.hourly, now=datetime(2013, 3, 7, 10, 0, 0))
    assert _starts(result) == [10]


def test_forecasts_in_the_past_are_excluded_by_default(location: Location) -> None:
    assert forecasts_between(location.hourly, now=datetime(2020, 1, 1)) == []


def test_unusable_bounds_fall_back_to_defaults(location: Location, morning: datetime) -> None:
    result = forecasts_between(location.hourly, "yesterday", object(), now=morning)  # type: ignore[arg-type]
    assert _starts(result) == [10, 11, 13, 14, 15]


def test_unix_timestamps_and_aware_datetimes(location: Location) -> None:
    start = datetime(2014, 3, 7, 13, 0, 0)
    end = datetime(2014, 3, 7, 14, 0, 0).astimezone()
    assert _starts(forecasts_between(location.hourly, start.timestamp(), end)) == [13, 14]


def test_forecast_at(location: Location) -> None:
    forecast = location.forecast_at(datetime(2014, 3, 7, 13, 0, 0))
    assert forecast is not None
    assert forecast.valid_from == datetime(2014, 3, 7, 13, 0, 0)
    # 12:00 was dropped while parsing, 12:30 is not a start time
    assert location.forecast_at(datetime(2014, 3, 7, 12, 0, 0)) is None
    assert location.forecast_at(datetime(2014, 3, 7, 12, 30, 0)) is None


def test_current_forecast(location: Location) -> None:
    current = location.current_forecast()
    assert current is location.hourly[0]
    assert Location().current_forecast() is None


def test_lists_without_bounds_are_returned_whole(location: Location) -> None:
    assert location.hourly_forecasts() == location.hourly
    assert location.hourly_forecasts() is not location.hourly
    assert location.periodic_forecasts() == location.periodic


def test_periodic_window(location: Location) -> None:
    result = location.periodic_forecasts(
        datetime(2014, 3, 7, 18, 0, 0), datetime(2014, 3, 8, 0, 0, 0)
    )
    assert [f.period for f in result] == [3, 0]


def test_add_link() -> None:
    location = Location()
    location.add_link("overview", "http://www.yr.no/place/Norway/Oslo/Oslo/Oslo/")
    assert location.links == {"overview": "http://www.yr.no/place/Norway/Oslo/Oslo/Oslo/"}
