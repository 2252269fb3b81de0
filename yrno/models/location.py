from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from yrno.models.weather import Coordinates, Forecast, TextualForecast, WeatherStation

Moment = Union[datetime, int, float, None]


def forecasts_between(
    forecasts: Iterable[Forecast],
    start: Moment = None,
    end: Moment = None,
    *,
    now: datetime | None = None,
) -> list[Forecast]:
    """Forecasts whose start lies in ``start..end``, both ends inclusive.

    An unset or unusable ``start`` means now, an unset or unusable ``end``
    means one year from now. Bounds may be datetimes or unix timestamps.
    The order of ``forecasts`` is kept.
    """
    current = _as_moment(now, None) or datetime.now()
    lower = _as_moment(start, current)
    upper = _as_moment(end, _one_year_after(current))

    return [
        f
        for f in forecasts
        if f.valid_from is not None and lower <= f.valid_from <= upper
    ]


def _as_moment(value: object, default: datetime | None) -> datetime | None:
    if isinstance(value, bool):
        return default
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            # Forecast times are naive local times
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            return default
    return default


def _one_year_after(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year + 1)
    except ValueError:
        # Feb 29
        return moment.replace(year=moment.year + 1, day=28)


@dataclass
class Location:
    """Complete forecast snapshot for one place, built from a periodic and an hourly document."""

    name: str | None = None
    place_type: str | None = None
    country: str | None = None
    timezone: str | None = None
    utc_offset_minutes: int | None = None
    lat_long: Coordinates | None = None

    periodic: list[Forecast] = field(default_factory=list)
    hourly: list[Forecast] = field(default_factory=list)
    textual_forecasts: list[TextualForecast] = field(default_factory=list)
    weather_stations: list[WeatherStation] = field(default_factory=list)

    links: dict[str, str] = field(default_factory=dict)
    credit_text: str | None = None
    credit_url: str | None = None

    last_updated: datetime | None = None
    next_update: datetime | None = None
    sunrise: datetime | None = None
    sunset: datetime | None = None

    # Entries dropped while parsing, per section
    skipped: dict[str, int] = field(default_factory=dict)

    def add_link(self, name: str, url: str) -> None:
        self.links[name] = url

    def current_forecast(self) -> Forecast | None:
        return self.hourly[0] if self.hourly else None

    def hourly_forecasts(
        self, start: Moment = None, end: Moment = None, *, now: datetime | None = None
    ) -> list[Forecast]:
        if start is None and end is None:
            return list(self.hourly)
        return forecasts_between(self.hourly, start, end, now=now)

    def periodic_forecasts(
        self, start: Moment = None, end: Moment = None, *, now: datetime | None = None
    ) -> list[Forecast]:
        if start is None and end is None:
            return list(self.periodic)
        return forecasts_between(self.periodic, start, end, now=now)

    def forecast_at(self, moment: Moment, *, now: datetime | None = None) -> Forecast | None:
        matches = forecasts_between(self.hourly, moment, moment, now=now)
        return matches[0] if matches else None
