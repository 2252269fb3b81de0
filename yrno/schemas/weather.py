from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from yrno.models.location import Location
from yrno.models.weather import Coordinates, Forecast, WeatherStation


class CoordinatesOut(BaseModel):
    lat: str
    lon: str


class ForecastOut(BaseModel):
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    period: int | None = None

    symbol: dict[str, str] = Field(default_factory=dict)
    precipitation: dict[str, str] = Field(default_factory=dict)
    wind_direction: dict[str, str] = Field(default_factory=dict)
    wind_speed: dict[str, str] = Field(default_factory=dict)
    temperature: dict[str, str] = Field(default_factory=dict)
    pressure: dict[str, str] = Field(default_factory=dict)
    wind_icon_key: str | None = None


class TextualForecastOut(BaseModel):
    title: str = Field(min_length=1)
    text: str = Field(min_length=1)
    valid_from: date
    valid_to: date


class WeatherStationOut(BaseModel):
    name: str
    distance: int = Field(ge=0)
    lat_long: CoordinatesOut
    source: str
    forecast: ForecastOut


class LocationOut(BaseModel):
    name: str | None = None
    place_type: str | None = None
    country: str | None = None
    timezone: str | None = None
    utc_offset_minutes: int | None = None
    lat_long: CoordinatesOut | None = None

    links: dict[str, str] = Field(default_factory=dict)
    credit_text: str | None = None
    credit_url: str | None = None

    last_updated: datetime | None = None
    next_update: datetime | None = None
    sunrise: datetime | None = None
    sunset: datetime | None = None

    hourly: list[ForecastOut] = Field(default_factory=list)
    periodic: list[ForecastOut] = Field(default_factory=list)
    textual_forecasts: list[TextualForecastOut] = Field(default_factory=list)
    weather_stations: list[WeatherStationOut] = Field(default_factory=list)


def forecast_to_schema(forecast: Forecast) -> ForecastOut:
    return ForecastOut(
        valid_from=forecast.valid_from,
        valid_to=forecast.valid_to,
        period=forecast.period,
        symbol=forecast.symbol.as_dict(),
        precipitation=forecast.precipitation.as_dict(),
        wind_direction=forecast.wind_direction.as_dict(),
        wind_speed=forecast.wind_speed.as_dict(),
        temperature=forecast.temperature.as_dict(),
        pressure=forecast.pressure.as_dict(),
        wind_icon_key=forecast.wind_icon_key(),
    )


def station_to_schema(station: WeatherStation) -> WeatherStationOut:
    return WeatherStationOut(
        name=station.name,
        distance=station.distance,
        lat_long=_coordinates(station.lat_long),
        source=station.source,
        forecast=forecast_to_schema(station.forecast),
    )


def location_to_schema(location: Location) -> LocationOut:
    return LocationOut(
        name=location.name,
        place_type=location.place_type,
        country=location.country,
        timezone=location.timezone,
        utc_offset_minutes=location.utc_offset_minutes,
        lat_long=_coordinates(location.lat_long) if location.lat_long else None,
        links=dict(location.links),
        credit_text=location.credit_text,
        credit_url=location.credit_url,
        last_updated=location.last_updated,
        next_update=location.next_update,
        sunrise=location.sunrise,
        sunset=location.sunset,
        hourly=[forecast_to_schema(f) for f in location.hourly],
        periodic=[forecast_to_schema(f) for f in location.periodic],
        textual_forecasts=[
            TextualForecastOut.model_validate(t.__dict__) for t in location.textual_forecasts
        ],
        weather_stations=[station_to_schema(s) for s in location.weather_stations],
    )


def _coordinates(coordinates: Coordinates) -> CoordinatesOut:
    return CoordinatesOut(lat=coordinates.lat, lon=coordinates.lon)
