from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime

from yrno.core.errors import InvalidArgumentError

CALM_WIND_ICON_KEY = "0"
CALM_WIND_SPEED_MPS = 0.2
WIND_ICON_BASE_URL = "http://fil.nrk.no/yr/grafikk/vindpiler"


class AttributeBag(Mapping[str, str]):
    """Read-only view of one XML element's attributes, e.g. ``{"value": "5", "unit": "celsius"}``.

    Only string values are kept. A missing key reads as ``None`` through
    ``get``; no numeric default is ever substituted.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, str] = {
            k: v for k, v in (values or {}).items() if isinstance(v, str)
        }

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeBag({self._values!r})"

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)


@dataclass(frozen=True)
class Coordinates:
    lat: str
    lon: str


@dataclass
class Forecast:
    """One forecast interval taken from a ``<time>`` element.

    Weather stations carry a partial forecast: only the bags their
    observation provided are filled, ``valid_from``/``valid_to`` stay unset.
    """

    valid_from: datetime | None = None
    valid_to: datetime | None = None
    period_text: str = ""

    symbol: AttributeBag = field(default_factory=AttributeBag)
    precipitation: AttributeBag = field(default_factory=AttributeBag)
    wind_direction: AttributeBag = field(default_factory=AttributeBag)
    wind_speed: AttributeBag = field(default_factory=AttributeBag)
    temperature: AttributeBag = field(default_factory=AttributeBag)
    pressure: AttributeBag = field(default_factory=AttributeBag)

    @property
    def period(self) -> int | None:
        """Period of the day (0 early morning to 4 night), ``None`` for hourly forecasts."""
        text = self.period_text.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            return None

    @period.setter
    def period(self, value: int | str | None) -> None:
        self.period_text = "" if value is None else str(value)

    def symbol_value(self, key: str = "name") -> str | None:
        return self.symbol.get(key)

    def precipitation_value(self, key: str = "value") -> str | None:
        return self.precipitation.get(key)

    def wind_direction_value(self, key: str = "code") -> str | None:
        return self.wind_direction.get(key)

    def wind_speed_value(self, key: str = "mps") -> str | None:
        return self.wind_speed.get(key)

    def temperature_value(self, key: str = "value") -> str | None:
        return self.temperature.get(key)

    def pressure_value(self, key: str = "value") -> str | None:
        return self.pressure.get(key)

    def wind_icon_key(self) -> str | None:
        """Key of the wind arrow pictogram, e.g. ``"0250.010"``.

        ``"0"`` means calm. ``None`` when speed or direction is missing.
        """
        speed = _float_or_none(self.wind_speed_value("mps"))
        if speed is None:
            return None
        if speed <= CALM_WIND_SPEED_MPS:
            return CALM_WIND_ICON_KEY

        degrees = _float_or_none(self.wind_direction_value("deg"))
        if degrees is None:
            return None

        speed_bucket = int(_round_half_up(speed / 2.5) * 25)
        degree_bucket = int(_round_half_up(degrees / 10) * 10)
        if degree_bucket >= 360:
            degree_bucket = 0
        return f"{speed_bucket:04d}.{degree_bucket:03d}"

    def wind_icon_url(self, size: int = 32) -> str | None:
        key = self.wind_icon_key()
        if key is None:
            return None
        if key == CALM_WIND_ICON_KEY:
            return f"{WIND_ICON_BASE_URL}/{size}/vindstille.png"
        return f"{WIND_ICON_BASE_URL}/{size}/vindpil.{key}.png"


@dataclass
class TextualForecast:
    title: str
    text: str
    valid_from: date
    valid_to: date | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.text:
            raise InvalidArgumentError("Title/or text is empty")
        if self.valid_to is None:
            self.valid_to = self.valid_from


@dataclass
class WeatherStation:
    name: str
    distance: int
    lat_long: Coordinates
    source: str
    forecast: Forecast = field(default_factory=Forecast)


def _round_half_up(value: float) -> int:
    # Round half away from zero, values here are never negative
    return math.floor(value + 0.5)


def _float_or_none(v: str | None) -> float | None:
    try:
        if v is None:
            return None
        return float(v)
    except ValueError:
        return None
