from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from yrno.core.errors import InvalidArgumentError, MissingFieldError, ParseError
from yrno.models.weather import (
    AttributeBag,
    Coordinates,
    Forecast,
    TextualForecast,
    WeatherStation,
)
from yrno.parsing.dates import parse_xml_date, parse_xml_datetime
from yrno.parsing.tree import XmlMapping, inner_markup, xml_to_mapping

logger = logging.getLogger(__name__)

T = TypeVar("T")

# XML tag -> Forecast attribute
FORECAST_BAGS: tuple[tuple[str, str], ...] = (
    ("symbol", "symbol"),
    ("precipitation", "precipitation"),
    ("windDirection", "wind_direction"),
    ("windSpeed", "wind_speed"),
    ("temperature", "temperature"),
    ("pressure", "pressure"),
)

STATION_BAGS: tuple[tuple[str, str], ...] = (
    ("symbol", "symbol"),
    ("temperature", "temperature"),
    ("windDirection", "wind_direction"),
    ("windSpeed", "wind_speed"),
)


@dataclass(frozen=True)
class Collected(Generic[T]):
    items: list[T] = field(default_factory=list)
    skipped: int = 0


def collect(nodes: Iterable[ET.Element], parser: Callable[[ET.Element], T]) -> Collected[T]:
    """Parse every node, dropping (and counting) the ones that cannot be parsed."""
    items: list[T] = []
    skipped = 0
    for node in nodes:
        try:
            items.append(parser(node))
        except (ParseError, InvalidArgumentError) as e:
            skipped += 1
            logger.debug("Skipping <%s> entry: %s", node.tag, e)
    return Collected(items=items, skipped=skipped)


def parse_forecast(node: ET.Element) -> Forecast:
    """Build a Forecast from a ``<time from=".." to=".." [period=".."]>`` element.

    Raises MissingFieldError when from/to or one of the six measurement
    elements is absent, ParseError when a timestamp cannot be read.
    """
    data = xml_to_mapping(node)

    valid_from = parse_xml_datetime(_required_text(data, "from"))
    valid_to = parse_xml_datetime(_required_text(data, "to"))
    period = data.get("period", "")

    bags: dict[str, AttributeBag] = {}
    for tag, attr in FORECAST_BAGS:
        if tag not in data:
            raise MissingFieldError(tag)
        bags[attr] = _bag(data[tag])

    return Forecast(
        valid_from=valid_from,
        valid_to=valid_to,
        period_text=period if isinstance(period, str) else "",
        **bags,
    )


def parse_textual_forecast(node: ET.Element) -> TextualForecast:
    data = xml_to_mapping(node)

    title = _required_text(data, "title")
    # The body may carry inline markup such as <strong>
    bodies = node.findall("body")
    if not bodies:
        raise MissingFieldError("body")
    text = inner_markup(bodies[-1])
    valid_from = parse_xml_date(_required_text(data, "from"))
    to_text = data.get("to")
    valid_to = parse_xml_date(to_text) if isinstance(to_text, str) and to_text else None

    return TextualForecast(title=title, text=text, valid_from=valid_from, valid_to=valid_to)


def parse_weather_station(node: ET.Element) -> WeatherStation:
    """Build a WeatherStation from an ``<weatherstation>`` element.

    The embedded forecast only gets the observations the station reported.
    """
    data = xml_to_mapping(node)

    name = _required_text(data, "name")
    distance_text = _required_text(data, "distance")
    lat = _required_text(data, "lat")
    lon = _required_text(data, "lon")
    source = _required_text(data, "source")

    try:
        distance = int(float(distance_text))
    except ValueError as e:
        raise ParseError(f"Invalid station distance: {distance_text!r}") from e

    station = WeatherStation(
        name=name,
        distance=distance,
        lat_long=Coordinates(lat=lat, lon=lon),
        source=source,
    )
    for tag, attr in STATION_BAGS:
        if tag in data:
            setattr(station.forecast, attr, _bag(data[tag]))
    return station


def _required_text(data: XmlMapping, key: str) -> str:
    value = data.get(key)
    if value is None:
        raise MissingFieldError(key)
    if not isinstance(value, str):
        raise ParseError(f"Expected text for {key!r}")
    return value


def _bag(value: object) -> AttributeBag:
    return AttributeBag(value) if isinstance(value, dict) else AttributeBag()
