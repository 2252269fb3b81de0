from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from yrno.core.errors import AssemblyError, MissingFieldError
from yrno.models.location import Location
from yrno.models.weather import Coordinates
from yrno.parsing.dates import parse_xml_datetime
from yrno.parsing.entities import (
    collect,
    parse_forecast,
    parse_textual_forecast,
    parse_weather_station,
)
from yrno.parsing.tree import XmlMapping, find_path, parse_document, xml_to_mapping

logger = logging.getLogger(__name__)


def build_location_from_xml(periodic_xml: str | bytes, hourly_xml: str | bytes) -> Location:
    try:
        periodic = parse_document(periodic_xml)
        hourly = parse_document(hourly_xml)
    except ET.ParseError as e:
        raise AssemblyError("Forecast document is not well-formed XML") from e
    return assemble_location(periodic, hourly)


def assemble_location(periodic: ET.Element, hourly: ET.Element) -> Location:
    """Build a Location from the periodic (``forecast.xml``) and hourly documents.

    Forecasts come from both documents; textual forecasts and weather
    stations only from the hourly one, and only when present. Place
    metadata, links, credit, update times and sun times come from the
    periodic document.
    """
    hourly_forecasts = collect(hourly.iterfind("./forecast/tabular/time"), parse_forecast)
    periodic_forecasts = collect(periodic.iterfind("./forecast/tabular/time"), parse_forecast)
    textual = collect(hourly.iterfind("./forecast/text/location/time"), parse_textual_forecast)
    stations = collect(hourly.iterfind("./observations/weatherstation"), parse_weather_station)

    place = xml_to_mapping(periodic.find("location"))
    credit = xml_to_mapping(find_path(periodic, "credit", "link"))
    meta = xml_to_mapping(periodic.find("meta"))
    sun = xml_to_mapping(periodic.find("sun"))

    try:
        location = Location(
            name=_text_or_none(place, "name"),
            place_type=_text_or_none(place, "type"),
            country=_text_or_none(place, "country"),
            timezone=_text_or_none(_mapping(place, "timezone"), "id"),
            utc_offset_minutes=_int_or_none(
                _text_or_none(_mapping(place, "timezone"), "utcoffsetMinutes")
            ),
            lat_long=_coordinates(_mapping(place, "location")),
            periodic=periodic_forecasts.items,
            hourly=hourly_forecasts.items,
            textual_forecasts=textual.items,
            weather_stations=stations.items,
            last_updated=parse_xml_datetime(_required(meta, "lastupdate")),
            next_update=parse_xml_datetime(_required(meta, "nextupdate")),
            skipped={
                "hourly": hourly_forecasts.skipped,
                "periodic": periodic_forecasts.skipped,
                "textual": textual.skipped,
                "stations": stations.skipped,
            },
        )

        rise = _text_or_none(sun, "rise")
        set_ = _text_or_none(sun, "set")
        if rise and set_:
            location.sunrise = parse_xml_datetime(rise)
            location.sunset = parse_xml_datetime(set_)
    except (ValueError, TypeError) as e:
        raise AssemblyError(f"Could not create Location object: {e}") from e

    links = periodic.find("links")
    if links is not None:
        for link in links.iterfind("link"):
            data = xml_to_mapping(link)
            link_id = _text_or_none(data, "id")
            url = _text_or_none(data, "url")
            if link_id and url:
                location.add_link(link_id, url)

    credit_text = _text_or_none(credit, "text")
    credit_url = _text_or_none(credit, "url")
    if credit_text and credit_url:
        location.credit_text = credit_text
        location.credit_url = credit_url

    logger.info(
        "Assembled %s: %d hourly, %d periodic, %d textual, %d stations (skipped %s)",
        location.name,
        len(location.hourly),
        len(location.periodic),
        len(location.textual_forecasts),
        len(location.weather_stations),
        location.skipped,
    )
    return location


def _required(data: XmlMapping, key: str) -> str:
    value = _text_or_none(data, key)
    if value is None:
        raise MissingFieldError(key)
    return value


def _text_or_none(data: XmlMapping, key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _mapping(data: XmlMapping, key: str) -> XmlMapping:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _coordinates(data: XmlMapping) -> Coordinates | None:
    lat = _text_or_none(data, "latitude")
    lon = _text_or_none(data, "longitude")
    if lat is None or lon is None:
        return None
    return Coordinates(lat=lat, lon=lon)


def _int_or_none(v: str | None) -> int | None:
    try:
        if v is None:
            return None
        return int(v)
    except ValueError:
        return None
