from __future__ import annotations

from datetime import date

import pytest

from yrno.core.errors import InvalidArgumentError, MissingFieldError
from yrno.models.weather import TextualForecast
from yrno.parsing.entities import collect, parse_textual_forecast
from yrno.parsing.tree import parse_document


def test_empty_title_or_text_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        TextualForecast("", "", date(2014, 3, 7))
    with pytest.raises(InvalidArgumentError):
        TextualForecast("Friday", "", date(2014, 3, 7))
    with pytest.raises(InvalidArgumentError):
        TextualForecast("", "Cloudy", date(2014, 3, 7))


def test_single_day_forecast_ends_on_its_first_day() -> None:
    forecast = TextualForecast("Friday", "Cloudy", date(2014, 3, 7))
    assert forecast.valid_to == date(2014, 3, 7)


def test_parse_two_day_forecast() -> None:
    node = parse_document(
        '<time from="2014-03-09" to="2014-03-10"><title>Sunday and Monday</title>'
        "<body>&lt;strong&gt;Oslo:&lt;/strong&gt; Snow.</body></time>"
    )
    forecast = parse_textual_forecast(node)
    assert forecast.title == "Sunday and Monday"
    assert forecast.text == "<strong>Oslo:</strong> Snow."
    assert forecast.valid_from == date(2014, 3, 9)
    assert forecast.valid_to == date(2014, 3, 10)


def test_parse_single_date() -> None:
    node = parse_document('<time from="2014-03-08"><title>Saturday</title><body>Rain.</body></time>')
    forecast = parse_textual_forecast(node)
    assert forecast.valid_from == forecast.valid_to == date(2014, 3, 8)


def test_parse_missing_body() -> None:
    node = parse_document('<time from="2014-03-08"><title>Saturday</title></time>')
    with pytest.raises(MissingFieldError) as exc:
        parse_textual_forecast(node)
    assert exc.value.field == "body"


def test_parse_empty_title() -> None:
    node = parse_document('<time from="2014-03-08"><title></title><body>Rain.</body></time>')
    with pytest.raises(InvalidArgumentError):
        parse_textual_forecast(node)


def test_parse_body_with_inline_markup() -> None:
    node = parse_document(
        '<time from="2014-03-09"><title>Sunday</title>'
        "<body><strong>Oslo:</strong> Snow. <!-- note -->Cold.</body></time>"
    )
    forecast = parse_textual_forecast(node)
    assert forecast.text == "<strong>Oslo:</strong> Snow. Cold."


def test_collect_keeps_forecasts_with_inline_markup() -> None:
    root = parse_document(
        '<location><time from="2014-03-09"><title>Sunday</title>'
        "<body><strong>Oslo:</strong> Snow.</body></time></location>"
    )
    collected = collect(root.iterfind("time"), parse_textual_forecast)
    assert collected.skipped == 0
    assert [f.text for f in collected.items] == ["<strong>Oslo:</strong> Snow."]
