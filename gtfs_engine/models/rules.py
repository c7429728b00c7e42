"""Field-level validation rules.

This module contains only:
- `Rule` (the closed set of rule kinds)
- pure predicates over raw cell strings (`RULE_CHECKS`)
- closed value sets for enumerated fields
- `FIELD_VALIDATIONS`, the field -> rules mapping shared by every table

Rules are keyed by field name, not by file: `route_id` or `date` mean the same
thing wherever they appear.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from collections.abc import Callable, Mapping
from enum import Enum

from pydantic import AnyUrl, TypeAdapter, ValidationError


class Rule(str, Enum):
    REQUIRED_FIELD = "required_field"
    NUMERIC = "numeric"
    INTEGER = "integer"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    TIME = "time"
    DATE = "date"
    URL = "url"
    EMAIL = "email"
    COLOR = "color"
    CURRENCY = "currency"
    BINARY = "binary"
    ROUTE_TYPE = "route_type"
    LOCATION_TYPE = "location_type"
    TRANSFER_TYPE = "transfer_type"


ROUTE_TYPES: dict[str, str] = {
    "0": "Tram, Streetcar, Light rail",
    "1": "Subway, Metro",
    "2": "Rail",
    "3": "Bus",
    "4": "Ferry",
    "5": "Cable tram",
    "6": "Aerial lift, suspended cable car",
    "7": "Funicular",
    "11": "Trolleybus",
    "12": "Monorail",
}

LOCATION_TYPES: dict[str, str] = {
    "0": "Stop/platform",
    "1": "Station",
    "2": "Entrance/exit",
    "3": "Generic node",
    "4": "Boarding area",
}

TRANSFER_TYPES: dict[str, str] = {
    "0": "Recommended transfer point",
    "1": "Timed transfer (vehicle waits)",
    "2": "Minimum transfer time required",
    "3": "Transfer not possible",
    "4": "In-seat transfer allowed (passengers stay on vehicle)",
    "5": "In-seat transfer not allowed (passengers must alight and re-board)",
}

# Decimal literal: no nan/inf, no digit separators.
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_TIME_RE = re.compile(r"^([0-9]{1,3}):([0-5][0-9]):([0-5][0-9])$")
_DATE_RE = re.compile(r"^[0-9]{8}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_COLOR_RE = re.compile(r"^[0-9A-Fa-f]{6}$")
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _as_float_or_none(value: str) -> float | None:
    if not _NUMBER_RE.match(value.strip()):
        return None
    x = float(value)
    return x if math.isfinite(x) else None


def is_present(value: object) -> bool:
    return value is not None and value != ""


def is_numeric(value: str) -> bool:
    return _as_float_or_none(value) is not None


def is_integer(value: str) -> bool:
    x = _as_float_or_none(value)
    return x is not None and x.is_integer()


def is_latitude(value: str) -> bool:
    x = _as_float_or_none(value)
    return x is not None and -90 <= x <= 90


def is_longitude(value: str) -> bool:
    x = _as_float_or_none(value)
    return x is not None and -180 <= x <= 180


def is_time(value: str) -> bool:
    """GTFS service time: H:MM:SS up to HHH:MM:SS (hours may pass 24)."""
    return bool(_TIME_RE.match(value))


def is_date(value: str) -> bool:
    """Strict YYYYMMDD that names a real calendar day."""
    if not _DATE_RE.match(value):
        return False
    try:
        dt.date(int(value[:4]), int(value[4:6]), int(value[6:]))
    except ValueError:
        return False
    return True


def is_url(value: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def is_color(value: str) -> bool:
    return bool(_COLOR_RE.match(value))


def is_currency(value: str) -> bool:
    """ISO 4217 style: three upper-case letters."""
    return bool(_CURRENCY_RE.match(value))


def is_binary(value: str) -> bool:
    return value in ("0", "1")


RULE_CHECKS: dict[Rule, Callable[[str], bool]] = {
    Rule.REQUIRED_FIELD: is_present,
    Rule.NUMERIC: is_numeric,
    Rule.INTEGER: is_integer,
    Rule.LATITUDE: is_latitude,
    Rule.LONGITUDE: is_longitude,
    Rule.TIME: is_time,
    Rule.DATE: is_date,
    Rule.URL: is_url,
    Rule.EMAIL: is_email,
    Rule.COLOR: is_color,
    Rule.CURRENCY: is_currency,
    Rule.BINARY: is_binary,
}

DEFAULT_ENUMERATIONS: dict[Rule, Mapping[str, str]] = {
    Rule.ROUTE_TYPE: ROUTE_TYPES,
    Rule.LOCATION_TYPE: LOCATION_TYPES,
    Rule.TRANSFER_TYPE: TRANSFER_TYPES,
}


def check(
    rule: Rule,
    value: str,
    *,
    enumerations: Mapping[Rule, Mapping[str, str]] | None = None,
) -> bool:
    """Run one rule against a raw cell value."""
    rule = Rule(rule)
    enums = DEFAULT_ENUMERATIONS if enumerations is None else enumerations
    if rule in enums:
        return value in enums[rule]
    return RULE_CHECKS[rule](value)


def describe_route_type(value: str) -> str:
    return ROUTE_TYPES.get(str(value), "Unknown")


_DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

FIELD_VALIDATIONS: dict[str, tuple[Rule, ...]] = {
    "stop_lat": (Rule.REQUIRED_FIELD, Rule.LATITUDE),
    "stop_lon": (Rule.REQUIRED_FIELD, Rule.LONGITUDE),
    "route_type": (Rule.REQUIRED_FIELD, Rule.ROUTE_TYPE),
    "location_type": (Rule.LOCATION_TYPE,),
    "transfer_type": (Rule.REQUIRED_FIELD, Rule.TRANSFER_TYPE),
    "arrival_time": (Rule.REQUIRED_FIELD, Rule.TIME),
    "departure_time": (Rule.REQUIRED_FIELD, Rule.TIME),
    "start_time": (Rule.REQUIRED_FIELD, Rule.TIME),
    "end_time": (Rule.REQUIRED_FIELD, Rule.TIME),
    "headway_secs": (Rule.REQUIRED_FIELD, Rule.INTEGER),
    "exact_times": (Rule.BINARY,),
    "start_date": (Rule.REQUIRED_FIELD, Rule.DATE),
    "end_date": (Rule.REQUIRED_FIELD, Rule.DATE),
    "date": (Rule.REQUIRED_FIELD, Rule.DATE),
    "agency_url": (Rule.REQUIRED_FIELD, Rule.URL),
    "route_url": (Rule.URL,),
    "stop_url": (Rule.URL,),
    "feed_publisher_url": (Rule.REQUIRED_FIELD, Rule.URL),
    "feed_contact_url": (Rule.URL,),
    "agency_email": (Rule.EMAIL,),
    "feed_contact_email": (Rule.EMAIL,),
    "route_color": (Rule.COLOR,),
    "route_text_color": (Rule.COLOR,),
    "price": (Rule.REQUIRED_FIELD, Rule.NUMERIC),
    "currency_type": (Rule.REQUIRED_FIELD, Rule.CURRENCY),
    **{day: (Rule.REQUIRED_FIELD, Rule.BINARY) for day in _DAYS},
    "wheelchair_boarding": (Rule.BINARY,),
    "wheelchair_accessible": (Rule.BINARY,),
    "bikes_allowed": (Rule.BINARY,),
}
