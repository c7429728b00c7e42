"""Schema definitions for GTFS feed tables.

This module contains only:
- `TableSchema` (per-file field contract)
- `FeedSpec` (the registry: schemas, required/optional files, field rules)
- concrete table schemas (e.g., `AGENCY`, `STOPS`, ...) and the default `GTFS_SPEC`

All values here are built once at import time and treated as read-only.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from gtfs_engine.models.rules import (
    FIELD_VALIDATIONS,
    LOCATION_TYPES,
    ROUTE_TYPES,
    TRANSFER_TYPES,
    Rule,
    check,
)


class TableSchema(BaseModel):
    """A column-level contract for one feed file."""

    model_config = ConfigDict(frozen=True)

    name: str
    required_fields: tuple[str, ...] = Field(default_factory=tuple)
    optional_fields: tuple[str, ...] = Field(default_factory=tuple)
    # None for composite-key or keyless tables (e.g. stop_times: trip_id + stop_sequence)
    key_field: str | None = None

    def all_fields(self) -> tuple[str, ...]:
        return self.required_fields + self.optional_fields

    def allowed_fields(self) -> set[str]:
        return set(self.required_fields) | set(self.optional_fields)


class FeedSpec(BaseModel):
    """Process-wide registry of table schemas and field rules."""

    model_config = ConfigDict(frozen=True)

    files: Mapping[str, TableSchema]
    required_files: tuple[str, ...]
    optional_files: tuple[str, ...] = Field(default_factory=tuple)
    field_validations: Mapping[str, tuple[Rule, ...]] = Field(default_factory=dict)
    route_types: Mapping[str, str] = Field(default_factory=dict)
    location_types: Mapping[str, str] = Field(default_factory=dict)
    transfer_types: Mapping[str, str] = Field(default_factory=dict)

    def schema_for(self, filename: str) -> TableSchema | None:
        """Return the schema for `filename`, or None if the file is unknown."""
        return self.files.get(filename)

    def is_required(self, filename: str) -> bool:
        return filename in self.required_files

    def rules_for(self, field: str) -> tuple[Rule, ...]:
        return tuple(self.field_validations.get(field, ()))

    def enumerations(self) -> dict[Rule, Mapping[str, str]]:
        return {
            Rule.ROUTE_TYPE: self.route_types,
            Rule.LOCATION_TYPE: self.location_types,
            Rule.TRANSFER_TYPE: self.transfer_types,
        }

    def check(self, rule: Rule, value: str) -> bool:
        return check(rule, value, enumerations=self.enumerations())


AGENCY = TableSchema(
    name="agency.txt",
    required_fields=("agency_id", "agency_name", "agency_url", "agency_timezone"),
    optional_fields=("agency_lang", "agency_phone", "agency_fare_url", "agency_email"),
    key_field="agency_id",
)

STOPS = TableSchema(
    name="stops.txt",
    required_fields=("stop_id", "stop_name", "stop_lat", "stop_lon"),
    optional_fields=(
        "stop_code",
        "stop_desc",
        "zone_id",
        "stop_url",
        "location_type",
        "parent_station",
        "stop_timezone",
        "wheelchair_boarding",
        "level_id",
        "platform_code",
    ),
    key_field="stop_id",
)

ROUTES = TableSchema(
    name="routes.txt",
    required_fields=("route_id", "route_short_name", "route_long_name", "route_type"),
    optional_fields=(
        "agency_id",
        "route_desc",
        "route_url",
        "route_color",
        "route_text_color",
        "route_sort_order",
        "continuous_pickup",
        "continuous_drop_off",
    ),
    key_field="route_id",
)

TRIPS = TableSchema(
    name="trips.txt",
    required_fields=("route_id", "service_id", "trip_id"),
    optional_fields=(
        "trip_headsign",
        "trip_short_name",
        "direction_id",
        "block_id",
        "shape_id",
        "wheelchair_accessible",
        "bikes_allowed",
    ),
    key_field="trip_id",
)

STOP_TIMES = TableSchema(
    name="stop_times.txt",
    required_fields=("trip_id", "arrival_time", "departure_time", "stop_id", "stop_sequence"),
    optional_fields=(
        "stop_headsign",
        "pickup_type",
        "drop_off_type",
        "continuous_pickup",
        "continuous_drop_off",
        "shape_dist_traveled",
        "timepoint",
    ),
)

CALENDAR = TableSchema(
    name="calendar.txt",
    required_fields=(
        "service_id",
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
        "friday",
        "saturday",
        "sunday",
        "start_date",
        "end_date",
    ),
    key_field="service_id",
)

CALENDAR_DATES = TableSchema(
    name="calendar_dates.txt",
    required_fields=("service_id", "date", "exception_type"),
)

FARE_ATTRIBUTES = TableSchema(
    name="fare_attributes.txt",
    required_fields=("fare_id", "price", "currency_type", "payment_method", "transfers"),
    optional_fields=("agency_id", "transfer_duration"),
    key_field="fare_id",
)

FARE_RULES = TableSchema(
    name="fare_rules.txt",
    required_fields=("fare_id",),
    optional_fields=("route_id", "origin_id", "destination_id", "contains_id"),
)

SHAPES = TableSchema(
    name="shapes.txt",
    required_fields=("shape_id", "shape_pt_lat", "shape_pt_lon", "shape_pt_sequence"),
    optional_fields=("shape_dist_traveled",),
)

FREQUENCIES = TableSchema(
    name="frequencies.txt",
    required_fields=("trip_id", "start_time", "end_time", "headway_secs"),
    optional_fields=("exact_times",),
)

TRANSFERS = TableSchema(
    name="transfers.txt",
    required_fields=("transfer_type",),
    optional_fields=("from_stop_id", "to_stop_id", "from_trip_id", "to_trip_id", "min_transfer_time"),
)

FEED_INFO = TableSchema(
    name="feed_info.txt",
    required_fields=("feed_publisher_name", "feed_publisher_url", "feed_lang"),
    optional_fields=(
        "default_lang",
        "feed_start_date",
        "feed_end_date",
        "feed_version",
        "feed_contact_email",
        "feed_contact_url",
    ),
)

PATHWAYS = TableSchema(
    name="pathways.txt",
    required_fields=("pathway_id", "from_stop_id", "to_stop_id", "pathway_mode", "is_bidirectional"),
    optional_fields=(
        "length",
        "traversal_time",
        "stair_count",
        "max_slope",
        "min_width",
        "signposted_as",
        "reversed_signposted_as",
    ),
    key_field="pathway_id",
)

LEVELS = TableSchema(
    name="levels.txt",
    required_fields=("level_id", "level_index"),
    optional_fields=("level_name",),
    key_field="level_id",
)

TRANSLATIONS = TableSchema(
    name="translations.txt",
    required_fields=("table_name", "field_name", "language", "translation"),
    optional_fields=("record_id", "record_sub_id", "field_value"),
)

ATTRIBUTIONS = TableSchema(
    name="attributions.txt",
    required_fields=("organization_name",),
    optional_fields=(
        "attribution_id",
        "agency_id",
        "route_id",
        "trip_id",
        "is_producer",
        "is_operator",
        "is_authority",
        "attribution_url",
        "attribution_email",
        "attribution_phone",
    ),
    key_field="attribution_id",
)

_ALL_SCHEMAS: tuple[TableSchema, ...] = (
    AGENCY,
    STOPS,
    ROUTES,
    TRIPS,
    STOP_TIMES,
    CALENDAR,
    CALENDAR_DATES,
    FARE_ATTRIBUTES,
    FARE_RULES,
    SHAPES,
    FREQUENCIES,
    TRANSFERS,
    FEED_INFO,
    PATHWAYS,
    LEVELS,
    TRANSLATIONS,
    ATTRIBUTIONS,
)

GTFS_SPEC = FeedSpec(
    files={s.name: s for s in _ALL_SCHEMAS},
    required_files=("agency.txt", "stops.txt", "routes.txt", "trips.txt", "stop_times.txt"),
    optional_files=(
        "calendar.txt",
        "calendar_dates.txt",
        "fare_attributes.txt",
        "fare_rules.txt",
        "shapes.txt",
        "frequencies.txt",
        "transfers.txt",
        "feed_info.txt",
        "pathways.txt",
        "levels.txt",
        "translations.txt",
        "attributions.txt",
    ),
    field_validations=FIELD_VALIDATIONS,
    route_types=ROUTE_TYPES,
    location_types=LOCATION_TYPES,
    transfer_types=TRANSFER_TYPES,
)
