# ABOUTME: Pydantic BaseModels for locations, hourly weather records, and derived daily summaries.
# ABOUTME: Defines the immutable value types shared by the acquisition, aggregation, and narrative layers.

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

CUSTOM_LOCATION_NAME = "Custom"


class Coordinate(BaseModel):
    """A latitude/longitude query point."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class Location(BaseModel):
    """A named place: one of the fixed cities or a custom map-picked point."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    coordinate: Coordinate

    @property
    def is_custom(self) -> bool:
        return self.name == CUSTOM_LOCATION_NAME


class HourlyRecord(BaseModel):
    """One hour of weather at a location.

    Every measurement is optional: None means the source did not supply it,
    which is distinct from a measured zero. The last three fields are only
    served by the forecast source.
    """

    model_config = ConfigDict(frozen=True)

    time: datetime
    temperature_2m: float | None = None
    apparent_temperature: float | None = None
    precipitation: float | None = None
    relative_humidity_2m: float | None = None
    surface_pressure: float | None = None
    visibility: float | None = None
    cloud_cover: float | None = None
    wind_speed_10m: float | None = None
    wind_direction_10m: float | None = None
    wind_gusts_10m: float | None = None
    snowfall: float | None = None
    snow_depth: float | None = None
    weather_code: int | None = None
    precipitation_probability: float | None = None
    uv_index: float | None = None
    cape: float | None = None


class DailySummary(BaseModel):
    """Per-day rollup of hourly records."""

    model_config = ConfigDict(frozen=True)

    date: date
    max_temperature: float | None = None
    min_temperature: float | None = None
    precipitation: float = 0.0
    weather_code: int | None = None


class WeekRange(BaseModel):
    """Sunday-to-Saturday week enclosing an anchor date."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date


class AnalysisRequest(BaseModel):
    """Input to the narrative service: where, when, and the hours of that day."""

    model_config = ConfigDict(frozen=True)

    location: Location
    date: date
    records: tuple[HourlyRecord, ...] = ()


class NarrativeStatistics(BaseModel):
    """Aggregates handed to the language model for one day."""

    max_temperature: float | None = None
    min_temperature: float | None = None
    mean_apparent_temperature: float | None = None
    total_precipitation: float | None = None
    max_precipitation_probability: float | None = None
    mean_relative_humidity: float | None = None
    mean_surface_pressure: float | None = None
    min_visibility: float | None = None
    mean_cloud_cover: float | None = None
    max_wind_speed: float | None = None
    max_wind_gusts: float | None = None
    total_snowfall: float | None = None
    max_snow_depth: float | None = None
    max_uv_index: float | None = None
    max_cape: float | None = None
