# ABOUTME: Contract tests for Pydantic models used across the weather archive.
# ABOUTME: Validates coordinate bounds, optional hourly fields, and immutability of fetched data.

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from weather_archive.models import AnalysisRequest, Coordinate, DailySummary, HourlyRecord, Location


class TestCoordinate:
    def test_valid_coordinate_parses(self):
        coordinate = Coordinate(latitude=35.6895, longitude=139.6917)
        assert coordinate.latitude == 35.6895
        assert coordinate.longitude == 139.6917

    def test_out_of_range_latitude_rejected(self):
        """Coordinate rejects latitudes outside -90..90.

        Implementation: Constructs a Coordinate with latitude 91.
        Passing implies: Garbage map input never reaches the weather API.
        """
        with pytest.raises(ValidationError):
            Coordinate(latitude=91.0, longitude=0.0)


class TestLocation:
    def test_custom_flag(self):
        """Location.is_custom distinguishes map-picked points from fixed cities.

        Implementation: Builds one of each.
        Passing implies: The UI can show the custom label only for custom points.
        """
        point = Coordinate(latitude=36.0, longitude=138.0)
        assert Location(name="Custom", label="指定地点 (36.00, 138.00)", coordinate=point).is_custom
        assert not Location(name="Nagano", label="長野", coordinate=point).is_custom


class TestHourlyRecord:
    def test_valid_hourly_parses(self):
        """HourlyRecord accepts a complete forecast hour.

        Implementation: Constructs HourlyRecord with core and forecast-only fields.
        Passing implies: All hourly fields are stored correctly.
        """
        hour = HourlyRecord(
            time=datetime(2024, 6, 12, 12, 0),
            temperature_2m=24.5,
            precipitation=0.0,
            relative_humidity_2m=65,
            weather_code=2,
            precipitation_probability=10,
            uv_index=6.5,
            cape=120.0,
        )
        assert hour.time == datetime(2024, 6, 12, 12, 0)
        assert hour.temperature_2m == 24.5
        assert hour.uv_index == 6.5

    def test_optional_fields_default_to_none(self):
        """HourlyRecord only requires the time field.

        Implementation: Constructs HourlyRecord with only the time.
        Passing implies: Absent values are None rather than zero.
        """
        hour = HourlyRecord(time=datetime(2024, 6, 12, 12, 0))
        assert hour.temperature_2m is None
        assert hour.precipitation is None
        assert hour.uv_index is None
        assert hour.cape is None

    def test_zero_is_distinct_from_absent(self):
        hour = HourlyRecord(time=datetime(2024, 6, 12, 12, 0), uv_index=0.0)
        assert hour.uv_index == 0.0
        assert hour.uv_index is not None

    def test_records_are_immutable(self):
        """Fetched records cannot be modified in place.

        Implementation: Attempts to assign to a field of a frozen record.
        Passing implies: The fetched sequence stays the single source of truth.
        """
        hour = HourlyRecord(time=datetime(2024, 6, 12, 12, 0), temperature_2m=20.0)
        with pytest.raises(ValidationError):
            hour.temperature_2m = 0.0


class TestDailySummary:
    def test_defaults(self):
        summary = DailySummary(date=date(2024, 6, 12))
        assert summary.max_temperature is None
        assert summary.precipitation == 0.0
        assert summary.weather_code is None


class TestAnalysisRequest:
    def test_records_coerced_to_tuple(self):
        """AnalysisRequest stores its hourly subset as an immutable tuple.

        Implementation: Passes a list of records.
        Passing implies: The request cannot be altered after submission.
        """
        point = Coordinate(latitude=35.0, longitude=135.0)
        request = AnalysisRequest(
            location=Location(name="Custom", label="指定地点 (35.00, 135.00)", coordinate=point),
            date=date(2024, 6, 12),
            records=[HourlyRecord(time=datetime(2024, 6, 12, 0, 0))],
        )
        assert isinstance(request.records, tuple)
        assert len(request.records) == 1
