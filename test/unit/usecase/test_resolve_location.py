"""LocationResolver 유닛 테스트."""

from dataclasses import replace

import pytest

from temi_location_bridge.domain.entities.location import PositionReport
from temi_location_bridge.domain.enums import LocationSource
from temi_location_bridge.domain.exceptions import LocationResolutionError
from temi_location_bridge.domain.value_objects.position import SurveyPoint
from temi_location_bridge.usecase.resolve_location import LocationResolver


@pytest.fixture
def resolver():
    return LocationResolver()


class TestSourcePolicy:
    def test_location_engine_uses_indoor(
        self, resolver, indoor_record, gps_record
    ):
        report = PositionReport(
            declared_source='LocationEngine',
            indoor=indoor_record,
            gps=gps_record,
        )
        resolved = resolver.resolve(report)

        assert resolved.active is indoor_record
        assert resolved.source == LocationSource.LOCATION_ENGINE
        assert not resolved.is_fallback

    def test_gps_uses_gps_record(self, resolver, indoor_record, gps_record):
        report = PositionReport(
            declared_source='GPS', indoor=indoor_record, gps=gps_record
        )
        resolved = resolver.resolve(report)

        assert resolved.active is gps_record
        assert resolved.source == LocationSource.GPS
        assert not resolved.is_fallback

    def test_gps_falls_back_to_indoor(self, resolver, indoor_record):
        report = PositionReport(declared_source='GPS', indoor=indoor_record)
        resolved = resolver.resolve(report)

        assert resolved.active is indoor_record
        assert resolved.is_fallback

    def test_manual_uses_indoor_without_fallback(self, resolver, gps_record):
        report = PositionReport(declared_source='Manual', gps=gps_record)

        with pytest.raises(LocationResolutionError):
            resolver.resolve(report)

    def test_unknown_source_uses_indoor(self, resolver, indoor_record):
        report = PositionReport(declared_source='Beacon', indoor=indoor_record)
        resolved = resolver.resolve(report)

        assert resolved.active is indoor_record
        assert resolved.declared_source == 'Beacon'

    def test_gps_with_no_records_raises(self, resolver):
        with pytest.raises(LocationResolutionError):
            resolver.resolve(PositionReport(declared_source='GPS'))

    def test_siblings_and_direction_carried(
        self, resolver, indoor_record, gps_record
    ):
        report = PositionReport(
            declared_source='GPS',
            indoor=indoor_record,
            gps=gps_record,
            direction=12.5,
        )
        resolved = resolver.resolve(report)

        assert resolved.indoor is indoor_record
        assert resolved.gps is gps_record
        assert resolved.direction == 12.5


class TestSurveyCache:
    def test_initially_empty(self, resolver):
        assert resolver.latest is None
        assert resolver.latest_survey_point is None

    def test_valid_fix_cached(self, resolver, indoor_report):
        resolver.resolve(indoor_report)

        assert resolver.latest_survey_point == SurveyPoint(814000.0, 818000.0)
        assert resolver.latest.active is indoor_report.indoor

    def test_zero_coordinate_not_cached(self, resolver, indoor_report):
        resolver.resolve(indoor_report)
        zero_north = replace(indoor_report.indoor, survey_north=0.0)

        resolver.resolve(replace(indoor_report, indoor=zero_north))

        assert resolver.latest_survey_point == SurveyPoint(814000.0, 818000.0)
        assert resolver.latest.active is zero_north

    def test_missing_coordinates_not_cached(self, resolver, indoor_report):
        no_survey = replace(
            indoor_report.indoor, survey_east=None, survey_north=None
        )
        resolver.resolve(replace(indoor_report, indoor=no_survey))

        assert resolver.latest_survey_point is None

    def test_failed_resolution_keeps_cache(self, resolver, indoor_report):
        resolver.resolve(indoor_report)

        with pytest.raises(LocationResolutionError):
            resolver.resolve(PositionReport(declared_source='LocationEngine'))

        assert resolver.latest_survey_point == SurveyPoint(814000.0, 818000.0)

    def test_later_fix_overwrites(self, resolver, indoor_report):
        resolver.resolve(indoor_report)
        moved = replace(
            indoor_report.indoor, survey_east=814010.0, survey_north=818005.0
        )
        resolver.resolve(replace(indoor_report, indoor=moved))

        assert resolver.latest_survey_point == SurveyPoint(814010.0, 818005.0)
