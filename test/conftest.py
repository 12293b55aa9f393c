"""공통 테스트 fixture."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from temi_location_bridge.domain.entities.location import (
    LocationRecord,
    PositionReport,
)
from temi_location_bridge.domain.enums import LocationSource
from temi_location_bridge.domain.value_objects.position import (
    Anchor,
    RobotPose,
)
from temi_location_bridge.domain.value_objects.transform import (
    Calibration,
    SimilarityTransform,
)
from temi_location_bridge.infra.repository.in_memory_key_value_store import (
    InMemoryKeyValueStore,
)
from temi_location_bridge.infra.repository.key_value_calibration_store import (
    KeyValueCalibrationStore,
)
from temi_location_bridge.usecase.ports.config_port import (
    AppConfig,
    MqttConfig,
    RelayConfig,
    TopicConfig,
)


@pytest.fixture
def fixed_time():
    return datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def indoor_record(fixed_time):
    return LocationRecord(
        source=LocationSource.LOCATION_ENGINE,
        latitude=22.3193,
        longitude=114.1694,
        survey_east=814000.0,
        survey_north=818000.0,
        floor_level=3,
        geofence_id="gf-1",
        geofence_name="Lobby",
        floor_name="3F",
        timestamp=fixed_time,
    )


@pytest.fixture
def gps_record(fixed_time):
    return LocationRecord(
        source=LocationSource.GPS,
        latitude=22.3200,
        longitude=114.1700,
        survey_east=814050.0,
        survey_north=818020.0,
        horizontal_accuracy=4.5,
        is_outdoor=True,
        timestamp=fixed_time,
    )


@pytest.fixture
def indoor_report(indoor_record, fixed_time):
    return PositionReport(
        declared_source=LocationSource.LOCATION_ENGINE,
        indoor=indoor_record,
        direction=45.0,
        timestamp=fixed_time,
    )


@pytest.fixture
def anchor_a():
    return Anchor(survey_east=0.0, survey_north=0.0, map_x=0.0, map_y=0.0)


@pytest.fixture
def anchor_b():
    return Anchor(survey_east=10.0, survey_north=0.0, map_x=0.0, map_y=10.0)


@pytest.fixture
def translation_calibration():
    """scale 1, 회전 없음, (814000, 818000) → 원점."""
    return Calibration(
        transform=SimilarityTransform(
            scale=1.0, rotation=0.0, offset_x=-814000.0, offset_y=-818000.0
        ),
    )


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def calibration_store(kv_store):
    return KeyValueCalibrationStore(kv_store)


@pytest.fixture
def mock_bus():
    bus = MagicMock()
    bus.is_connected = True
    return bus


@pytest.fixture
def mock_robot():
    robot = MagicMock()
    robot.is_ready = True
    robot.get_locations.return_value = ["home base", "entrance"]
    robot.get_position.return_value = RobotPose(x=1.0, y=2.0, yaw=0.0)
    return robot


@pytest.fixture
def topics():
    return TopicConfig()


@pytest.fixture
def sample_config():
    return AppConfig(
        mqtt=MqttConfig(broker_host="localhost", broker_port=1883),
        topics=TopicConfig(),
        relay=RelayConfig(use_survey_mapping=True),
    )
