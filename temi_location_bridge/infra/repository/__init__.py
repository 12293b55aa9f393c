"""저장소 인프라 (KeyValueStore, CalibrationStore 구현)."""

from temi_location_bridge.infra.repository.in_memory_key_value_store import (
    InMemoryKeyValueStore,
)
from temi_location_bridge.infra.repository.key_value_calibration_store import (
    KeyValueCalibrationStore,
)
from temi_location_bridge.infra.repository.yaml_key_value_store import (
    YamlKeyValueStore,
)

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueCalibrationStore",
    "YamlKeyValueStore",
]
