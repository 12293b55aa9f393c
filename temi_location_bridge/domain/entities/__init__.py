"""temi Location Bridge 도메인 엔티티."""

from temi_location_bridge.domain.entities.envelope import (
    CommandEnvelope,
    LocationsEnvelope,
    StatusEnvelope,
)
from temi_location_bridge.domain.entities.location import (
    LocationRecord,
    PositionReport,
    ResolvedLocation,
)

__all__ = [
    "CommandEnvelope",
    "LocationRecord",
    "LocationsEnvelope",
    "PositionReport",
    "ResolvedLocation",
    "StatusEnvelope",
]
