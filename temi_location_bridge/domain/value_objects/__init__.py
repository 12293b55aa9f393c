"""좌표/변환 값 객체 (불변, 동등성 기반 비교)."""

from temi_location_bridge.domain.value_objects.position import (
    Anchor,
    RobotPose,
    SurveyPoint,
)
from temi_location_bridge.domain.value_objects.transform import (
    Calibration,
    SimilarityTransform,
)

__all__ = [
    'Anchor',
    'Calibration',
    'RobotPose',
    'SimilarityTransform',
    'SurveyPoint',
]
