"""KeyValueStore 기반 캘리브레이션 저장소."""

from __future__ import annotations

import logging
from typing import Any

from temi_location_bridge.domain.value_objects.position import Anchor
from temi_location_bridge.domain.value_objects.transform import (
    Calibration,
    SimilarityTransform,
)
from temi_location_bridge.usecase.ports.calibration_store import (
    CalibrationStore,
)
from temi_location_bridge.usecase.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

KEY_CALIBRATED = "calibrated"
_TRANSFORM_KEYS = ("scale", "rotation", "offset_x", "offset_y")
_ANCHOR_FIELDS = ("survey_east", "survey_north", "map_x", "map_y")


class KeyValueCalibrationStore(CalibrationStore):
    """캘리브레이션을 평평한 key/value로 저장한다.

    키 구성: ``calibrated``, ``scale``, ``rotation``, ``offset_x``,
    ``offset_y``, ``anchor_{a,b}_{survey_east,survey_north,map_x,map_y}``.
    ``calibrated``가 없거나 false이면 나머지 키는 무시한다.

    Args:
        store: key/value 저장소.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self) -> Calibration | None:
        if not self._store.get(KEY_CALIBRATED, False):
            return None

        try:
            transform = SimilarityTransform(
                scale=float(self._store.get("scale")),
                rotation=float(self._store.get("rotation")),
                offset_x=float(self._store.get("offset_x")),
                offset_y=float(self._store.get("offset_y")),
            )
        except (TypeError, ValueError):
            logger.warning("Stored calibration is incomplete, ignored")
            return None

        if transform.scale <= 0.0:
            logger.warning(
                "Stored calibration has invalid scale %f, ignored",
                transform.scale,
            )
            return None

        return Calibration(
            transform=transform,
            anchor_a=self._load_anchor("a"),
            anchor_b=self._load_anchor("b"),
        )

    def save(self, calibration: Calibration) -> None:
        transform = calibration.transform
        values: dict[str, Any] = {
            KEY_CALIBRATED: True,
            "scale": transform.scale,
            "rotation": transform.rotation,
            "offset_x": transform.offset_x,
            "offset_y": transform.offset_y,
        }
        for name, anchor in (
            ("a", calibration.anchor_a),
            ("b", calibration.anchor_b),
        ):
            if anchor is None:
                continue
            for attr in _ANCHOR_FIELDS:
                values[f"anchor_{name}_{attr}"] = getattr(anchor, attr)

        self._store.update(values)
        logger.info("Calibration saved")

    def clear(self) -> None:
        self._store.clear()
        logger.info("Calibration cleared")

    def _load_anchor(self, name: str) -> Anchor | None:
        values = [self._store.get(f"anchor_{name}_{attr}") for attr in _ANCHOR_FIELDS]
        if any(v is None for v in values):
            return None
        try:
            return Anchor(*(float(v) for v in values))
        except (TypeError, ValueError):
            return None
