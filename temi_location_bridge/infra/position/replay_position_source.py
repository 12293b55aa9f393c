"""기록 파일 재생 PositionSource 구현체.

location_data JSON 객체와 같은 형식의 항목을 담은 YAML 리스트를
일정 간격으로 재생한다. 측위 SDK가 없는 환경에서 controller를
시험하는 데 사용한다.

    - locationSource: LocationEngine
      direction: 45.0
      location: {latitude: 22.3, longitude: 114.2, hkE: 836000.0, hkN: 818000.0}
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path
import threading
from typing import Any

import yaml

from temi_location_bridge.domain.entities.location import PositionReport
from temi_location_bridge.domain.exceptions import MalformedCommandError
from temi_location_bridge.infra.mqtt.message_serializer import (
    parse_position_report,
)
from temi_location_bridge.usecase.ports.position_source import PositionSource

logger = logging.getLogger(__name__)


class ReplayPositionSource(PositionSource):
    """PositionSource의 파일 재생 구현체.

    Args:
        path: YAML 기록 파일 경로.
        interval_sec: 업데이트 간격 (초).
        loop: True이면 끝에서 처음으로 돌아가 반복한다.
    """

    def __init__(
        self, path: Path | str, interval_sec: float = 1.0, loop: bool = False
    ) -> None:
        self._path = Path(path)
        self._interval = interval_sec
        self._loop = loop
        self._stop = threading.Event()
        self._entries = self._read()

    def __len__(self) -> int:
        return len(self._entries)

    def reports(self) -> Iterator[PositionReport]:
        first = True
        while True:
            for index, entry in enumerate(self._entries):
                if not first and self._stop.wait(self._interval):
                    return
                if self._stop.is_set():
                    return
                first = False
                try:
                    report = parse_position_report(entry)
                except MalformedCommandError as e:
                    logger.warning('Replay entry %d skipped: %s', index, e)
                    continue
                yield report
            if not self._loop or not self._entries:
                return

    def close(self) -> None:
        self._stop.set()

    def _read(self) -> list[dict[str, Any]]:
        with open(self._path, encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f'Replay file must contain a list: {self._path}')

        logger.info('Loaded %d replay entries from %s', len(data), self._path)
        return data
