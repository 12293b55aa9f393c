"""YAML 파일 기반 key/value 저장소 구현체."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import threading
from typing import Any

import yaml

from temi_location_bridge.usecase.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class YamlKeyValueStore(KeyValueStore):
    """KeyValueStore의 YAML 파일 구현체.

    생성 시 파일 내용을 메모리로 읽고, 변경할 때마다 파일 전체를 다시 쓴다.
    쓰기는 임시 파일에 기록한 뒤 교체하므로 중간에 중단되어도
    이전 내용 또는 새 내용 중 하나만 남는다.

    Args:
        path: 저장 파일 경로.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._data: dict[str, Any] = self._read()

    @property
    def path(self) -> Path:
        """저장 파일 경로."""
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._commit({**self._data, key: value})

    def update(self, values: dict[str, Any]) -> None:
        with self._lock:
            self._commit({**self._data, **values})

    def clear(self) -> None:
        with self._lock:
            self._commit({})

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}

        with open(self._path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.warning(
                    "Store file %s is not valid YAML (%s), starting empty",
                    self._path, e,
                )
                return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "Store file %s is not a mapping, starting empty", self._path
            )
            return {}
        return data

    def _commit(self, data: dict[str, Any]) -> None:
        """파일 쓰기가 성공한 뒤에만 메모리 내용을 교체한다."""
        self._write(data)
        self._data = data

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False)
        os.replace(tmp_path, self._path)
        logger.debug("Store written: %s (%d keys)", self._path, len(data))
