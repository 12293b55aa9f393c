"""YAML 파일 기반 설정 로더 구현체."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from temi_location_bridge.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    ControllerConfig,
    MqttConfig,
    RelayConfig,
    TopicConfig,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = (
    Path(__file__).resolve().parent.parent.parent
    / "config"
    / "default_params.yaml"
)


class YamlConfigLoader(ConfigPort):
    """ConfigPort의 YAML 파일 구현체.

    YAML 파일에서 설정을 읽어 AppConfig로 변환한다.
    파일이 없거나 형식이 잘못되었으면 기본값을 사용한다.

    Args:
        config_path: YAML 설정 파일 경로. None이면 기본 경로 사용.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    def load(self) -> AppConfig:
        """YAML 파일에서 설정을 로드한다."""
        raw = self._read_yaml()

        mqtt_data = self._section(raw, "mqtt")
        topic_data = self._section(raw, "topics")
        relay_data = self._section(raw, "relay")
        controller_data = self._section(raw, "controller")

        config = AppConfig(
            mqtt=MqttConfig(
                broker_host=str(mqtt_data.get("broker_host", "localhost")),
                broker_port=int(mqtt_data.get("broker_port", 1883)),
                keepalive_sec=int(mqtt_data.get("keepalive_sec", 20)),
                reconnect_max_delay_sec=int(
                    mqtt_data.get("reconnect_max_delay_sec", 60)
                ),
                username=str(mqtt_data.get("username") or ""),
                password=str(mqtt_data.get("password") or ""),
                client_id=str(mqtt_data.get("client_id") or ""),
            ),
            topics=TopicConfig(
                command=topic_data.get("command", "temi/command"),
                status=topic_data.get("status", "temi/status"),
                locations=topic_data.get("locations", "temi/location"),
                qos=int(topic_data.get("qos", 1)),
            ),
            relay=RelayConfig(
                use_survey_mapping=bool(
                    relay_data.get("use_survey_mapping", True)
                ),
                default_yaw=float(relay_data.get("default_yaw", 0.0)),
                calibration_path=str(
                    relay_data.get("calibration_path", "calibration.yaml")
                ),
            ),
            controller=ControllerConfig(
                min_publish_interval_sec=float(
                    controller_data.get("min_publish_interval_sec", 10.0)
                ),
                replay_path=str(controller_data.get("replay_path") or ""),
                replay_interval_sec=float(
                    controller_data.get("replay_interval_sec", 1.0)
                ),
            ),
        )

        logger.info("Config loaded from %s", self._path)
        return config

    def _read_yaml(self) -> dict[str, Any]:
        """YAML 파일을 dict로 읽는다."""
        if not self._path.exists():
            logger.warning(
                "Config file not found: %s, using defaults", self._path
            )
            return {}

        with open(self._path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.warning("Invalid YAML (%s), using defaults", e)
                return {}

        if not isinstance(data, dict):
            logger.warning("Invalid YAML format, using defaults")
            return {}

        return data

    @staticmethod
    def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
        """최상위 섹션을 dict로 반환한다. 없거나 잘못되면 빈 dict."""
        data = raw.get(name)
        if isinstance(data, dict):
            return data
        if data is not None:
            logger.warning("Config section '%s' is not a mapping, ignored", name)
        return {}
