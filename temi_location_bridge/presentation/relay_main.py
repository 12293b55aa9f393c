r"""temi Location Bridge relay 진입점 (로봇 측).

Command 토픽을 구독하여 측위 업데이트를 로봇 맵 자세로 변환하고
repose를 요청하며, 결과를 Status 토픽으로 보고한다.

실행: location_relay -c config.yaml
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys
import threading

from temi_location_bridge.domain.events import DomainEvent
from temi_location_bridge.domain.exceptions import MqttConnectionError
from temi_location_bridge.infra.config import YamlConfigLoader
from temi_location_bridge.infra.event import InMemoryEventPublisher
from temi_location_bridge.infra.mqtt import MqttClient
from temi_location_bridge.infra.repository import (
    KeyValueCalibrationStore,
    YamlKeyValueStore,
)
from temi_location_bridge.infra.robot import SimulatedRobotControl
from temi_location_bridge.usecase import (
    AnchorCapture,
    CommandDispatcher,
    CoordinateTransformEngine,
    LocationResolver,
    StatusPublisher,
)
from temi_location_bridge.usecase.ports.config_port import AppConfig
from temi_location_bridge.usecase.ports.robot_control import RobotControl

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT_SEC = 10.0


class RelayApp:
    """Relay 구성 요소 조립 및 생명주기 관리.

    Args:
        config: 애플리케이션 설정.
        robot: 로봇 제어 구현체. None이면 시뮬레이션 로봇을 사용한다.
    """

    def __init__(
        self, config: AppConfig, robot: RobotControl | None = None
    ) -> None:
        self._config = config
        self._connected = threading.Event()

        # -- 1. 인프라 어댑터 --
        self._event_publisher = InMemoryEventPublisher()
        self._event_publisher.subscribe(DomainEvent, self._log_event)
        self._bus = MqttClient(
            config.mqtt,
            client_id=config.mqtt.client_id or 'temi-relay',
            event_publisher=self._event_publisher,
        )
        self._bus.add_connection_listener(self._on_connection_changed)
        self._robot = robot or SimulatedRobotControl(self._event_publisher)

        calibration_store = KeyValueCalibrationStore(
            YamlKeyValueStore(Path(config.relay.calibration_path))
        )

        # -- 2. 유스케이스 --
        self._engine = CoordinateTransformEngine(calibration_store)
        self._resolver = LocationResolver()
        self._status = StatusPublisher(self._bus, config.topics)
        self._status.attach(self._event_publisher)
        self._anchors = AnchorCapture(
            self._engine, self._resolver, self._robot
        )
        self._dispatcher = CommandDispatcher(
            engine=self._engine,
            resolver=self._resolver,
            robot=self._robot,
            status=self._status,
            anchors=self._anchors,
            config=config.relay,
        )

        # -- 3. 구독 등록 (연결 시 적용) --
        self._bus.subscribe(
            config.topics.command,
            self._dispatcher.handle_message,
            qos=config.topics.qos,
        )

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def start(self) -> None:
        """브로커에 연결하고 로봇을 시작한다."""
        logger.info(
            'Relay starting: broker=%s:%d, command=%s, mapping=%s',
            self._config.mqtt.broker_host,
            self._config.mqtt.broker_port,
            self._config.topics.command,
            self._config.relay.use_survey_mapping,
        )
        logger.info('Calibration: %s', self._engine.summary())
        self._bus.connect()

        if not self._connected.wait(_CONNECT_TIMEOUT_SEC):
            logger.warning(
                'Broker not connected after %.0fs, continuing to retry',
                _CONNECT_TIMEOUT_SEC,
            )
        if isinstance(self._robot, SimulatedRobotControl):
            self._robot.start()

    def stop(self) -> None:
        """로봇 이벤트 구독을 해제하고 브로커 연결을 끊는다."""
        logger.info('Relay stopping')
        self._status.detach(self._event_publisher)
        if isinstance(self._robot, SimulatedRobotControl):
            self._robot.shutdown()
        self._bus.disconnect()

    @staticmethod
    def _log_event(event: DomainEvent) -> None:
        logger.info('Event: %s', event)

    def _on_connection_changed(self, connected: bool) -> None:
        if connected:
            self._connected.set()
        else:
            self._connected.clear()


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='location_relay',
        description='temi Location Bridge relay (robot side)',
    )
    parser.add_argument(
        '-c', '--config_file', type=Path, default=None,
        help='Path to the YAML config file',
    )
    parser.add_argument(
        '--calibration', type=str, default=None,
        help='Override the calibration store path',
    )
    parser.add_argument(
        '--no-mapping', action='store_true',
        help='Use raw latitude/longitude as pose (testing only)',
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Relay를 시작한다.

    Args:
        argv: 커맨드 라인 인자 (프로그램 이름 제외).
    """
    if argv is None:
        argv = sys.argv[1:]

    logging.basicConfig(
        level=logging.INFO,
        format='[%(name)s] %(levelname)s: %(message)s',
    )

    args = _parse_args(argv)
    config = YamlConfigLoader(args.config_file).load()
    config = _apply_overrides(config, args)

    app = RelayApp(config)
    stop_event = threading.Event()
    try:
        app.start()
        stop_event.wait()
    except MqttConnectionError as e:
        logger.error('%s', e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info('Keyboard interrupt received')
    finally:
        app.stop()


def _apply_overrides(
    config: AppConfig, args: argparse.Namespace
) -> AppConfig:
    relay = config.relay
    if args.calibration:
        relay = replace(relay, calibration_path=args.calibration)
    if args.no_mapping:
        relay = replace(relay, use_survey_mapping=False)
    return replace(config, relay=relay)


if __name__ == '__main__':
    main()
