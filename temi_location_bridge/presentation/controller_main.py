r"""temi Location Bridge controller 진입점 (측위 측).

PositionSource의 측위 업데이트를 update_location 명령으로 발행하고,
relay가 보고하는 Status/Locations 토픽을 로그로 출력한다.

실행:
    location_controller -c config.yaml --replay track.yaml
    location_controller --manual 22.30 114.17 836000 818000
    location_controller --send goto --field location=entrance
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
import threading
import time

from temi_location_bridge.domain.exceptions import (
    MalformedCommandError,
    MqttConnectionError,
)
from temi_location_bridge.infra.config import YamlConfigLoader
from temi_location_bridge.infra.mqtt import MqttClient
from temi_location_bridge.infra.mqtt.message_serializer import (
    deserialize_locations,
    deserialize_status,
)
from temi_location_bridge.infra.position import ReplayPositionSource
from temi_location_bridge.usecase import LocationExporter, LocationResolver
from temi_location_bridge.usecase.ports.config_port import AppConfig
from temi_location_bridge.usecase.ports.position_source import PositionSource

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT_SEC = 10.0
# 단발성 명령 발행 후 응답을 기다리는 시간
_REPLY_WAIT_SEC = 2.0


class ControllerApp:
    """Controller 구성 요소 조립 및 생명주기 관리.

    Args:
        config: 애플리케이션 설정.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._connected = threading.Event()

        self._bus = MqttClient(
            config.mqtt, client_id=config.mqtt.client_id or 'temi-controller'
        )
        self._bus.add_connection_listener(self._on_connection_changed)
        self._resolver = LocationResolver()
        self._exporter = LocationExporter(
            self._bus,
            config.topics,
            self._resolver,
            min_interval_sec=config.controller.min_publish_interval_sec,
        )

        self._bus.subscribe(
            config.topics.status, self._on_status, qos=config.topics.qos
        )
        self._bus.subscribe(
            config.topics.locations, self._on_locations, qos=config.topics.qos
        )

    @property
    def exporter(self) -> LocationExporter:
        return self._exporter

    def start(self) -> bool:
        """브로커에 연결한다.

        Returns:
            제한 시간 안에 연결되었는지 여부.
        """
        self._bus.connect()
        if self._connected.wait(_CONNECT_TIMEOUT_SEC):
            return True
        logger.warning(
            'Broker not connected after %.0fs', _CONNECT_TIMEOUT_SEC
        )
        return False

    def stop(self) -> None:
        self._bus.disconnect()

    def run(self, source: PositionSource) -> int:
        """PositionSource를 끝까지 발행한다."""
        try:
            return self._exporter.run(source)
        finally:
            source.close()

    def _on_connection_changed(self, connected: bool) -> None:
        if connected:
            self._connected.set()
        else:
            self._connected.clear()

    def _on_status(self, topic: str, payload: bytes) -> None:
        try:
            envelope = deserialize_status(payload)
        except MalformedCommandError as e:
            logger.warning('Invalid status message: %s', e)
            return
        logger.info('Robot status [%s]: %s', envelope.status, envelope.detail)

    def _on_locations(self, topic: str, payload: bytes) -> None:
        try:
            envelope = deserialize_locations(payload)
        except MalformedCommandError as e:
            logger.warning('Invalid locations message: %s', e)
            return
        logger.info('Robot locations: %s', ', '.join(envelope.locations))


def _parse_field(text: str) -> tuple[str, str]:
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise argparse.ArgumentTypeError(f'Expected key=value, got {text!r}')
    return key, value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='location_controller',
        description='temi Location Bridge controller (positioning side)',
    )
    parser.add_argument(
        '-c', '--config_file', type=Path, default=None,
        help='Path to the YAML config file',
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--replay', type=Path, default=None,
        help='Replay a recorded YAML track of location_data entries',
    )
    mode.add_argument(
        '--manual', type=float, nargs='+', metavar='VALUE',
        help='Send a manual location: LAT LON [EAST NORTH [FLOOR]]',
    )
    mode.add_argument(
        '--send', type=str, default=None, metavar='ACTION',
        help='Send an operator command (goto, speak, stop, get_locations, '
             'capture_anchor, calibrate, reset_calibration)',
    )
    parser.add_argument(
        '--field', type=_parse_field, action='append', default=[],
        metavar='KEY=VALUE', help='Extra field for --send (repeatable)',
    )
    parser.add_argument(
        '--loop', action='store_true', help='Loop the replay track',
    )
    args = parser.parse_args(argv)

    if args.manual is not None and not 2 <= len(args.manual) <= 5:
        parser.error('--manual expects 2 to 5 values')
    return args


def _exit_if_not_sent(sent: bool) -> None:
    """발행에 실패하면 종료 코드 1로 끝내고, 성공하면 응답을 잠시 기다린다."""
    if not sent:
        logger.error('Command was not published')
        sys.exit(1)
    time.sleep(_REPLY_WAIT_SEC)


def main(argv: list[str] | None = None) -> None:
    """Controller를 시작한다.

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
    app = ControllerApp(config)

    try:
        if not app.start():
            logger.error('Could not connect to MQTT broker')
            sys.exit(1)

        if args.send:
            sent = app.exporter.send_command(args.send, **dict(args.field))
            _exit_if_not_sent(sent)
        elif args.manual is not None:
            values = list(args.manual)
            sent = app.exporter.publish_manual(
                latitude=values[0],
                longitude=values[1],
                survey_east=values[2] if len(values) > 2 else 0.0,
                survey_north=values[3] if len(values) > 3 else 0.0,
                floor_level=int(values[4]) if len(values) > 4 else 0,
            )
            _exit_if_not_sent(sent)
        else:
            replay_path = args.replay or config.controller.replay_path
            if replay_path:
                source = ReplayPositionSource(
                    replay_path,
                    interval_sec=config.controller.replay_interval_sec,
                    loop=args.loop,
                )
                app.run(source)
            else:
                logger.info('No position source, monitoring status only')
                threading.Event().wait()
    except MqttConnectionError as e:
        logger.error('%s', e)
        sys.exit(1)
    except (OSError, ValueError) as e:
        logger.error('%s', e)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info('Keyboard interrupt received')
    finally:
        app.stop()


if __name__ == '__main__':
    main()
