"""StatusPublisher 유닛 테스트."""

import json
from unittest.mock import MagicMock

import pytest

from temi_location_bridge.domain.enums import ReposeStatus, StatusCode
from temi_location_bridge.domain.events.robot_events import (
    ReposeStatusChangedEvent,
    RobotReadyEvent,
)
from temi_location_bridge.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)
from temi_location_bridge.usecase.publish_status import StatusPublisher


@pytest.fixture
def publisher(mock_bus, topics, fixed_time):
    return StatusPublisher(mock_bus, topics, clock=lambda: fixed_time)


def _published(bus):
    topic, payload = bus.publish.call_args[0][:2]
    return topic, json.loads(payload)


class TestPublish:
    def test_publishes_to_status_topic(self, publisher, mock_bus, fixed_time):
        envelope = publisher.publish(StatusCode.STOPPED, 'Movement stopped')

        topic, data = _published(mock_bus)
        assert topic == 'temi/status'
        assert data == {
            'status': 'stopped',
            'detail': 'Movement stopped',
            'timestamp': int(fixed_time.timestamp() * 1000),
        }
        assert mock_bus.publish.call_args[1]['qos'] == 1
        assert envelope.status == 'stopped'

    def test_dropped_when_disconnected(self, publisher, mock_bus):
        mock_bus.is_connected = False

        envelope = publisher.publish(StatusCode.READY, 'Robot is ready')

        mock_bus.publish.assert_not_called()
        assert envelope.detail == 'Robot is ready'

    def test_publish_locations(self, publisher, mock_bus):
        publisher.publish_locations(['a', 'b'])

        topic, data = _published(mock_bus)
        assert topic == 'temi/location'
        assert data == {'type': 'locations', 'locations': ['a', 'b']}

    def test_locations_dropped_when_disconnected(self, publisher, mock_bus):
        mock_bus.is_connected = False
        publisher.publish_locations(['a'])
        mock_bus.publish.assert_not_called()


class TestRobotEvents:
    @pytest.fixture
    def events(self, publisher):
        events = InMemoryEventPublisher()
        publisher.attach(events)
        return events

    def test_ready_forwarded(self, events, mock_bus):
        events.publish(RobotReadyEvent(is_ready=True))

        _, data = _published(mock_bus)
        assert data['status'] == 'ready'
        assert data['detail'] == 'Robot is ready'

    def test_not_ready_ignored(self, events, mock_bus):
        events.publish(RobotReadyEvent(is_ready=False))
        mock_bus.publish.assert_not_called()

    def test_repose_status_forwarded(self, events, mock_bus):
        events.publish(ReposeStatusChangedEvent(
            status=ReposeStatus.REPOSING_COMPLETE, description='done',
        ))

        _, data = _published(mock_bus)
        assert data['status'] == 'repose_4'
        assert data['detail'] == 'Repose Complete: done'

    def test_unknown_repose_code(self, events, mock_bus):
        events.publish(ReposeStatusChangedEvent(status=42, description='?'))

        _, data = _published(mock_bus)
        assert data['status'] == 'repose_42'
        assert data['detail'] == 'Unknown (42): ?'

    def test_attach_subscribes_both_events(self, publisher):
        events = MagicMock()
        publisher.attach(events)

        subscribed = {call.args[0] for call in events.subscribe.call_args_list}
        assert subscribed == {RobotReadyEvent, ReposeStatusChangedEvent}

    def test_detach_stops_forwarding(self, publisher, events, mock_bus):
        publisher.detach(events)

        events.publish(RobotReadyEvent(is_ready=True))
        events.publish(ReposeStatusChangedEvent(status=1, description='x'))

        mock_bus.publish.assert_not_called()
