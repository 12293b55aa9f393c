"""PositionSource 구현체 유닛 테스트."""

import threading

import pytest
import yaml

from temi_location_bridge.domain.entities.location import PositionReport
from temi_location_bridge.infra.position import (
    QueuePositionSource,
    ReplayPositionSource,
)


class TestQueuePositionSource:
    def test_yields_pushed_reports_until_closed(self):
        source = QueuePositionSource()
        first = PositionReport(declared_source='LocationEngine')
        second = PositionReport(declared_source='GPS')
        source.push(first)
        source.push(second)
        source.close()

        assert list(source.reports()) == [first, second]
        assert list(source.reports()) == []

    def test_consumer_thread(self):
        source = QueuePositionSource()
        received = []

        def consume():
            for report in source.reports():
                received.append(report)
                if len(received) == 2:
                    break

        consumer = threading.Thread(target=consume)
        consumer.start()
        source.push(PositionReport(declared_source='LocationEngine'))
        source.push(PositionReport(declared_source='GPS'))
        consumer.join(timeout=2.0)

        assert [r.declared_source for r in received] == [
            'LocationEngine', 'GPS',
        ]

    def test_close_unblocks_consumer(self):
        source = QueuePositionSource()
        done = threading.Event()

        def consume():
            for _ in source.reports():
                pass
            done.set()

        threading.Thread(target=consume).start()
        source.close()

        assert done.wait(timeout=2.0)

    def test_full_queue_drops_oldest(self):
        source = QueuePositionSource(maxsize=2)
        for name in ('a', 'b', 'c'):
            source.push(PositionReport(declared_source=name))

        reports = source.reports()
        assert next(reports).declared_source == 'b'
        assert next(reports).declared_source == 'c'

    def test_push_after_close_ignored(self):
        source = QueuePositionSource()
        source.close()
        source.push(PositionReport(declared_source='GPS'))
        assert source.closed

    def test_push_after_close_on_full_queue_keeps_end_marker(self):
        source = QueuePositionSource(maxsize=2)
        source.push(PositionReport(declared_source='a'))
        source.push(PositionReport(declared_source='b'))
        source.close()

        for _ in range(5):
            source.push(PositionReport(declared_source='late'))

        assert [r.declared_source for r in source.reports()] == ['b']

    def test_close_while_pushing_ends_iteration(self):
        source = QueuePositionSource(maxsize=1)
        stop = threading.Event()

        def produce():
            while not stop.is_set():
                source.push(PositionReport(declared_source='GPS'))

        producers = [threading.Thread(target=produce) for _ in range(4)]
        for producer in producers:
            producer.start()
        source.close()
        stop.set()
        for producer in producers:
            producer.join(timeout=2.0)

        done = threading.Event()

        def consume():
            for _ in source.reports():
                pass
            done.set()

        threading.Thread(target=consume, daemon=True).start()
        assert done.wait(timeout=2.0)


@pytest.fixture
def track(tmp_path):
    entries = [
        {
            'locationSource': 'LocationEngine',
            'direction': 10.0,
            'location': {'latitude': 22.3, 'hkE': 836000.0, 'hkN': 818000.0},
        },
        {'locationSource': 'GPS', 'location': 'broken'},
        {
            'locationSource': 'GPS',
            'gpsLocation': {'latitude': 22.4, 'longitude': 114.2},
        },
    ]
    path = tmp_path / 'track.yaml'
    with open(path, 'w') as f:
        yaml.dump(entries, f)
    return path


class TestReplayPositionSource:
    def test_replays_valid_entries(self, track):
        source = ReplayPositionSource(track, interval_sec=0.0)

        reports = list(source.reports())

        assert len(source) == 3
        assert [r.declared_source for r in reports] == [
            'LocationEngine', 'GPS',
        ]
        assert reports[0].indoor.survey_east == 836000.0
        assert reports[1].gps.longitude == 114.2

    def test_restartable(self, track):
        source = ReplayPositionSource(track, interval_sec=0.0)
        assert len(list(source.reports())) == 2
        assert len(list(source.reports())) == 2

    def test_loop_stops_on_close(self, track):
        source = ReplayPositionSource(track, interval_sec=0.0, loop=True)

        count = 0
        for _ in source.reports():
            count += 1
            if count == 5:
                source.close()

        assert count == 5

    def test_not_a_list(self, tmp_path):
        path = tmp_path / 'track.yaml'
        path.write_text('location: {}\n')

        with pytest.raises(ValueError):
            ReplayPositionSource(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'track.yaml'
        path.write_text('')
        assert list(ReplayPositionSource(path).reports()) == []
