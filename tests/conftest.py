import threading

import pytest

from traffic_monitor import MonitorConfig, TrafficMonitor

from tests.helpers import FIXED_TIME, LineFeed, SyncBuffer


@pytest.fixture
def out():
    return SyncBuffer()


@pytest.fixture
def make_monitor(out):
    def factory(**settings):
        return TrafficMonitor(MonitorConfig(**settings), out, clock=lambda: FIXED_TIME)
    return factory


@pytest.fixture
def running_monitor(out):
    """Start TrafficMonitor.run on a thread fed by a LineFeed"""
    started = []

    def start(**settings):
        feed = LineFeed()
        monitor = TrafficMonitor(MonitorConfig(**settings), out)
        thread = threading.Thread(target=monitor.run, args=(feed,), daemon=True)
        thread.start()
        started.append((feed, thread))
        return monitor, feed, thread

    yield start

    for feed, thread in started:
        feed.close()
        thread.join(timeout=5)
