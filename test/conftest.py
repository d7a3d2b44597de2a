import logging

import pytest


class FakeMarkerServer:
    """Records what the store and feedback sink ask of the marker server."""

    def __init__(self):
        self.markers = {}
        self.callbacks = {}
        self.apply_count = 0

    def insert(self, marker, *, feedback_callback=None):
        self.markers[marker['name']] = marker
        self.callbacks[marker['name']] = feedback_callback

    def applyChanges(self):
        self.apply_count += 1


def fake_make_marker(name, pose):
    return {'name': name, 'pose': pose}


@pytest.fixture
def server():
    return FakeMarkerServer()


@pytest.fixture
def logger(caplog):
    caplog.set_level(logging.DEBUG, logger='waypoint_recorder.test')
    return logging.getLogger('waypoint_recorder.test')


@pytest.fixture
def make_marker():
    return fake_make_marker
