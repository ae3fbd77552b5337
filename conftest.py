"""Shared pytest fixtures for the picker tests."""

import pytest


class FakeWatcher:
    """Outside-click capability that records subscriptions."""

    def __init__(self):
        self.callbacks = []
        self.released = 0

    def watch(self, callback):
        self.callbacks.append(callback)

        def release():
            self.callbacks.remove(callback)
            self.released += 1

        return release

    def click_outside(self):
        for cb in list(self.callbacks):
            cb()


@pytest.fixture
def watcher():
    return FakeWatcher()


@pytest.fixture
def events():
    return []
