"""Pytest configuration"""

import itertools

import pytest

from termdeck.core.ids import IdGenerator
from termdeck.lifecycle import TabCoordinator
from termdeck.sessions import InMemorySessionBackend, SessionDispatcher, SessionObservers
from termdeck.telemetry import metrics
from termdeck.workspace import WorkspaceController


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics around every test"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def ids():
    """Deterministic id generator: fixed clock, no random suffix"""
    ticks = itertools.count(1_700_000_000)
    return IdGenerator(clock=lambda: float(next(ticks)), suffix_length=0)


@pytest.fixture
def backend():
    return InMemorySessionBackend()


@pytest.fixture
def observers():
    return SessionObservers()


@pytest.fixture
def dispatcher(backend, observers):
    return SessionDispatcher(backend, observers)


@pytest.fixture
def workspace(ids):
    return WorkspaceController(ids)


@pytest.fixture
def coordinator(workspace, dispatcher, ids):
    return TabCoordinator(workspace, dispatcher, ids)
