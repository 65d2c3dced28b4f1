"""Shared test fixtures for capacity-ratio."""

import logging

import pytest
import structlog

from capacity_ratio.priorities import default_priority
from capacity_ratio.types import NodeInfo, Resource

_ENV_VARS = (
    "CAPACITY_RATIO_MAX_PRIORITY",
    "CAPACITY_RATIO_SCORING_FUNCTION_SHAPE",
    "CAPACITY_RATIO_SHAPE_DOMAIN",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Make sure configuration only comes from the test itself."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo logging setup done by CLI invocations."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def priority():
    """Return the default least-requested priority."""
    return default_priority()


@pytest.fixture
def idle_nodes():
    """Two idle nodes of different CPU size."""
    return [
        NodeInfo(name="node1", allocatable=Resource(milli_cpu=4000, memory=10000)),
        NodeInfo(name="node2", allocatable=Resource(milli_cpu=6000, memory=10000)),
    ]


@pytest.fixture
def busy_nodes():
    """The same two nodes, each already running pods using 3000m CPU and 5000 memory."""
    used = Resource(milli_cpu=3000, memory=5000)
    return [
        NodeInfo(name="node1", allocatable=Resource(milli_cpu=4000, memory=10000), requested=used),
        NodeInfo(name="node2", allocatable=Resource(milli_cpu=6000, memory=10000), requested=used),
    ]
