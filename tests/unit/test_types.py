"""Tests for resource and node types."""

import dataclasses

import pytest

from capacity_ratio.types import HostPriority, NodeInfo, Resource, ResourcePair


class TestResource:
    def test_defaults(self):
        assert Resource() == Resource(milli_cpu=0, memory=0)

    def test_addition(self):
        assert Resource(1000, 2000) + Resource(500, 1) == Resource(1500, 2001)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="milli_cpu cannot be negative"):
            Resource(milli_cpu=-1)
        with pytest.raises(ValueError, match="memory cannot be negative"):
            Resource(memory=-1)

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Resource().memory = 5

    def test_from_dict(self):
        assert Resource.from_dict({"milli_cpu": 4000}) == Resource(4000, 0)


class TestResourcePair:
    @pytest.mark.parametrize(
        "requested, capacity, saturated",
        [(0, 0, True), (5, 4, True), (4, 4, False), (0, 4, False)],
    )
    def test_saturated(self, requested, capacity, saturated):
        assert ResourcePair(requested, capacity).saturated is saturated

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="capacity cannot be negative"):
            ResourcePair(0, -1)


class TestNodeInfo:
    def test_from_dict(self):
        node = NodeInfo.from_dict(
            {
                "name": "node1",
                "allocatable": {"milli_cpu": 4000, "memory": 10000},
                "requested": {"milli_cpu": 3000, "memory": 5000},
            }
        )
        assert node.allocatable == Resource(4000, 10000)
        assert node.requested == Resource(3000, 5000)
        assert node.used_volumes == 0

    def test_name_required(self):
        with pytest.raises(ValueError, match="node name cannot be empty"):
            NodeInfo(name="", allocatable=Resource())


class TestHostPriority:
    def test_to_dict(self):
        assert HostPriority("node1", 7).to_dict() == {"host": "node1", "score": 7}
