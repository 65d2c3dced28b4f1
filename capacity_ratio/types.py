"""
Core Type Definitions for capacity-ratio

Resource amounts and per-node snapshots consumed by the scoring entry point.
All of them are immutable; they are built fresh for every scoring call from
state owned by the external node/pod cache.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Union

Amount = Union[int, float, Decimal, Fraction]


@dataclass(frozen=True)
class Resource:
    """CPU and memory amounts for a pod request or a node."""

    milli_cpu: int = 0  # CPU in millicores
    memory: int = 0  # Memory in bytes

    def __post_init__(self):
        """Validate resource amounts."""
        if self.milli_cpu < 0:
            raise ValueError("milli_cpu cannot be negative")

        if self.memory < 0:
            raise ValueError("memory cannot be negative")

    def __add__(self, other: "Resource") -> "Resource":
        if not isinstance(other, Resource):
            return NotImplemented
        return Resource(
            milli_cpu=self.milli_cpu + other.milli_cpu,
            memory=self.memory + other.memory,
        )

    def to_dict(self) -> Dict[str, int]:
        return {"milli_cpu": self.milli_cpu, "memory": self.memory}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        return cls(milli_cpu=int(data.get("milli_cpu", 0)), memory=int(data.get("memory", 0)))


@dataclass(frozen=True)
class ResourcePair:
    """Requested amount and capacity of one resource dimension."""

    requested: Amount
    capacity: Amount

    def __post_init__(self):
        for name in ("requested", "capacity"):
            value = getattr(self, name)
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
            if value < 0:
                raise ValueError(f"{name} cannot be negative")

    @property
    def saturated(self) -> bool:
        """True when the dimension has no room left for the request."""
        return self.capacity == 0 or self.requested > self.capacity


@dataclass(frozen=True)
class NodeInfo:
    """Read-only view of one candidate node supplied by the cluster cache."""

    name: str
    allocatable: Resource
    requested: Resource = field(default_factory=Resource)  # Sum of pods already placed
    allowed_volumes: int = 0
    used_volumes: int = 0

    def __post_init__(self):
        if not self.name:
            raise ValueError("node name cannot be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeInfo":
        """Build a NodeInfo from its JSON representation."""
        return cls(
            name=data["name"],
            allocatable=Resource.from_dict(data.get("allocatable", {})),
            requested=Resource.from_dict(data.get("requested", {})),
            allowed_volumes=int(data.get("allowed_volumes", 0)),
            used_volumes=int(data.get("used_volumes", 0)),
        )


@dataclass(frozen=True)
class HostPriority:
    """Score of a single node for the pending workload."""

    host: str
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"host": self.host, "score": self.score}
