"""
Resource Allocation Priorities

Scores candidate nodes for a pending workload from the ratio of requested to
allocatable CPU and memory. Each dimension is mapped to a utilization
position, run through the configured broken linear function, and the
per-dimension results are averaged into one integer node score.

Everything here is immutable and free of I/O, so a single priority object
can score nodes from many worker threads at once.
"""

import math
from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Iterable, List, Sequence

from .interpolation import BrokenLinearFunction
from .logging import get_logger
from .shape import DEFAULT_MAX_PRIORITY, Shape, default_shape
from .types import Amount, HostPriority, NodeInfo, Resource, ResourcePair

logger = get_logger(__name__)

FULL_UTILIZATION = Fraction(1)


class ResourceScorer:
    """Scores one resource dimension against a broken linear function."""

    __slots__ = ("function",)

    def __init__(self, function: BrokenLinearFunction):
        self.function = function

    @staticmethod
    def utilization_position(requested: Amount, capacity: Amount) -> Fraction:
        """Normalized position of requested/capacity on the curve's x axis.

        Zero capacity and over-commitment both count as fully saturated.
        The position does not depend on preference polarity; the curve does.
        """
        pair = ResourcePair(requested, capacity)
        if pair.saturated:
            return FULL_UTILIZATION
        return Fraction(pair.requested) / Fraction(pair.capacity)

    def score(self, requested: Amount, capacity: Amount) -> Fraction:
        """Normalized score in [0, 1] for one dimension."""
        return self.function.evaluate_normalized(self.utilization_position(requested, capacity))


class NodeScoreAggregator:
    """Averages per-dimension scores into a node score in [0, max_priority]."""

    __slots__ = ("max_priority",)

    def __init__(self, max_priority: int = DEFAULT_MAX_PRIORITY):
        if max_priority < 1:
            raise ValueError("max_priority must be at least 1")
        self.max_priority = max_priority

    def combine(self, scores: Sequence[Fraction]) -> int:
        if not scores:
            raise ValueError("at least one resource score is required")

        mean = sum(scores, Fraction(0)) / len(scores)
        # Round half up, once, at the output boundary.
        value = math.floor(mean * self.max_priority + Fraction(1, 2))
        return min(max(value, 0), self.max_priority)


class ResourceAllocationPriority(ABC):
    """
    Abstract base class for resource based node priorities.

    Subclasses turn the effective requested and allocatable resources of a
    node into a score; this class maps that over candidate nodes.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def priority_map(
        self,
        requested: Resource,
        allocatable: Resource,
        include_volumes: bool = False,
        requested_volumes: int = 0,
        allocatable_volumes: int = 0,
    ) -> int:
        """
        Score one node.

        Args:
            requested: Resources requested on the node, including the
                pending workload
            allocatable: Allocatable resources of the node
            include_volumes: Whether volume counts should be considered
            requested_volumes: Volumes requested on the node
            allocatable_volumes: Volumes the node can attach

        Returns:
            Node score (higher = more preferred)
        """
        pass

    def score_node(
        self, pod_request: Resource, node: NodeInfo, include_volumes: bool = False
    ) -> HostPriority:
        """Score a node for a pod, counting pods already placed on it."""
        score = self.priority_map(
            pod_request + node.requested,
            node.allocatable,
            include_volumes,
            node.used_volumes,
            node.allowed_volumes,
        )
        return HostPriority(host=node.name, score=score)

    def score_nodes(
        self, pod_request: Resource, nodes: Iterable[NodeInfo], include_volumes: bool = False
    ) -> List[HostPriority]:
        """Score every candidate node; results keep the input order."""
        result = [self.score_node(pod_request, node, include_volumes) for node in nodes]
        logger.debug(
            "Scored nodes",
            priority=self.name,
            nodes=len(result),
            milli_cpu=pod_request.milli_cpu,
            memory=pod_request.memory,
        )
        return result


class RequestedToCapacityRatioPriority(ResourceAllocationPriority):
    """
    Requested-to-capacity ratio priority.

    CPU and memory are each scored by the configured shape and weighted
    equally. The volume arguments of priority_map() are part of the scheduler
    call signature and are accepted, but they do not currently affect the
    score.
    """

    def __init__(self, shape: Shape, max_priority: int = DEFAULT_MAX_PRIORITY):
        super().__init__("RequestedToCapacityRatioResourceAllocationPriority")
        self.shape = shape
        self.scorer = ResourceScorer(BrokenLinearFunction(shape))
        self.aggregator = NodeScoreAggregator(max_priority)

    @property
    def max_priority(self) -> int:
        return self.aggregator.max_priority

    def priority_map(
        self,
        requested: Resource,
        allocatable: Resource,
        include_volumes: bool = False,
        requested_volumes: int = 0,
        allocatable_volumes: int = 0,
    ) -> int:
        cpu_score = self.scorer.score(requested.milli_cpu, allocatable.milli_cpu)
        memory_score = self.scorer.score(requested.memory, allocatable.memory)
        return self.aggregator.combine([cpu_score, memory_score])

    def with_shape(self, shape: Shape) -> "RequestedToCapacityRatioPriority":
        """Return a new priority using another shape; this one is left untouched."""
        return RequestedToCapacityRatioPriority(shape, max_priority=self.max_priority)

    def __repr__(self) -> str:
        return f"RequestedToCapacityRatioPriority({self.shape}, max_priority={self.max_priority})"


def default_priority(max_priority: int = DEFAULT_MAX_PRIORITY) -> RequestedToCapacityRatioPriority:
    """Priority using the default least-utilized-preferred curve."""
    return RequestedToCapacityRatioPriority(default_shape(max_priority), max_priority=max_priority)
