"""
capacity-ratio - Requested-to-capacity ratio node scoring.

Scores candidate nodes for a pending workload by running the CPU and memory
utilization of each node through a configurable broken linear function.
"""

from .config import CapacityRatioConfig, ScoringSettings, build_priority, build_shape
from .errors import ConfigurationError, InvalidShapeError, ScoringError, ShapeParseError
from .interpolation import BrokenLinearFunction
from .parser import parse_points, parse_shape
from .priorities import (
    NodeScoreAggregator,
    RequestedToCapacityRatioPriority,
    ResourceScorer,
    default_priority,
)
from .shape import Domain, Shape, default_shape, most_requested_shape, new_shape
from .types import HostPriority, NodeInfo, Resource, ResourcePair

__all__ = [
    "CapacityRatioConfig",
    "ScoringSettings",
    "build_priority",
    "build_shape",
    "Domain",
    "Shape",
    "new_shape",
    "default_shape",
    "most_requested_shape",
    "parse_shape",
    "parse_points",
    "BrokenLinearFunction",
    "ResourceScorer",
    "NodeScoreAggregator",
    "RequestedToCapacityRatioPriority",
    "default_priority",
    "Resource",
    "ResourcePair",
    "NodeInfo",
    "HostPriority",
    "ScoringError",
    "InvalidShapeError",
    "ConfigurationError",
    "ShapeParseError",
]
