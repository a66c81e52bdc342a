"""
This module defines the growseq command features using a unified registry system.
This module serves as the single source of truth for all features.
"""

from typing import (
    Dict,
    Any,
    Callable,
    Optional,
    TypeVar,
    Generic,
)
from dataclasses import dataclass
import logging

from growseq.errors import GrowSeqError
from growseq.reservation import reserve
from growseq.sequence import GrowableSequence

logger = logging.getLogger("growseq.features")

T = TypeVar("T")


class OperationResult(Generic[T]):
    """Wrapper for operation results with success/error handling"""

    def __init__(
        self, success: bool, data: Optional[T] = None, error: Optional[str] = None
    ):
        self.success = success
        self.data = data
        self.error = error

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "OperationResult[T]":
        return cls(success=False, error=error)


@dataclass
class Feature:
    """A named command backed by a handler"""

    name: str
    description: str
    handler: Callable[..., OperationResult]


class FeatureRegistry:
    """Registry for all growseq features"""

    _features: Dict[str, Feature] = {}

    @classmethod
    def register(cls, feature: Feature) -> Feature:
        """Register a new feature"""
        cls._features[feature.name] = feature
        return feature

    @classmethod
    def get_feature(cls, name: str) -> Optional[Feature]:
        """Get a feature by name"""
        return cls._features.get(name)

    @classmethod
    def get_all_features(cls) -> Dict[str, Feature]:
        """Get all registered features"""
        return cls._features.copy()


# ----------------- Feature Handlers -----------------


def handle_version(**kwargs) -> OperationResult[Dict[str, str]]:
    """Handle version request"""
    from growseq.version import get_version

    return OperationResult[Dict[str, str]].ok({"version": get_version()})


def handle_profile(count: int, reserve_capacity: int = 0, **kwargs) -> OperationResult[Dict[str, Any]]:
    """Append ``count`` integers and report how storage grew"""
    if count < 0:
        return OperationResult[Dict[str, Any]].fail(f"count must be non-negative, got {count}")
    try:
        seq: GrowableSequence[int] = GrowableSequence(reserve(reserve_capacity), default_factory=int)
        capacities = [seq.capacity]
        for value in range(count):
            seq.push_back(value)
            if seq.capacity != capacities[-1]:
                capacities.append(seq.capacity)
    except GrowSeqError as e:
        logger.error("Profiling failed: %s", e)
        return OperationResult[Dict[str, Any]].fail(str(e))

    logger.debug("Capacity trajectory: %s", capacities)
    return OperationResult[Dict[str, Any]].ok(
        {
            "size": seq.size,
            "capacity": seq.capacity,
            "reallocations": seq.reallocations,
            "capacities": capacities,
        }
    )


# ----------------- Feature Registration -----------------

FeatureRegistry.register(
    Feature(
        name="version",
        description="Show the growseq version",
        handler=handle_version,
    )
)

FeatureRegistry.register(
    Feature(
        name="profile",
        description="Profile capacity growth while appending integers",
        handler=handle_profile,
    )
)
