"""Settings shared by the reduction driver, cache and facade."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.errors import ConfigurationError
from .core.types import StallPolicy


@dataclass
class ReductionConfig:
    """Tuning knobs for vertex reduction.

    Attributes:
        cache_threshold: Intermediate states are memoized once the polygon has
            at most this many vertices.
        cache_size: Capacity of the process-wide cache. Calls that use the
            shared cache resize it to this value. An explicitly passed cache
            keeps its own capacity. 0 disables memoization for any cache.
        stall_policy: Behaviour when every remaining vertex has infinite cost.
        repair_margin: Buffer distance used by the ring repair step.
        pre_simplify_epsilon: If set, thin the input with Ramer-Douglas-Peucker
            at this tolerance before the greedy loop runs.
        parallel_tolerance: Lines whose angle has a sine at or below this are
            treated as parallel during convex removal. The test is relative
            to the edge lengths, so it does not depend on coordinate scale.
    """

    cache_threshold: int = 70
    cache_size: int = 256
    stall_policy: StallPolicy = StallPolicy.RAISE
    repair_margin: float = 0.0
    pre_simplify_epsilon: Optional[float] = None
    parallel_tolerance: float = 1e-12

    def validate(self) -> "ReductionConfig":
        if self.cache_threshold < 0:
            raise ConfigurationError(
                f"cache_threshold must be non-negative, got {self.cache_threshold}"
            )
        if self.cache_size < 0:
            raise ConfigurationError(
                f"cache_size must be non-negative, got {self.cache_size}"
            )
        if not isinstance(self.stall_policy, StallPolicy):
            raise ConfigurationError(
                f"stall_policy must be a StallPolicy, got {self.stall_policy!r}"
            )
        if self.repair_margin < 0:
            raise ConfigurationError(
                f"repair_margin must be non-negative, got {self.repair_margin}"
            )
        if self.pre_simplify_epsilon is not None and self.pre_simplify_epsilon <= 0:
            raise ConfigurationError(
                f"pre_simplify_epsilon must be positive, got {self.pre_simplify_epsilon}"
            )
        if self.parallel_tolerance < 0:
            raise ConfigurationError(
                f"parallel_tolerance must be non-negative, got {self.parallel_tolerance}"
            )
        return self


DEFAULT_CONFIG = ReductionConfig()


def resolve_config(config: Optional[ReductionConfig]) -> ReductionConfig:
    """Return a validated config, falling back to the defaults."""
    if config is None:
        return DEFAULT_CONFIG
    return config.validate()


__all__ = [
    "ReductionConfig",
    "DEFAULT_CONFIG",
    "resolve_config",
]
