"""Exception and warning types raised by polycap."""


class PolycapError(Exception):
    """Base class for all polycap errors."""


class ValidationError(PolycapError, ValueError):
    """Input ring or target vertex count is not acceptable.

    Raised before any geometric work is done, so no partial result exists.

    Examples:
        >>> from polycap import simplify_ring
        >>> simplify_ring([(0, 0), (1, 0), (0, 0)], 3)
        Traceback (most recent call last):
        ...
        polycap.core.errors.ValidationError: polygons need at least 3 vertices, got 2
    """


class ReductionError(PolycapError):
    """The greedy reduction loop could not reach its target."""


class NoRemovableVertexError(ReductionError):
    """Every remaining vertex has an infinite removal cost.

    Attributes:
        vertex_count: Number of vertices left when the loop stalled
        target: Requested vertex count
    """

    def __init__(self, vertex_count: int, target: int):
        self.vertex_count = vertex_count
        self.target = target
        super().__init__(
            f"no removable vertex left at {vertex_count} vertices "
            f"(target {target}): all removal costs are infinite"
        )


class RepairError(PolycapError):
    """Zero-margin buffer repair of a reduced ring failed."""


class ConfigurationError(PolycapError):
    """A ReductionConfig holds an invalid value."""


class StallWarning(UserWarning):
    """Issued when the stall fallback has to force a vertex removal."""


__all__ = [
    'PolycapError',
    'ValidationError',
    'ReductionError',
    'NoRemovableVertexError',
    'RepairError',
    'ConfigurationError',
    'StallWarning',
]
