"""Core types and utilities for polycap.

This module provides type definitions, enums, exceptions, and core utilities
used throughout the library.
"""

from .types import (
    Curvature,
    StallPolicy,
)

from .errors import (
    PolycapError,
    ValidationError,
    ReductionError,
    NoRemovableVertexError,
    RepairError,
    ConfigurationError,
    StallWarning,
)

__all__ = [
    # Enums
    'Curvature',
    'StallPolicy',

    # Exceptions
    'PolycapError',
    'ValidationError',
    'ReductionError',
    'NoRemovableVertexError',
    'RepairError',
    'ConfigurationError',
    'StallWarning',
]
