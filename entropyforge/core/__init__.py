"""
EntropyForge Core Module
=========================

Contains the data models and error hierarchy.  The analysis engine
lives in :mod:`entropyforge.core.engine`; it depends on the generators
and analyzers, which in turn import from this package.
"""

from entropyforge.core.errors import (
    CorruptWordList,
    EntropyFailure,
    ForgeError,
    InvalidOptions,
)
from entropyforge.core.models import (
    AnalysisRecord,
    ComplexityScore,
    DicewareOptions,
    PasswordStrength,
    UniformityResult,
)

__all__ = [
    "AnalysisRecord",
    "ComplexityScore",
    "CorruptWordList",
    "DicewareOptions",
    "EntropyFailure",
    "ForgeError",
    "InvalidOptions",
    "PasswordStrength",
    "UniformityResult",
]
