"""
EntropyForge Analyzers
=======================

Password strength grading and generator uniformity self-tests.
"""

from entropyforge.analyzers.complexity import ComplexityAnalyzer, analyze_password
from entropyforge.analyzers.uniformity import UniformityTester

__all__ = [
    "ComplexityAnalyzer",
    "UniformityTester",
    "analyze_password",
]
