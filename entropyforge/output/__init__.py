"""
EntropyForge Output Module
===========================

Console display and JSON report generation for EntropyForge results.
"""

from entropyforge.output.console import ForgeConsoleOutput
from entropyforge.output.report import ForgeReportGenerator

__all__ = [
    "ForgeConsoleOutput",
    "ForgeReportGenerator",
]
