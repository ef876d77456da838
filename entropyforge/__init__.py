"""
EntropyForge -- Password Generation and Strength Analysis
==========================================================

Generates two families of passwords, dense CSPRNG strings and Diceware
passphrases, and grades arbitrary passwords by empirical entropy,
character variety and common patterns.

Modules:
    - entropyforge.generators: Random source, word list, generator
    - entropyforge.analyzers: Complexity grading and uniformity self-test
    - entropyforge.core.engine: Generate-and-rate pipeline
    - entropyforge.core.models: Pydantic data models
    - entropyforge.output: Console and report output
    - entropyforge.cli: Click-based command-line interface

Usage::

    from entropyforge import DicewareOptions, analyze_password, diceware

    phrase = diceware(DicewareOptions(word_count=6, capitalize=True))
    grade = analyze_password(phrase)

References:
    - Reinhold, A. G. (1995). The Diceware Passphrase Home Page.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

__version__ = "1.0.0"
__tool_name__ = "entropyforge"

from entropyforge.analyzers.complexity import analyze_password
from entropyforge.core.engine import csprng_analysis, diceware_analysis
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
)
from entropyforge.generators.generator import (
    csprng,
    csprng_into,
    diceware,
    diceware_into,
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
    "analyze_password",
    "csprng",
    "csprng_analysis",
    "csprng_into",
    "diceware",
    "diceware_analysis",
    "diceware_into",
]
