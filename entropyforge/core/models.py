"""
EntropyForge Data Models
=========================

Pydantic models for passphrase options, password complexity grades,
generate-and-rate records and generator self-test results.

All models serialise to JSON with ``model_dump(mode="json")`` using the
interchange field names ``password``, ``length``, ``complexity``,
``generated_at`` and ``score``, ``entropy_bits``, ``strength``,
``crack_time``, ``weaknesses``, ``suggestions``, ``character_types``,
``pattern_score``.

References:
    - Reinhold, A. G. (1995). The Diceware Passphrase Home Page.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class PasswordStrength(str, enum.Enum):
    """Qualitative strength label, a step function of the composite score."""

    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    FAIR = "Fair"
    GOOD = "Good"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @property
    def rank(self) -> int:
        """Ordinal position, 0 for Very Weak up to 5 for Very Strong."""
        return list(PasswordStrength).index(self)


# ===================================================================== #
#  Generation Options
# ===================================================================== #


class DicewareOptions(BaseModel):
    """Configuration for a Diceware passphrase.

    Attributes:
        word_count: Number of dice-drawn words.
        separator: String inserted between words; may be empty.
        capitalize: Titlecase every word.
        uppercase: Render exactly one randomly chosen word fully uppercase.
        add_numbers: Append a random integer to exactly one word.
        add_symbols: Append exactly one symbol after one word.
        number_bound: Exclusive upper bound of the appended integer.
    """

    model_config = ConfigDict(frozen=True)

    word_count: int = 6
    separator: str = "-"
    capitalize: bool = False
    uppercase: bool = False
    add_numbers: bool = False
    add_symbols: bool = False
    number_bound: int = 696_969


# ===================================================================== #
#  Analysis Models
# ===================================================================== #


class ComplexityScore(BaseModel):
    """Strength grade of a single password.

    Attributes:
        score: Composite score from 0 to 100.
        entropy_bits: Empirical Shannon entropy multiplied by length.
        strength: Qualitative label derived from ``score``.
        crack_time: Human-readable brute-force time at 10^9 guesses/second.
        weaknesses: Detected weaknesses, index-aligned with ``suggestions``.
        suggestions: One improvement suggestion per weakness.
        character_types: Classes present among lower, upper, digit, other.
        pattern_score: 100 minus penalties for common patterns.
    """

    score: int = Field(default=0, ge=0, le=100)
    entropy_bits: float = Field(default=0.0, ge=0.0)
    strength: PasswordStrength = PasswordStrength.VERY_WEAK
    crack_time: str = "Instant"
    weaknesses: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    character_types: int = Field(default=0, ge=0, le=4)
    pattern_score: int = Field(default=100, ge=0, le=100)


class AnalysisRecord(BaseModel):
    """A generated password together with its complexity grade.

    Attributes:
        password: The generated password.
        length: Character count of ``password``.
        complexity: The analyzer's grade.
        generated_at: RFC-3339 UTC timestamp, second precision.
    """

    password: str
    length: int = Field(ge=0)
    complexity: ComplexityScore
    generated_at: str


# ===================================================================== #
#  Self-test Models
# ===================================================================== #


class UniformityResult(BaseModel):
    """Outcome of one chi-squared uniformity test on generator output.

    Attributes:
        name: Which output was sampled (e.g. ``"charset"``).
        samples: Number of categorical observations.
        categories: Number of equally likely outcomes.
        chi_squared: Pearson test statistic.
        p_value: Probability of a statistic at least this large under H0.
        alpha: Significance level.
        passed: ``p_value >= alpha``.
    """

    name: str
    samples: int
    categories: int
    chi_squared: float
    p_value: float
    alpha: float
    passed: bool
