"""
Password Complexity Analyzer
=============================

Deterministic strength grading of an arbitrary password.  The grade
combines four measurements:

1. Empirical Shannon entropy over code points, multiplied by length
2. Character classes present: lowercase, uppercase, digit, other
3. Pattern score: 100 minus penalties for dictionary fragments,
   keyboard walks, triple repeats and ascending runs
4. Length, capped at 20

into a composite score from 0 to 100::

    score = int(min(entropy * 2, 50)) + min(length, 20)
            + types * 5 - (100 - pattern_score) // 10

Crack time assumes an offline attacker at 10^9 guesses per second who
finds the password after searching half the space.

Empirical entropy rates the observed string, not the process that made
it: a 24-character CSPRNG string drawn from 72 symbols carries about
148 bits of generation entropy but typically measures around 100 here.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
"""

from __future__ import annotations

from forgekit.math_utils import shannon_entropy

from entropyforge.core.models import ComplexityScore, PasswordStrength


# ===================================================================== #
#  Pattern Tables
# ===================================================================== #

_DICTIONARY_PATTERNS: tuple[str, ...] = (
    "123", "abc", "qwe", "asd", "zxc", "password", "admin",
    "user", "test", "000", "111", "222", "999",
)

_KEYBOARD_PATTERNS: tuple[str, ...] = ("qwerty", "asdf", "zxcv", "1234", "abcd")

_DICTIONARY_PENALTY = 20
_KEYBOARD_PENALTY = 15
_REPEAT_PENALTY = 10
_SEQUENCE_PENALTY = 10

_GUESSES_PER_SECOND = 1e9
# 2 ** 1024 overflows a float
_MAX_EXPONENT = 1023.0

_STRENGTH_THRESHOLDS: tuple[tuple[int, PasswordStrength], ...] = (
    (90, PasswordStrength.VERY_STRONG),
    (75, PasswordStrength.STRONG),
    (60, PasswordStrength.GOOD),
    (40, PasswordStrength.FAIR),
    (20, PasswordStrength.WEAK),
)

_MINUTE = 60
_HOUR = 3_600
_DAY = 86_400
_YEAR = 31_536_000


class ComplexityAnalyzer:
    """Grades password strength from entropy, variety and patterns.

    Stateless; a single instance may be shared between threads.

    Usage::

        analyzer = ComplexityAnalyzer()
        grade = analyzer.analyze("correct-horse-battery-staple")
        print(grade.score, grade.strength.value, grade.crack_time)
    """

    def analyze(self, password: str) -> ComplexityScore:
        """Grade *password*.  Never raises.

        Args:
            password: Any string, including the empty string.

        Returns:
            ComplexityScore with weaknesses and suggestions index-aligned.
        """
        length = len(password)
        entropy = self.entropy(password)
        types = self.character_types(password)
        pattern_score = self.pattern_score(password)

        score = self.composite_score(entropy, length, types, pattern_score)
        weaknesses, suggestions = self._weaknesses(
            password, length, types, entropy, pattern_score
        )

        return ComplexityScore(
            score=score,
            entropy_bits=entropy,
            strength=self.rate_strength(score),
            crack_time=self.crack_time(entropy),
            weaknesses=weaknesses,
            suggestions=suggestions,
            character_types=types,
            pattern_score=pattern_score,
        )

    # ------------------------------------------------------------------ #
    #  Measurements
    # ------------------------------------------------------------------ #

    @staticmethod
    def entropy(password: str) -> float:
        """Empirical Shannon entropy over code points times length, in bits."""
        return shannon_entropy(password) * len(password)

    @staticmethod
    def character_types(password: str) -> int:
        """Count the classes present among ASCII lower, ASCII upper, digit, other."""
        has_lower = has_upper = has_digit = has_other = False
        for ch in password:
            if "a" <= ch <= "z":
                has_lower = True
            elif "A" <= ch <= "Z":
                has_upper = True
            elif "0" <= ch <= "9":
                has_digit = True
            else:
                has_other = True
        return has_lower + has_upper + has_digit + has_other

    @staticmethod
    def pattern_score(password: str) -> int:
        """Start at 100 and subtract penalties for common patterns.

        Dictionary fragments cost 20 each; keyboard walks, a triple
        repeat and an ascending run cost 15, 10 and 10 once apiece.
        Substring checks are ASCII case-insensitive; the repeat and
        ascending checks compare bytes of the UTF-8 encoding.
        """
        lowered = _ascii_lower(password)
        score = 100

        for pattern in _DICTIONARY_PATTERNS:
            if pattern in lowered:
                score -= _DICTIONARY_PENALTY

        if any(pattern in lowered for pattern in _KEYBOARD_PATTERNS):
            score -= _KEYBOARD_PENALTY

        encoded = password.encode("utf-8")
        if has_triple_repeat(encoded):
            score -= _REPEAT_PENALTY
        if has_ascending_run(encoded):
            score -= _SEQUENCE_PENALTY

        return max(0, min(100, score))

    @staticmethod
    def composite_score(
        entropy: float, length: int, types: int, pattern_score: int
    ) -> int:
        """Combine the measurements into a score clamped to ``[0, 100]``."""
        score = int(min(entropy * 2, 50))
        score += min(length, 20)
        score += types * 5
        score -= (100 - pattern_score) // 10
        return max(0, min(100, score))

    @staticmethod
    def rate_strength(score: int) -> PasswordStrength:
        """Map a composite score to its qualitative label."""
        for threshold, strength in _STRENGTH_THRESHOLDS:
            if score >= threshold:
                return strength
        return PasswordStrength.VERY_WEAK

    @staticmethod
    def crack_time(entropy: float) -> str:
        """Render the expected brute-force time for *entropy* bits."""
        seconds = 2.0 ** min(entropy, _MAX_EXPONENT) / 2 / _GUESSES_PER_SECOND
        return format_duration(seconds)

    # ------------------------------------------------------------------ #
    #  Weakness enumeration
    # ------------------------------------------------------------------ #

    @staticmethod
    def _weaknesses(
        password: str,
        length: int,
        types: int,
        entropy: float,
        pattern_score: int,
    ) -> tuple[list[str], list[str]]:
        weaknesses: list[str] = []
        suggestions: list[str] = []

        if length < 8:
            weaknesses.append("Password too short")
            suggestions.append("Use at least 12 characters")
        if types < 3:
            weaknesses.append("Limited character variety")
            suggestions.append("Include uppercase, lowercase, numbers, and symbols")
        if entropy < 50:
            weaknesses.append("Low entropy")
            suggestions.append("Use more random characters or longer passphrase")
        if pattern_score < 80:
            weaknesses.append("Contains common patterns")
            suggestions.append("Avoid dictionary words and common patterns")
        if has_triple_repeat(password.encode("utf-8")):
            weaknesses.append("Contains repeated characters")
            suggestions.append("Reduce character repetition")

        return weaknesses, suggestions


# ===================================================================== #
#  Helpers
# ===================================================================== #


def has_triple_repeat(data: bytes) -> bool:
    """Whether three consecutive bytes are identical."""
    return any(
        data[i] == data[i + 1] == data[i + 2] for i in range(len(data) - 2)
    )


def has_ascending_run(data: bytes) -> bool:
    """Whether three consecutive byte values each increase by one."""
    return any(
        data[i + 1] == data[i] + 1 and data[i + 2] == data[i] + 2
        for i in range(len(data) - 2)
    )


def format_duration(seconds: float) -> str:
    """Bucket a duration into the coarsest readable unit."""
    if seconds < 1:
        return "Instant"
    if seconds < _MINUTE:
        return f"{seconds:.0f} seconds"
    if seconds < _HOUR:
        return f"{seconds / _MINUTE:.0f} minutes"
    if seconds < _DAY:
        return f"{seconds / _HOUR:.0f} hours"
    if seconds < _YEAR:
        return f"{seconds / _DAY:.0f} days"
    if seconds < _YEAR * 1000:
        return f"{seconds / _YEAR:.1f} years"
    return "Centuries"


def _ascii_lower(text: str) -> str:
    return "".join(
        chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch for ch in text
    )


_DEFAULT_ANALYZER = ComplexityAnalyzer()


def analyze_password(password: str) -> ComplexityScore:
    """Grade *password* with the shared analyzer."""
    return _DEFAULT_ANALYZER.analyze(password)

