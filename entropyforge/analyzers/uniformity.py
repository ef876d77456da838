"""
Generator Uniformity Self-Test
===============================

Pearson chi-squared goodness-of-fit checks that the generator's outputs
are uniformly distributed over their alphabets:

1. **charset** -- CSPRNG characters over the 72-symbol charset
2. **dice** -- individual die faces behind Diceware keys
3. **words** -- registry entries selected by plain Diceware passphrases

Each test histograms the outputs, compares against the flat expectation
and rejects uniformity when ``p_value < alpha``.  With ``alpha = 0.01``
a correct generator still fails about one run in a hundred; a failure is
a prompt to rerun, not proof of bias.

References:
    - Pearson, K. (1900). On the Criterion that a Given System of
      Deviations from the Probable ... Philosophical Magazine, 50(302).
    - Knuth, D. E. (1997). The Art of Computer Programming, Volume 2:
      Seminumerical Algorithms (3rd ed.), Section 3.3.1.
"""

from __future__ import annotations

from forgekit.math_utils import category_counts, uniform_chi_squared

from entropyforge.core.models import DicewareOptions, UniformityResult
from entropyforge.generators.generator import CHARSET, PasswordGenerator
from entropyforge.generators.wordlist import DICE_FACES

# Newline never occurs inside a word, so splitting recovers every slot.
_WORD_SEPARATOR = "\n"


class UniformityTester:
    """Chi-squared uniformity checks over a :class:`PasswordGenerator`.

    Usage::

        tester = UniformityTester(PasswordGenerator(), alpha=0.01)
        result = tester.charset_uniformity(runs=10_000)
        assert result.passed

    Args:
        generator: Generator under test.
        alpha: Significance level; a test passes when ``p_value >= alpha``.
    """

    def __init__(self, generator: PasswordGenerator, alpha: float = 0.01) -> None:
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must be in (0, 1), got {alpha}")
        self.generator = generator
        self.alpha = alpha

    def charset_uniformity(self, runs: int, length: int = 1) -> UniformityResult:
        """Histogram ``runs`` CSPRNG strings of ``length`` characters each."""
        _check_positive("runs", runs)
        _check_positive("length", length)

        index = {ch: i for i, ch in enumerate(CHARSET)}
        samples = (
            index[ch]
            for _ in range(runs)
            for ch in self.generator.csprng(length)
        )
        return self._evaluate("charset", category_counts(samples, len(CHARSET)))

    def dice_uniformity(self, runs: int) -> UniformityResult:
        """Histogram the five faces of ``runs`` Diceware key rolls."""
        _check_positive("runs", runs)

        samples = (
            DICE_FACES.index(face)
            for _ in range(runs)
            for face in self.generator.roll_dice()
        )
        return self._evaluate("dice", category_counts(samples, len(DICE_FACES)))

    def word_uniformity(self, runs: int, word_count: int = 6) -> UniformityResult:
        """Histogram registry entries chosen by ``runs`` plain passphrases."""
        _check_positive("runs", runs)
        _check_positive("word_count", word_count)

        registry = self.generator.registry
        index: dict[str, int] = {}
        for i, key in enumerate(registry.keys()):
            index.setdefault(registry.words[key], i)

        opts = DicewareOptions(word_count=word_count, separator=_WORD_SEPARATOR)
        samples = (
            index[word]
            for _ in range(runs)
            for word in self.generator.diceware(opts).split(_WORD_SEPARATOR)
        )
        return self._evaluate("words", category_counts(samples, len(registry)))

    def _evaluate(self, name: str, counts) -> UniformityResult:
        chi2, p_value = uniform_chi_squared(counts)
        return UniformityResult(
            name=name,
            samples=int(counts.sum()),
            categories=len(counts),
            chi_squared=round(chi2, 4),
            p_value=round(p_value, 6),
            alpha=self.alpha,
            passed=p_value >= self.alpha,
        )


def _check_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
