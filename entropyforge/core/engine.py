"""
EntropyForge Analysis Engine
=============================

Central orchestrator joining the generator and the analyzer.  The
ForgeEngine generates a password, grades it, and returns an
AnalysisRecord with the password, its character length, the grade and
a UTC timestamp.

Architecture follows the Facade pattern (Gamma et al., 1994), providing
a single entry point over the generator, analyzer, buffer pool and
uniformity self-test.

Generation errors are logged and re-raised unchanged; grading cannot
fail.  Passwords never reach the log.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
    - Reinhold, A. G. (1995). The Diceware Passphrase Home Page.
"""

from __future__ import annotations

import io
import threading
from contextlib import nullcontext
from datetime import datetime, timezone
from typing import Callable, ContextManager, Optional

from forgekit.config import ForgeConfig
from forgekit.logger import ForgeLogger

from entropyforge.analyzers.complexity import ComplexityAnalyzer
from entropyforge.analyzers.uniformity import UniformityTester
from entropyforge.core.errors import ForgeError
from entropyforge.core.models import (
    AnalysisRecord,
    DicewareOptions,
    UniformityResult,
)
from entropyforge.generators.buffers import BufferPool
from entropyforge.generators.generator import PasswordGenerator

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp() -> str:
    """Current UTC time as an RFC-3339 string with second precision."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class ForgeEngine:
    """Generate-and-rate pipeline.

    Usage::

        engine = ForgeEngine()
        record = engine.csprng_analysis(24)
        record = engine.diceware_analysis(DicewareOptions(word_count=6))
        results = engine.uniformity_report(runs=5_000)

    Attributes:
        config: EntropyForge configuration instance.
        generator: Password generator.
        analyzer: Complexity analyzer.
        pool: Buffer pool used when callers pass no buffer.
        logger: Logger for the engine.
    """

    def __init__(
        self,
        config: Optional[ForgeConfig] = None,
        generator: Optional[PasswordGenerator] = None,
        analyzer: Optional[ComplexityAnalyzer] = None,
        pool: Optional[BufferPool] = None,
    ) -> None:
        self.config = config or ForgeConfig()
        self.generator = generator or PasswordGenerator()
        self.analyzer = analyzer or ComplexityAnalyzer()
        self.pool = pool or BufferPool(max_idle=self.config.generator.pool_size)

        settings = self.config.global_settings
        self.logger = ForgeLogger(
            "engine",
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
            console_output=settings.console_logging,
        )

    # ------------------------------------------------------------------ #
    #  Generate and rate
    # ------------------------------------------------------------------ #

    def csprng_analysis(
        self, length: int, buffer: Optional[io.StringIO] = None
    ) -> AnalysisRecord:
        """Generate a CSPRNG string of *length* characters and grade it.

        Args:
            length: Number of characters; must be non-negative.
            buffer: Optional caller-owned buffer to generate into.

        Returns:
            AnalysisRecord for the generated string.

        Raises:
            InvalidOptions: If *length* is negative.
            EntropyFailure: If the entropy source fails.
        """
        with self.logger.operation("csprng_analysis"):
            self.logger.debug("Generating CSPRNG string", length=length)
            return self._generate_and_rate(
                lambda buf: self.generator.csprng_into(length, buf), buffer
            )

    def diceware_analysis(
        self, opts: DicewareOptions, buffer: Optional[io.StringIO] = None
    ) -> AnalysisRecord:
        """Generate a Diceware passphrase according to *opts* and grade it.

        Args:
            opts: Passphrase options.
            buffer: Optional caller-owned buffer to generate into.

        Returns:
            AnalysisRecord for the generated passphrase.

        Raises:
            InvalidOptions: If ``word_count`` or ``number_bound`` is unusable.
            CorruptWordList: If a rolled key does not resolve.
            EntropyFailure: If the entropy source fails.
        """
        with self.logger.operation("diceware_analysis"):
            self.logger.debug(
                "Generating Diceware passphrase",
                word_count=opts.word_count,
                capitalize=opts.capitalize,
                uppercase=opts.uppercase,
                add_numbers=opts.add_numbers,
                add_symbols=opts.add_symbols,
            )
            return self._generate_and_rate(
                lambda buf: self.generator.diceware_into(opts, buf), buffer
            )

    def _generate_and_rate(
        self,
        fill: Callable[[io.StringIO], None],
        buffer: Optional[io.StringIO],
    ) -> AnalysisRecord:
        holder: ContextManager[io.StringIO] = (
            nullcontext(buffer) if buffer is not None else self.pool.checkout()
        )
        with holder as buf:
            try:
                fill(buf)
            except ForgeError as exc:
                self.logger.error(
                    "Generation failed: %s", exc, error_type=type(exc).__name__
                )
                raise
            password = buf.getvalue()

        complexity = self.analyzer.analyze(password)
        self.logger.debug(
            "Graded password",
            length=len(password),
            score=complexity.score,
            strength=complexity.strength.value,
        )
        return AnalysisRecord(
            password=password,
            length=len(password),
            complexity=complexity,
            generated_at=utc_timestamp(),
        )

    # ------------------------------------------------------------------ #
    #  Self-test
    # ------------------------------------------------------------------ #

    def uniformity_report(self, runs: Optional[int] = None) -> list[UniformityResult]:
        """Run the charset, dice and word uniformity checks.

        Args:
            runs: Samples per test; defaults to ``[uniformity] runs``.

        Returns:
            One UniformityResult per test, in charset, dice, words order.
        """
        settings = self.config.uniformity
        runs = runs if runs is not None else settings.runs
        tester = UniformityTester(self.generator, alpha=settings.alpha)

        results: list[UniformityResult] = []
        with self.logger.operation("uniformity_report"):
            for label, check in (
                ("charset", tester.charset_uniformity),
                ("dice", tester.dice_uniformity),
                ("words", tester.word_uniformity),
            ):
                with self.logger.timed(f"{label} uniformity"):
                    result = check(runs)
                if not result.passed:
                    self.logger.warning(
                        "Uniformity check rejected: %s (p=%.6f < %.3f)",
                        result.name,
                        result.p_value,
                        result.alpha,
                    )
                results.append(result)
        return results


# ===================================================================== #
#  Module-level convenience over a shared engine
# ===================================================================== #

_DEFAULT_ENGINE: Optional[ForgeEngine] = None
_DEFAULT_ENGINE_LOCK = threading.Lock()


def default_engine() -> ForgeEngine:
    """The process-wide engine, created once on first use."""
    global _DEFAULT_ENGINE
    if _DEFAULT_ENGINE is None:
        with _DEFAULT_ENGINE_LOCK:
            if _DEFAULT_ENGINE is None:
                _DEFAULT_ENGINE = ForgeEngine()
    return _DEFAULT_ENGINE


def csprng_analysis(
    length: int, buffer: Optional[io.StringIO] = None
) -> AnalysisRecord:
    """Generate and grade a CSPRNG string with the shared engine."""
    return default_engine().csprng_analysis(length, buffer)


def diceware_analysis(
    opts: DicewareOptions, buffer: Optional[io.StringIO] = None
) -> AnalysisRecord:
    """Generate and grade a Diceware passphrase with the shared engine."""
    return default_engine().diceware_analysis(opts, buffer)
