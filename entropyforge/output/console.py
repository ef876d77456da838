"""
EntropyForge Console Output
============================

Rich-based display of generated passwords, their strength grades and
the generator uniformity self-test.

Uses the forgekit console infrastructure for consistent styling.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from forgekit.console import ForgeConsole

from entropyforge.core.models import (
    AnalysisRecord,
    ComplexityScore,
    PasswordStrength,
    UniformityResult,
)


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_STRENGTH_COLOURS: dict[PasswordStrength, str] = {
    PasswordStrength.VERY_WEAK: "bold white on red",
    PasswordStrength.WEAK: "bold red",
    PasswordStrength.FAIR: "bold yellow",
    PasswordStrength.GOOD: "bold green",
    PasswordStrength.STRONG: "bold bright_green",
    PasswordStrength.VERY_STRONG: "bold bright_cyan",
}

_METER_WIDTH = 40


class ForgeConsoleOutput:
    """Renders EntropyForge results to the terminal.

    Usage::

        display = ForgeConsoleOutput()
        display.display_records(records)
        display.display_complexity("hunter2", analyze_password("hunter2"))
    """

    def __init__(self, console: Optional[ForgeConsole] = None) -> None:
        self.console = console or ForgeConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Generated passwords
    # ------------------------------------------------------------------ #

    def display_records(self, records: Sequence[AnalysisRecord], title: str) -> None:
        """Summary table of generated passwords with their grades."""
        self.console.section(title)

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("#", justify="right", style="dim")
        tbl.add_column("Password", style="bold")
        tbl.add_column("Length", justify="right")
        tbl.add_column("Entropy", justify="right")
        tbl.add_column("Score", justify="right")
        tbl.add_column("Strength")
        tbl.add_column("Crack Time", justify="right")

        for idx, record in enumerate(records, start=1):
            grade = record.complexity
            tbl.add_row(
                str(idx),
                Text(record.password),
                str(record.length),
                f"{grade.entropy_bits:.2f} bits",
                f"{grade.score}/100",
                Text(grade.strength.value, style=_STRENGTH_COLOURS[grade.strength]),
                grade.crack_time,
            )

        self._rich.print(tbl)

        if len(records) == 1:
            self._display_weaknesses(records[0].complexity)

    # ------------------------------------------------------------------ #
    #  Single password grade
    # ------------------------------------------------------------------ #

    def display_complexity(self, password: str, result: ComplexityScore) -> None:
        """Strength meter, details table and weaknesses for one password.

        Args:
            password: The graded password, shown masked.
            result: ComplexityScore from the analyzer.
        """
        self.console.section("Password Analysis")
        self._rich.print(
            Panel(self._strength_meter(result), title="Strength Meter", border_style="cyan")
        )

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")

        tbl.add_row("Password", Text(mask_password(password)))
        tbl.add_row("Length", str(len(password)))
        tbl.add_row("Entropy", f"{result.entropy_bits:.2f} bits")
        tbl.add_row("Character Types", f"{result.character_types}/4")
        tbl.add_row("Pattern Score", f"{result.pattern_score}/100")
        tbl.add_row("Crack Time (10^9 g/s)", result.crack_time)

        self._rich.print(tbl)
        self._display_weaknesses(result)

    @staticmethod
    def _strength_meter(result: ComplexityScore) -> Text:
        colour = _STRENGTH_COLOURS[result.strength]
        filled = max(0, min(_METER_WIDTH, int(result.score / 100 * _METER_WIDTH)))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{result.score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i >= filled:
                meter.append("░", style="dim")
            elif i < _METER_WIDTH * 0.25:
                meter.append("█", style="red")
            elif i < _METER_WIDTH * 0.50:
                meter.append("█", style="yellow")
            elif i < _METER_WIDTH * 0.75:
                meter.append("█", style="green")
            else:
                meter.append("█", style="bright_green")
        meter.append("]", style="dim")
        meter.append("  ")
        meter.append(result.strength.value.upper(), style=colour)
        return meter

    def _display_weaknesses(self, result: ComplexityScore) -> None:
        if not result.weaknesses:
            self.console.success("No weaknesses detected")
            return

        self.console.table(
            "Weaknesses",
            ["Weakness", "Suggestion"],
            list(zip(result.weaknesses, result.suggestions)),
            styles=["bold yellow", ""],
        )

    # ------------------------------------------------------------------ #
    #  Uniformity self-test
    # ------------------------------------------------------------------ #

    def display_uniformity(self, results: Sequence[UniformityResult]) -> None:
        """Table of chi-squared uniformity results with a pass/fail summary."""
        self.console.section("Generator Uniformity")

        tbl = Table(
            title="Pearson Chi-Squared Goodness of Fit",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Test", style="bold")
        tbl.add_column("Samples", justify="right")
        tbl.add_column("Categories", justify="right")
        tbl.add_column("Chi-Squared", justify="right")
        tbl.add_column("p-value", justify="right")
        tbl.add_column("Result", justify="center")

        for result in results:
            verdict = (
                Text("PASS", style="bold green")
                if result.passed
                else Text("FAIL", style="bold red")
            )
            tbl.add_row(
                result.name,
                str(result.samples),
                str(result.categories),
                f"{result.chi_squared:.2f}",
                f"{result.p_value:.4f}",
                verdict,
            )

        self._rich.print(tbl)

        failed = [r.name for r in results if not r.passed]
        if failed:
            self.console.warning(
                f"Uniformity rejected at alpha={results[0].alpha}: {', '.join(failed)}"
            )
        else:
            self.console.success(f"All {len(results)} uniformity checks passed")


def mask_password(password: str) -> str:
    """Show the first and last character, masking the rest."""
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]
