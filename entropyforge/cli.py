"""
EntropyForge CLI
=================

Click-based command-line interface for EntropyForge.  Provides
subcommands for CSPRNG strings, Diceware passphrases, stand-alone
password grading and the generator uniformity self-test.

Usage::

    python -m entropyforge csprng --length 24 --count 3
    python -m entropyforge diceware --words 6 --capitalize --numbers
    python -m entropyforge analyze "correct-horse-battery-staple"
    python -m entropyforge --output json selftest --runs 5000

Option values not given on the command line fall back to the
``[generator]`` and ``[uniformity]`` sections of the configuration file.

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import click

from forgekit.config import ForgeConfig
from forgekit.console import ForgeConsole

from entropyforge import __version__
from entropyforge.analyzers.complexity import ComplexityAnalyzer
from entropyforge.core.engine import ForgeEngine
from entropyforge.core.errors import ForgeError
from entropyforge.core.models import AnalysisRecord, DicewareOptions
from entropyforge.output.console import ForgeConsoleOutput
from entropyforge.output.report import ForgeReportGenerator


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to EntropyForge configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and decoration; print bare passwords.",
)
@click.version_option(__version__, prog_name="entropyforge")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """EntropyForge -- Password Generation and Strength Analysis.

    Generate CSPRNG strings and Diceware passphrases, grade passwords,
    and check the generator's output for uniformity.
    """
    ctx.ensure_object(dict)

    forge_config = ForgeConfig.load(config)
    ctx.obj["config"] = forge_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = ForgeConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["engine"] = ForgeEngine(forge_config)
    ctx.obj["display"] = ForgeConsoleOutput(console)
    ctx.obj["reporter"] = ForgeReportGenerator()

    if not quiet and output == "console":
        console.banner(version=forge_config.global_settings.version)


def _handle_output(ctx: click.Context, command: str, **sections: Any) -> None:
    """Emit a JSON report to ``--output-file`` or stdout.

    Args:
        ctx: Click context containing configuration.
        command: Name of the subcommand that produced the data.
        **sections: Report sections, see ``ForgeReportGenerator.build_report``.
    """
    output_file = ctx.obj["output_file"]
    reporter: ForgeReportGenerator = ctx.obj["reporter"]
    console: ForgeConsole = ctx.obj["console"]

    if output_file:
        path = reporter.generate_json(Path(output_file), command=command, **sections)
        console.success(f"JSON report saved to: {path}")
    else:
        click.echo(reporter.render_json(command=command, **sections))


def _fail(ctx: click.Context, exc: ForgeError) -> None:
    """Report a generation failure and exit with status 1."""
    console: ForgeConsole = ctx.obj["console"]
    if ctx.obj["quiet"]:
        click.echo(f"Error: {exc}", err=True)
    else:
        console.error(str(exc))
    ctx.exit(1)


def _emit_records(
    ctx: click.Context, command: str, records: list[AnalysisRecord], title: str
) -> None:
    if ctx.obj["output_format"] == "json":
        _handle_output(ctx, command, records=records)
    elif ctx.obj["quiet"]:
        for record in records:
            click.echo(record.password)
    else:
        display: ForgeConsoleOutput = ctx.obj["display"]
        display.display_records(records, title)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.option(
    "--length", "-l",
    type=click.IntRange(min=0),
    default=None,
    help="Characters per string (default from config, 32).",
)
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of strings to generate.",
)
@click.pass_context
def csprng(ctx: click.Context, length: Optional[int], count: int) -> None:
    """Generate random strings over the 72-character charset.

    Each character is drawn uniformly from a-z, A-Z, 0-9 and
    ! @ # $ % ^ & * | / using the operating-system CSPRNG.
    """
    engine: ForgeEngine = ctx.obj["engine"]
    config: ForgeConfig = ctx.obj["config"]
    length = length if length is not None else config.generator.csprng_length

    try:
        records = [engine.csprng_analysis(length) for _ in range(count)]
    except ForgeError as exc:
        _fail(ctx, exc)
        return

    _emit_records(ctx, "csprng", records, "CSPRNG Strings")


@cli.command()
@click.option(
    "--words", "-w",
    type=int,
    default=None,
    help="Words per passphrase (default from config, 6).",
)
@click.option(
    "--separator", "-s",
    default=None,
    help="String between words; may be empty (default from config, '-').",
)
@click.option(
    "--capitalize/--no-capitalize",
    default=None,
    help="Titlecase every word.",
)
@click.option(
    "--uppercase/--no-uppercase",
    default=None,
    help="Render one random word fully uppercase.",
)
@click.option(
    "--numbers/--no-numbers",
    default=None,
    help="Append a random number to one word.",
)
@click.option(
    "--symbols/--no-symbols",
    default=None,
    help="Append a random symbol to one word.",
)
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of passphrases to generate.",
)
@click.pass_context
def diceware(
    ctx: click.Context,
    words: Optional[int],
    separator: Optional[str],
    capitalize: Optional[bool],
    uppercase: Optional[bool],
    numbers: Optional[bool],
    symbols: Optional[bool],
    count: int,
) -> None:
    """Generate Diceware passphrases.

    Five dice select each word from the 7776-entry list; options add a
    capitalised, uppercased, numbered or symbol-bearing variation.
    """
    engine: ForgeEngine = ctx.obj["engine"]
    config: ForgeConfig = ctx.obj["config"]

    overrides = {
        "word_count": words,
        "separator": separator,
        "capitalize": capitalize,
        "uppercase": uppercase,
        "add_numbers": numbers,
        "add_symbols": symbols,
    }
    opts = config.generator.diceware_options().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    try:
        records = [engine.diceware_analysis(opts) for _ in range(count)]
    except ForgeError as exc:
        _fail(ctx, exc)
        return

    _emit_records(ctx, "diceware", records, "Diceware Passphrases")


@cli.command()
@click.argument("password")
@click.pass_context
def analyze(ctx: click.Context, password: str) -> None:
    """Grade the strength of PASSWORD.

    Reports empirical entropy, character variety, pattern score,
    composite score, crack time and improvement suggestions.
    """
    result = ComplexityAnalyzer().analyze(password)

    if ctx.obj["output_format"] == "json":
        _handle_output(ctx, "analyze", analysis=result)
    elif ctx.obj["quiet"]:
        click.echo(f"{result.score} {result.strength.value}")
    else:
        display: ForgeConsoleOutput = ctx.obj["display"]
        display.display_complexity(password, result)


@cli.command()
@click.option(
    "--runs", "-r",
    type=click.IntRange(min=1),
    default=None,
    help="Samples per test (default from config, 10000).",
)
@click.pass_context
def selftest(ctx: click.Context, runs: Optional[int]) -> None:
    """Chi-squared uniformity check of generator output.

    Samples CSPRNG characters, dice faces and Diceware words and tests
    each histogram against the uniform distribution.  Exits with status
    1 if any test is rejected.
    """
    engine: ForgeEngine = ctx.obj["engine"]
    console: ForgeConsole = ctx.obj["console"]

    try:
        with console.status("Sampling generator output..."):
            results = engine.uniformity_report(runs)
    except ForgeError as exc:
        _fail(ctx, exc)
        return

    if ctx.obj["output_format"] == "json":
        _handle_output(ctx, "selftest", uniformity=results)
    elif ctx.obj["quiet"]:
        for result in results:
            verdict = "PASS" if result.passed else "FAIL"
            click.echo(f"{result.name} {result.p_value:.4f} {verdict}")
    else:
        display: ForgeConsoleOutput = ctx.obj["display"]
        display.display_uniformity(results)

    if not all(r.passed for r in results):
        ctx.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the EntropyForge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
