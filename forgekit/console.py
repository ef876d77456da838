"""
EntropyForge Console Interface
===============================

Rich-powered console abstraction providing a unified presentation layer
for the EntropyForge command-line driver.

The class wraps :class:`rich.console.Console` and adds convenience methods
for banners, section headers, coloured status messages, tables and status
spinners, all with consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_FORGE_THEME = Theme(
    {
        "forge.banner": "bold bright_cyan",
        "forge.section": "bold bright_magenta",
        "forge.success": "bold green",
        "forge.warning": "bold yellow",
        "forge.error": "bold red",
        "forge.info": "bold bright_blue",
        "forge.dim": "dim white",
        "forge.highlight": "bold bright_white",
    }
)

_BANNER_ART = r"""[bright_cyan]
  ___     _                      ___
 | __|_ _| |_ _ _ ___ _ __ _  _ | __|__ _ _ __ _ ___
 | _|| ' \  _| '_/ _ \ '_ \ || || _/ _ \ '_/ _` / -_)
 |___|_||_\__|_| \___/ .__/\_, ||_|\___/_| \__, \___|
                     |_|   |__/            |___/
[/bright_cyan]"""

_TAGLINE = "Password generation and strength estimation"


class ForgeConsole:
    """Unified console interface for the EntropyForge CLI.

    Usage::

        con = ForgeConsole()
        con.banner()
        con.section("Generated Passwords")
        con.success("Done")
    """

    def __init__(self, *, quiet: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
        """
        self._console = Console(
            theme=_FORGE_THEME,
            quiet=quiet,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Display the EntropyForge ASCII-art banner.

        Args:
            version: Version string shown beneath the logo.
        """
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        subtitle = (
            f"[forge.highlight]{_TAGLINE}[/forge.highlight]\n"
            f"[forge.dim]Version: {version}  |  {now}[/forge.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(1, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            f"  {title}  ",
            style="forge.section",
            characters="─",
        )
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(
            f"[forge.success][✔] SUCCESS:[/forge.success] {message}"
        )

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(
            f"[forge.warning][⚠] WARNING:[/forge.warning] {message}"
        )

    def error(self, message: str) -> None:
        """Print an error message."""
        self._console.print(
            f"[forge.error][✘] ERROR:[/forge.error] {message}"
        )

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Iterable of row tuples; each element is stringified.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(Text(str(cell)) for cell in row))

        self._console.print(tbl)

    @contextmanager
    def status(
        self, message: str = "Working..."
    ) -> Generator[Any, None, None]:
        """Context-manager showing a spinner with a status message.

        Example::

            with con.status("Sampling generator output..."):
                results = engine.uniformity_report()
        """
        with self._console.status(
            f"[forge.info]{message}[/forge.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

