"""
Keysmith Console Interface
===========================

Rich-powered console abstraction shared by the CLI and the output
formatters: banner, section rules, status-coloured messages and
tables, all with one palette.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_KEYSMITH_THEME = Theme(
    {
        "keysmith.banner": "bold bright_cyan",
        "keysmith.section": "bold bright_magenta",
        "keysmith.success": "bold green",
        "keysmith.warning": "bold yellow",
        "keysmith.error": "bold red",
        "keysmith.info": "bold bright_blue",
        "keysmith.dim": "dim white",
        "keysmith.critical": "bold white on red",
        "keysmith.high": "bold red",
        "keysmith.medium": "bold yellow",
        "keysmith.low": "bold bright_cyan",
        "keysmith.informational": "bold bright_blue",
    }
)

_BANNER_ART = r"""[bright_cyan]
  _  __              _ _   _
 | |/ /___ _  _ ___ _ __ (_) |_| |_
 | ' </ -_) || (_-< '  \| |  _| ' \
 |_|\_\___|\_, /__/_|_|_|_|\__|_||_|
           |__/
[/bright_cyan]"""

_TAGLINE = "Password generation and strength analysis"

_SEVERITY_STYLES: dict[str, str] = {
    "CRITICAL": "keysmith.critical",
    "HIGH": "keysmith.high",
    "MEDIUM": "keysmith.medium",
    "LOW": "keysmith.low",
    "INFO": "keysmith.informational",
}


class KeysmithConsole:
    """Unified console wrapper.

    Usage::

        con = KeysmithConsole()
        con.banner()
        con.section("Generated Passwords")
        con.success("Done")
    """

    def __init__(
        self, *, quiet: bool = False, record: bool = False, stderr: bool = False
    ) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (library and test mode).
            record: Enable Rich recording for later export.
            stderr: Write to stderr instead of stdout.
        """
        self._console = Console(
            theme=_KEYSMITH_THEME,
            quiet=quiet,
            record=record,
            stderr=stderr,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        """Display the Keysmith banner."""
        subtitle = (
            f"[keysmith.info]{_TAGLINE}[/keysmith.info]\n"
            f"[keysmith.dim]Version: {version}[/keysmith.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a section header rule."""
        self._console.rule(f"  {title}  ", style="keysmith.section")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[keysmith.success][✔] SUCCESS:[/keysmith.success] {escape(message)}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[keysmith.warning][⚠] WARNING:[/keysmith.warning] {escape(message)}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[keysmith.error][✘] ERROR:[/keysmith.error] {escape(message)}"
        )

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def findings_table(self, findings: Sequence[Any]) -> None:
        """Render findings with severity colouring.

        Expects objects with ``severity``, ``title`` and ``description``
        attributes (see :class:`shared.models.Finding`).
        """
        tbl = Table(
            title="Findings",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("Severity", width=10)
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)

        for idx, finding in enumerate(findings, start=1):
            sev_name = finding.severity.value
            sev_style = _SEVERITY_STYLES.get(sev_name)
            sev_cell = f"[{sev_style}]{sev_name}[/{sev_style}]" if sev_style else sev_name
            tbl.add_row(str(idx), sev_cell, finding.title, finding.description)

        self._console.print(tbl)
