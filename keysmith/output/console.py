"""
Keysmith Console Output
========================

Rich formatters for generated passwords and strength analyses: a
password table with alphabet details, a colour-segmented strength
meter, a composition table, pattern categories, feedback and
improvements.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import KeysmithConsole
from keysmith.core.models import (
    Alphabet,
    GeneratedPassword,
    PasswordAnalysis,
)


_TIER_COLOURS: dict[str, str] = {
    "very_weak": "bold white on red",
    "weak": "bold red",
    "medium": "bold yellow",
    "strong": "bold bright_blue",
    "very_strong": "bold green",
    "excellent": "bold bright_green",
}

_RATING_COLOURS: dict[str, str] = {
    "Weak": "bold red",
    "Medium": "bold yellow",
    "Strong": "bold bright_blue",
    "Very Strong": "bold green",
}


def _yes_no(flag: bool) -> str:
    return "[green]Yes[/green]" if flag else "[red]No[/red]"


class KeysmithConsoleOutput:
    """Console formatters for Keysmith results.

    Usage::

        output = KeysmithConsoleOutput(KeysmithConsole())
        output.display_passwords(passwords, alphabet, "Very Strong")
        output.display_analysis(analysis)
    """

    def __init__(self, console: Optional[KeysmithConsole] = None) -> None:
        self.console = console or KeysmithConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Generation Display
    # ------------------------------------------------------------------ #

    def display_passwords(
        self,
        passwords: Sequence[GeneratedPassword],
        alphabet: Alphabet,
        rating: str,
    ) -> None:
        """Show generated passwords followed by the alphabet summary."""
        self.console.section("Generated Passwords")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
        )
        tbl.add_column("#", style="dim", justify="right", width=4)
        tbl.add_column("Password", style="bold bright_white", no_wrap=True)
        for idx, password in enumerate(passwords, start=1):
            tbl.add_row(str(idx), Text(password.value))
        self._rich.print(tbl)

        if not passwords:
            return

        sample = passwords[0]
        colour = _RATING_COLOURS.get(rating, "white")
        summary = Text()
        summary.append("Length: ", style="bold")
        summary.append(f"{sample.length}\n")
        summary.append("Alphabet: ", style="bold")
        summary.append(f"{alphabet.size} symbols (")
        summary.append(
            ", ".join(f"{c.value} {n}" for c, n in alphabet.class_counts.items())
        )
        summary.append(")\n")
        summary.append("Entropy: ", style="bold")
        summary.append(f"{sample.entropy_bits:.1f} bits  ")
        summary.append(rating, style=colour)

        self._rich.print(Panel(summary, title="Generation Details", border_style="cyan"))

    # ------------------------------------------------------------------ #
    #  Analysis Display
    # ------------------------------------------------------------------ #

    def display_analysis(self, result: PasswordAnalysis) -> None:
        """Display a strength analysis with a visual meter."""
        self.console.section("Password Analysis")

        tier = result.strength_tier
        tier_colour = _TIER_COLOURS.get(tier.value, "white")

        meter_width = 40
        filled = max(0, min(meter_width, int(result.score / 100 * meter_width)))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{result.score}/100  ")
        meter.append("[", style="dim")
        for i in range(meter_width):
            if i >= filled:
                meter.append("░", style="dim")
            elif i < meter_width * 0.25:
                meter.append("█", style="red")
            elif i < meter_width * 0.55:
                meter.append("█", style="yellow")
            elif i < meter_width * 0.85:
                meter.append("█", style="green")
            else:
                meter.append("█", style="bright_green")
        meter.append("]  ", style="dim")
        meter.append(tier.label.upper(), style=tier_colour)

        self._rich.print(Panel(meter, title="Strength Meter", border_style="cyan"))

        crack = result.estimated_crack_time
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Length", str(result.length))
        tbl.add_row("Unique Characters", str(result.unique_character_count))
        tbl.add_row("Lowercase", _yes_no(result.has_lower))
        tbl.add_row("Uppercase", _yes_no(result.has_upper))
        tbl.add_row("Numbers", _yes_no(result.has_digits))
        tbl.add_row("Special Characters", _yes_no(result.has_symbols))
        tbl.add_row("Alphabet Size", str(result.alphabet_size))
        tbl.add_row("Entropy", f"{result.entropy_bits:.1f} bits")
        tbl.add_row(
            "Crack Time",
            f"{crack.display} (at {crack.guesses_per_second:.0e} guesses/s)",
        )
        self._rich.print(tbl)

        if result.detected_patterns:
            self._rich.print()
            self._rich.print("[bold]Patterns Detected:[/bold]")
            for pattern in result.detected_patterns:
                self._rich.print(f"  [yellow]⚠[/yellow] {pattern.label}")

        if result.feedback:
            self._rich.print()
            self._rich.print("[bold]Feedback:[/bold]")
            for item in result.feedback:
                self._rich.print(f"  [red]•[/red] {item}")

        if result.improvements:
            self._rich.print()
            self._rich.print("[bold]Improvements:[/bold]")
            for item in result.improvements:
                self._rich.print(f"  [bright_cyan]•[/bright_cyan] {item}")
