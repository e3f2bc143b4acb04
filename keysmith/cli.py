"""
Keysmith CLI
=============

Click-based command-line interface for password generation and
strength analysis.

Usage::

    python -m keysmith generate --length 20 --count 5
    python -m keysmith generate --no-symbols --exclude-similar
    python -m keysmith analyze "Tr0ub4dor&3"
    python -m keysmith --output json analyze        # prompts, input hidden

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from shared.config import InvalidConfigError, KeysmithConfig
from shared.console import KeysmithConsole
from shared.logger import KeysmithLogger

from keysmith import __version__
from keysmith.core.engine import KeysmithEngine
from keysmith.core.errors import ConfigError
from keysmith.core.models import GenerationOptions
from keysmith.output.console import KeysmithConsoleOutput
from keysmith.output.report import KeysmithReportGenerator

# Exit status for bad configuration or rejected generation requests,
# matching click's usage errors.
_EXIT_CONFIG_ERROR = 2


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a Keysmith configuration file (TOML).",
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
    help="Write the JSON analysis report to this file.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress the banner and log output.",
)
@click.version_option(__version__, prog_name="keysmith")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """Keysmith -- password generation and strength analysis."""
    ctx.ensure_object(dict)

    # Keep stdout clean for JSON consumers.
    console = KeysmithConsole(quiet=quiet, stderr=output == "json")
    ctx.obj["console"] = console

    try:
        keysmith_config = KeysmithConfig.load(config)
    except InvalidConfigError as exc:
        _fail(ctx, exc)
        return
    settings = keysmith_config.global_settings

    logger = KeysmithLogger(
        "engine",
        log_level=settings.effective_log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
        console_output=not quiet,
    )

    ctx.obj["config"] = keysmith_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["engine"] = KeysmithEngine(keysmith_config, logger=logger)
    ctx.obj["display"] = KeysmithConsoleOutput(console)
    ctx.obj["reporter"] = KeysmithReportGenerator(version=__version__)

    if not quiet and output == "console":
        console.banner(version=__version__)


def _fail(ctx: click.Context, exc: Exception) -> None:
    ctx.obj["console"].error(str(exc))
    ctx.exit(_EXIT_CONFIG_ERROR)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.option("--length", "-l", type=int, default=None, help="Password length.")
@click.option("--count", "-n", type=int, default=None,
              help="Number of passwords to generate "
                   "[default: generator.default_bulk_count].")
@click.option("--upper/--no-upper", default=True, help="Include A-Z.")
@click.option("--lower/--no-lower", default=True, help="Include a-z.")
@click.option("--digits/--no-digits", default=True, help="Include 0-9.")
@click.option("--symbols/--no-symbols", default=True, help="Include punctuation.")
@click.option("--exclude-similar", is_flag=True, default=False,
              help="Drop look-alike characters (i l 1 L o 0 O).")
@click.option("--exclude-ambiguous", is_flag=True, default=False,
              help="Drop brackets, quotes and similar punctuation.")
@click.pass_context
def generate(
    ctx: click.Context,
    length: Optional[int],
    count: Optional[int],
    upper: bool,
    lower: bool,
    digits: bool,
    symbols: bool,
    exclude_similar: bool,
    exclude_ambiguous: bool,
) -> None:
    """Generate cryptographically secure passwords.

    Passwords are printed to stdout only; they are never written to a
    report file.
    """
    engine: KeysmithEngine = ctx.obj["engine"]
    console: KeysmithConsole = ctx.obj["console"]

    options = GenerationOptions(
        length=length if length is not None else engine.config.generator.default_length,
        include_upper=upper,
        include_lower=lower,
        include_digits=digits,
        include_symbols=symbols,
        exclude_similar=exclude_similar,
        exclude_ambiguous=exclude_ambiguous,
    )

    try:
        alphabet = engine.build_alphabet(options)
        passwords = engine.generate_many(options, count)
    except ConfigError as exc:
        _fail(ctx, exc)
        return

    rating = engine.entropy_rating(alphabet.entropy_bits(options.length))

    if ctx.obj["output_file"]:
        console.warning("Generated passwords are never written to files; ignoring --output-file.")

    if ctx.obj["output_format"] == "json":
        click.echo(json.dumps(
            {
                "length": options.length,
                "alphabet_size": alphabet.size,
                "entropy_bits": round(alphabet.entropy_bits(options.length), 2),
                "rating": rating,
                "passwords": [p.value for p in passwords],
            },
            indent=2,
        ))
    else:
        ctx.obj["display"].display_passwords(passwords, alphabet, rating)


@cli.command()
@click.argument("password", required=False)
@click.pass_context
def analyze(ctx: click.Context, password: Optional[str]) -> None:
    """Analyse password strength, patterns and crack time.

    When PASSWORD is omitted it is read from a hidden prompt, which keeps
    it out of shell history.
    """
    engine: KeysmithEngine = ctx.obj["engine"]

    if password is None:
        password = click.prompt(
            "Password", hide_input=True, default="", show_default=False, err=True
        )

    analysis = engine.analyze(password)
    result = engine.build_report(analysis)
    reporter: KeysmithReportGenerator = ctx.obj["reporter"]
    output_file = ctx.obj["output_file"]

    if output_file:
        path = reporter.generate_json(result, Path(output_file))
        ctx.obj["console"].success(f"JSON report saved to: {path}")

    if ctx.obj["output_format"] == "json":
        if not output_file:
            click.echo(reporter.render_json(result))
    else:
        display: KeysmithConsoleOutput = ctx.obj["display"]
        display.display_analysis(analysis)
        ctx.obj["console"].findings_table(result.findings)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Keysmith CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
