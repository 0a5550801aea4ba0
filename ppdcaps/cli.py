"""Command-line interface for ppdcaps."""

import json
import logging
import sys
from pathlib import Path

import click

from ppdcaps import __version__
from ppdcaps.config import get_settings
from ppdcaps.exceptions import PPDError
from ppdcaps.model_name import normalize_model
from ppdcaps.sources import CupsPPDSource, read_ppd_file
from ppdcaps.translate import translate_ppd

EXIT_FATAL = 1
EXIT_STRICT = 2


def setup_logging(level: str) -> None:
    """Set up logging configuration.

    Args:
        level: Log level string.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@click.group()
@click.version_option(version=__version__)
def main():
    """ppdcaps - translate printer PPDs into cloud print capabilities.

    Reads a PPD from a file or from CUPS and prints the capability
    descriptor (CDD) as JSON.
    """
    pass


@main.command()
@click.argument(
    "ppd_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--printer", "-p", help="Read the PPD of this CUPS printer instead of a file")
@click.option("--locale", "-l", help="Locale for display strings (default: from settings)")
@click.option("--no-vendor", is_flag=True, help="Leave out vendor-specific option groups")
@click.option("--strict", is_flag=True, help="Exit with status 2 if the PPD has errors")
@click.option("--compact", is_flag=True, help="Print JSON on a single line")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def translate(
    ppd_file: Path | None,
    printer: str | None,
    locale: str | None,
    no_vendor: bool,
    strict: bool,
    compact: bool,
    verbose: bool,
):
    """Translate a PPD into a capability descriptor.

    Diagnostics go to stderr, the descriptor JSON to stdout.
    """
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    if (ppd_file is None) == (printer is None):
        raise click.UsageError("Give either a PPD file or --printer")

    try:
        if printer:
            text = CupsPPDSource(settings.cups_server).get_ppd_text(printer)
        else:
            text = read_ppd_file(ppd_file)

        result = translate_ppd(
            text,
            locale=locale or settings.locale,
            vendor_capabilities=settings.vendor_capabilities and not no_vendor,
        )
    except PPDError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FATAL)

    for diagnostic in result.diagnostics:
        click.echo(str(diagnostic), err=True)

    output = {
        "manufacturer": result.manufacturer,
        "model": result.model,
        "printer": result.descriptor.to_cdd(),
    }
    click.echo(json.dumps(output, indent=None if compact else 2))

    if strict and result.has_errors:
        sys.exit(EXIT_STRICT)


@main.command()
@click.argument("labels", nargs=-1, required=True)
def model(labels: tuple[str, ...]):
    """Normalize printer model labels, one per line."""
    for label in labels:
        click.echo(normalize_model(label))


@main.command()
def printers():
    """List CUPS printers with their normalized model names."""
    settings = get_settings()

    try:
        printers_list = CupsPPDSource(settings.cups_server).get_printers()
    except PPDError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FATAL)

    click.echo("\n=== CUPS Printers ===\n")

    if not printers_list:
        click.echo("No printers found.")
        return

    for p in printers_list:
        marker = "* " if p["is_default"] else "  "
        click.echo(f"{marker}{p['name']} [{p['model'] or 'unknown model'}]")

    click.echo("\n(* = default printer)")


if __name__ == "__main__":
    main()
