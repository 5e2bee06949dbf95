"""
BenriQR - Command Line Interface
==================================
Generate QR codes for contact information.

Usage:
    benriqr card.json > card.svg
    benriqr contacts.xlsx "Team" --lang en -o team.html
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from benri_qr.config import get_settings
from benri_qr.errors import BenriQRException, ConfigError, OutputError, UnsupportedFormatError
from benri_qr.logging_setup import setup_logging, get_logger
from benri_qr.pipeline import RenderOptions, SINGLE_MODE, detect_mode, render_file
from benri_qr.version import __version__


ABOUT = """Generate QR codes for contact information.

Input file is JSON (one record, SVG output) or xlsx (one record per row,
HTML output) with the following fields:
Name, Reading, TEL, EMail, Memo, Birthday, Address, URL, Nickname.
Any fields but Name are optional."""


# ============================================================================
# CLI APP
# ============================================================================

app = typer.Typer(
    name="benriqr",
    help=ABOUT,
    add_completion=False
)

err_console = Console(stderr=True)
logger = get_logger("cli")


def _version_callback(value: bool):
    if value:
        typer.echo(f"benriqr {__version__}")
        raise typer.Exit()


def _fail(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def _configure_logging(settings, verbose: bool) -> None:
    try:
        setup_logging(
            log_level="DEBUG" if verbose else settings.log_level,
            log_to_file=settings.log_to_file,
            log_dir=settings.log_dir,
            log_format=settings.log_format,
        )
    except OSError as e:
        raise ConfigError(
            f"Cannot open log file in {settings.log_dir}: {e.strerror or e}",
            code="LOG_SETUP_FAILED",
            details={"log_dir": str(settings.log_dir)}
        ) from e


def _write_output(document: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(document, nl=False)
        return

    try:
        output.write_text(document, encoding="utf-8")
    except OSError as e:
        raise OutputError(
            f"Cannot write {output}: {e.strerror or e}",
            code="OUTPUT_FAILED",
            details={"path": str(output)}
        ) from e


# ============================================================================
# MAIN COMMAND
# ============================================================================

@app.command()
def main(
    input: Path = typer.Argument(
        ...,
        help="Input file, json or xlsx"
    ),
    title: Optional[str] = typer.Argument(
        None,
        help="Html title (default: input file name)"
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        min=1,
        help="Minimum width [default: 128]"
    ),
    height: Optional[int] = typer.Option(
        None,
        "--height",
        min=1,
        help="Minimum height [default: 128]"
    ),
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        help="Html lang [default: ja]"
    ),
    light: Optional[str] = typer.Option(
        None,
        "--light",
        help="Background color [default: transparent]"
    ),
    dark: Optional[str] = typer.Option(
        None,
        "--dark",
        help="Module color [default: black]"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write to file instead of stdout"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
):
    """Generate QR codes for contact information."""
    try:
        settings = get_settings()
        _configure_logging(settings, verbose)

        mode = detect_mode(input)
        options = RenderOptions.from_settings(
            settings,
            width=width,
            height=height,
            lang=lang,
            light=light,
            dark=dark,
            title=title,
        )
        document = render_file(input, options)
        if mode == SINGLE_MODE:
            document += "\n"
        _write_output(document, output)

    except UnsupportedFormatError as e:
        _fail(e.message)

    except BenriQRException as e:
        logger.debug("Conversion failed", extra_data=e.to_dict())
        _fail(f"Error during {e.stage}: {e.message}")


if __name__ == "__main__":
    app()


__all__ = [
    "app",
]
