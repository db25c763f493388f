"""CLI application entry point for glyphcarve.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from glyphcarve import __version__
from glyphcarve.cli.output import (
    console,
    create_progress,
    print_error,
    print_glyph_errors,
    print_header,
    print_job_info,
    print_step,
    print_success,
)
from glyphcarve.config import (
    CarveConfig,
    GlyphCarveSettings,
    LayoutConfig,
    LoggingConfig,
    RingConfig,
)
from glyphcarve.core.pipeline import TextCarver
from glyphcarve.exceptions import ExportError, FontLoadError, GlyphCarveError
from glyphcarve.io import get_output_path
from glyphcarve.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphcarve",
    help="Carve the outlines of a text string out of flat slabs and export an OBJ mesh.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphcarve[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def carve(
    text: Annotated[
        str,
        typer.Argument(
            help="Text to carve",
            show_default=False,
        ),
    ],
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="Path to TTF/OTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output mesh path (default: {text}.obj)",
        ),
    ] = None,
    depth: Annotated[
        int,
        typer.Option(
            "--depth",
            "-d",
            help="Maximum quad subdivision depth (1-20)",
            min=1,
            max=20,
        ),
    ] = 8,
    scale: Annotated[
        float,
        typer.Option(
            "--scale",
            "-s",
            help="Scale from font units to model units",
            min=0.0001,
            max=10.0,
        ),
    ] = 0.1,
    split: Annotated[
        bool,
        typer.Option(
            "--split/--no-split",
            help="Split glyphs at their horizontal midpoint before carving",
        ),
    ] = True,
    tilt: Annotated[
        float,
        typer.Option(
            "--tilt",
            help="Rotate each glyph about the z axis by this many radians",
            min=-1.5,
            max=1.5,
        ),
    ] = 0.0,
    ring: Annotated[
        bool,
        typer.Option(
            "--ring",
            help="Build a ring and wrap the carved text around its outer wall",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Carve and report without writing the mesh",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Carve the glyphs of TEXT and write them as a Wavefront OBJ mesh.

    Each glyph is split at its horizontal midpoint and the area around each
    half is filled with triangles and quads, leaving the letter shapes empty.

    Example:
        glyphcarve Hello --font Roboto-Regular.ttf

    This will create Hello.obj in the current directory.

    With --ring the carved text is wrapped around a ring mesh instead:
        glyphcarve Hello --font Roboto-Regular.ttf --ring
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not text:
        print_error("Nothing to carve", details="TEXT must contain at least one character.")
        raise typer.Exit(code=1)

    # Validate font file exists
    if not font.exists():
        print_error(
            f"Font file not found: {font}",
            details=f"The file '{font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not font.is_file():
        print_error(
            f"Font path is not a file: {font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid options: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    settings = GlyphCarveSettings(
        carve=CarveConfig(max_depth=depth),
        layout=LayoutConfig(scale=scale, split=split, tilt=tilt),
        ring=RingConfig(enabled=ring),
        logging=LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        ),
    )

    output_path = None if dry_run else (output or get_output_path(text))

    if not quiet:
        print_header(__version__)
        print_step("Carving")
        print_job_info(
            font_path=str(font),
            text=text,
            depth=depth,
            scale=scale,
            split=split,
            ring=ring,
            tilt=tilt,
        )

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    carver = TextCarver(settings, logger=logger)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task(f"Carving {len(text)} characters", total=len(text))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                stats = carver.process(
                    font_path=font,
                    text=text,
                    output_path=output_path,
                    dry_run=dry_run,
                    progress_callback=update_progress,
                )
        else:
            stats = carver.process(
                font_path=font,
                text=text,
                output_path=output_path,
                dry_run=dry_run,
            )

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1) from e
    except ExportError as e:
        print_error(f"Could not write mesh: {e.reason}")
        raise typer.Exit(code=1) from e
    except GlyphCarveError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not quiet:
        print_success(
            output_path=str(output_path) if output_path is not None else None,
            total_time_s=stats.duration_seconds,
            carved=stats.carved_count,
            polygons=stats.polygons_emitted,
            unsplit=stats.unsplit_count,
            errors=stats.error_count,
        )
        print_glyph_errors(stats.errors, verbose)

    if stats.carved_count == 0 and stats.error_count > 0:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
