"""Rich console output helpers for the CLI.

This module provides user-friendly console output using the Rich library
with progress bars and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for glyph carving.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glyphcarve[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_job_info(
    font_path: str,
    text: str,
    depth: int,
    scale: float,
    split: bool,
    ring: bool = False,
    tilt: float = 0.0,
) -> None:
    """Print what is about to be carved.

    Args:
        font_path: Path to the font file
        text: Text being carved
        depth: Maximum subdivision depth
        scale: Font units to model units scale
        split: Whether glyphs are split at their midpoint
        ring: Whether the text is wrapped around a ring
        tilt: Glyph rotation in radians
    """
    line = Text("  ")
    line.append(font_path)
    console.print(line)

    text_line = Text("  ")
    text_line.append(repr(text), style="bold")
    text_line.append(f" {SYM_DOT} {len(text)} characters")
    console.print(text_line)

    split_str = "split" if split else "unsplit"
    details = f"  depth {depth} {SYM_DOT} scale {scale:g} {SYM_DOT} {split_str}"
    if ring:
        details += f" {SYM_DOT} ring"
    elif tilt:
        details += f" {SYM_DOT} tilt {tilt:g}"
    console.print(details)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str | None,
    total_time_s: float,
    carved: int,
    polygons: int,
    unsplit: int,
    errors: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to the mesh, None for a dry run
        total_time_s: Total carving time in seconds
        carved: Number of glyphs carved
        polygons: Total number of polygons emitted
        unsplit: Number of glyphs carved without splitting
        errors: Number of errors encountered
    """
    time_str = _format_time(total_time_s)

    title = "Dry run complete" if output_path is None else "Complete"
    console.print(f"\n[bold green]{SYM_OK} {title}[/bold green] in {time_str}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {carved} glyphs {SYM_DOT} {polygons:,} polygons {SYM_DOT} "
        f"{unsplit} unsplit {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )


def print_glyph_errors(errors: list[tuple[str, str]], verbose: bool) -> None:
    """List the glyphs that failed to carve.

    Args:
        errors: (glyph name, message) pairs
        verbose: Whether to show the messages
    """
    for name, message in errors:
        line = Text(f"  {SYM_ERR} ")
        line.append(name, style="red")
        if verbose:
            line.append(f" {SYM_DOT} {message}")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
