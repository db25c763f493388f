"""Logging utilities for Glyphcarve."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, removed again on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class CarveStats:
    """Statistics from a carving run."""

    carved_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    unsplit_count: int = 0
    polygons_emitted: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and, optionally, a file.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphcarve")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level if log_file else console_level,
    )

    return logger


class CarveLogger:
    """Logger for tracking per-glyph carving progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = CarveStats()

    def log_glyph_start(self, char: str, glyph_name: str) -> None:
        """Log start of glyph carving."""
        self._logger.debug("Carving glyph", char=char, glyph=glyph_name)

    def log_glyph_complete(
        self,
        glyph_name: str,
        polygon_count: int,
        duration_ms: float,
    ) -> None:
        """Log a carved glyph."""
        self._logger.info(
            "Glyph carved",
            glyph=glyph_name,
            polygons=polygon_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.carved_count += 1
        self._stats.polygons_emitted += polygon_count

    def log_glyph_skipped(self, glyph_name: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=glyph_name, reason=reason)
        self._stats.skipped_count += 1

    def log_split_fallback(self, glyph_name: str, reason: str) -> None:
        """Log a glyph carved without splitting."""
        self._logger.warning("Glyph carved unsplit", glyph=glyph_name, reason=reason)
        self._stats.unsplit_count += 1

    def log_glyph_error(
        self,
        glyph_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log glyph carving error."""
        self._logger.error(
            "Glyph carving failed",
            glyph=glyph_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_name, str(error)))

    def log_split(self, glyph_name: str, left_pieces: int, right_pieces: int) -> None:
        """Log split results."""
        self._logger.debug(
            "Glyph split",
            glyph=glyph_name,
            left=left_pieces,
            right=right_pieces,
        )

    @property
    def stats(self) -> CarveStats:
        """Get current carving statistics."""
        return self._stats
