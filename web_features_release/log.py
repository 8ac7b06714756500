"""Operator-facing log output.

Messages render as ``level: message`` on stderr with the level name coloured
by click, so they stay readable next to the streamed npm and git output.
"""

from __future__ import annotations

import logging

import click

logger = logging.getLogger("web_features_release")

LEVEL_COLORS = {
    logging.DEBUG: "blue",
    logging.INFO: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class ClickHandler(logging.Handler):
    """Logging handler that writes through click.echo."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = record.levelname.lower()
            if level == "warning":
                level = "warn"
            color = LEVEL_COLORS.get(record.levelno)
            prefix = click.style(level, fg=color)
            click.echo(f"{prefix}: {self.format(record)}", err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False) -> None:
    """Attach the click handler once and set the threshold."""
    if not any(isinstance(h, ClickHandler) for h in logger.handlers):
        logger.addHandler(ClickHandler())
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
