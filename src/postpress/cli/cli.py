"""CLI entrypoint: Typer app definition, logging setup, and command registration"""

import logging
import os
from typing import Annotated

import typer

from postpress.cli.commands import build_cmd, check_cmd, init_cmd, render_cmd


LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]

logger = logging.getLogger(__name__)

app = typer.Typer(name="postpress", no_args_is_help=True, help="Markdown post to HTML page publishing pipeline")


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("POSTPRESS_LOG_LEVEL")
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


@app.callback()
def main(
    log_level: Annotated[str, typer.Option("--log-level", help=f"One of: {', '.join(LOG_LEVELS)}")] = "warning",
    ):
    """Markdown post to HTML page publishing pipeline."""
    _configure_logging(log_level)


app.command(name="build")(build_cmd)
app.command(name="render")(render_cmd)
app.command(name="check")(check_cmd)
app.command(name="init")(init_cmd)
