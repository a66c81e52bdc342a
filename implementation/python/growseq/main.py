"""
growseq Main module - command line entry point
"""

import logging
import time
from typing import Any

import typer

from growseq.features import Feature, FeatureRegistry, OperationResult
from growseq.version import get_version

# Module-level logger
logger = logging.getLogger("growseq.main")


# Create CLI app with Typer
app = typer.Typer(
    name="growseq",
    help="growseq - growable contiguous sequence container",
    add_completion=False,
)


# ----------------- Helper Functions -----------------


class ElapsedMsFormatter(logging.Formatter):
    """Prefix each record with milliseconds elapsed since the CLI started."""

    WIDTH = 8

    def __init__(self, fmt: str):
        super().__init__(fmt)
        self.start_time = time.monotonic()

    def format(self, record: logging.LogRecord) -> str:
        elapsed_ms = int((time.monotonic() - self.start_time) * 1000)
        record.elapsed = f"[{elapsed_ms:>{self.WIDTH}}ms]"
        return super().format(record)


VERBOSE_LEVEL = 15  # Between INFO (20) and DEBUG (10)
logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


def setup_logging(debug: bool = False, verbose: bool = False) -> None:
    """Route growseq log records to stderr at the level the CLI flags ask for"""
    level = logging.DEBUG if debug else VERBOSE_LEVEL if verbose else logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(ElapsedMsFormatter("%(elapsed)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


def _feature_or_exit(feature_name: str) -> Feature:
    feature = FeatureRegistry.get_feature(feature_name)
    if not feature:
        logger.error("Unknown feature: %s", feature_name)
        raise typer.Exit(code=1)
    return feature


def _handle_cli_result(feature_name: str, result: OperationResult) -> Any:
    if not result.success:
        logger.error("Operation failed: %s", result.error or "Unknown error")
        raise typer.Exit(code=1)
    logger.log(VERBOSE_LEVEL, "Feature %s executed successfully", feature_name)
    return result.data


def handle_cli_feature(feature_name: str, **kwargs: Any) -> Any:
    """Run a registered feature and return its data, exiting on failure"""
    feature = _feature_or_exit(feature_name)
    try:
        result = feature.handler(**kwargs)
    except Exception as e:
        logger.exception("Unexpected error")
        raise typer.Exit(code=1) from e
    return _handle_cli_result(feature_name, result)


# ----------------- CLI Commands -----------------


@app.command()
def version() -> None:
    """Show the growseq version"""
    setup_logging(False)
    data = handle_cli_feature("version")
    print(f"growseq version: {data.get('version', 'unknown')}")


@app.command()
def profile(
    count: int = typer.Argument(..., help="Number of integers to append"),
    reserve: int = typer.Option(0, "--reserve", min=0, help="Capacity to reserve before appending"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging (between info and debug)"),
) -> None:
    """Append COUNT integers and report how storage grew"""
    setup_logging(debug, verbose)
    logger.debug("growseq version: %s", get_version())

    data = handle_cli_feature("profile", count=count, reserve_capacity=reserve)
    print(f"size:          {data['size']}")
    print(f"capacity:      {data['capacity']}")
    print(f"reallocations: {data['reallocations']}")


if __name__ == "__main__":
    app()
