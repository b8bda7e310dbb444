"""Command-line interface for speedline."""

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Config
from .errors import SpeedlineError
from .frame import compute_histograms
from .timeline import extract_frames_from_timeline

# Load environment variables
load_dotenv()

# Configure structlog with log level filtering
def filter_by_level(logger, method_name, event_dict):
    """Filter out debug logs unless DEBUG environment variable is set."""
    if os.getenv("DEBUG", "").lower() in ("1", "true", "yes"):
        return event_dict

    if event_dict.get("level") == "debug":
        raise structlog.DropEvent

    return event_dict

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        filter_by_level,
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    cache_logger_on_first_use=True,
)

console = Console()
logger = structlog.get_logger()


def _dark_bright_mass(histogram, threshold: int = 128) -> tuple[float, float]:
    """Share of channel samples below / at-or-above the threshold."""
    total = sum(sum(channel) for channel in histogram)
    if total == 0:
        return 0.0, 0.0
    dark = sum(sum(channel[:threshold]) for channel in histogram)
    return dark / total, (total - dark) / total


@click.group()
@click.version_option(version=__version__)
def main():
    """speedline - screenshot timelines from DevTools traces."""
    pass


@main.command()
@click.argument("trace", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--time-origin", type=float, help="Time origin in trace microseconds")
@click.option("--histograms", is_flag=True, help="Compute per-frame histograms")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to settings JSON")
def frames(trace: Path, time_origin: Optional[float], histograms: bool, as_json: bool,
           config_path: Optional[Path]):
    """List the screenshot frames of a trace."""
    async def run():
        config = Config(config_path=config_path)
        result = await extract_frames_from_timeline(trace, time_origin=time_origin, config=config)
        hists = await compute_histograms(result.frames) if histograms else None
        return result, hists

    try:
        result, hists = asyncio.run(run())
    except (SpeedlineError, OSError, ValueError) as e:
        logger.error("extraction_failed", trace=str(trace), error=str(e))
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if as_json:
        payload = result.to_dict()
        if hists is not None:
            for entry, hist in zip(payload["frames"], hists):
                entry["histogram"] = [list(channel) for channel in hist]
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Frames in {trace.name}")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Timestamp (ms)", style="green")
    table.add_column("Offset (ms)", style="green", justify="right")
    table.add_column("Size", justify="right")
    if hists is not None:
        table.add_column("Dark", justify="right")
        table.add_column("Bright", justify="right")

    for index, frame in enumerate(result.frames):
        width, height = frame.get_image_size()
        row = [
            str(index),
            f"{frame.get_timestamp():.3f}",
            f"{frame.get_timestamp() - result.start_ts:.1f}",
            f"{width}x{height}",
        ]
        if hists is not None:
            dark, bright = _dark_bright_mass(hists[index])
            row.extend([f"{dark:.1%}", f"{bright:.1%}"])
        table.add_row(*row)

    console.print(table)
    console.print(
        f"start_ts={result.start_ts:.3f} end_ts={result.end_ts:.3f} "
        f"duration={result.end_ts - result.start_ts:.1f} ms"
    )


if __name__ == "__main__":
    main()
