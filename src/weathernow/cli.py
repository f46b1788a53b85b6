"""CLI: run one fetch cycle and print the published forecast state."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import uuid

from rich.console import Console
from rich.table import Table

from .catalog import describe
from .config import Settings, load_settings
from .exceptions import ConfigError, JournalError
from .forecast.client import ForecastClient
from .formatting import (
    format_date,
    format_hourly_time,
    format_temperature,
    format_time,
    wind_direction,
)
from .journal import JournalWriter
from .location.configured import ConfiguredLocationPlatform
from .location.resolver import LocationResolver
from .log_setup import setup_logger
from .models import Coordinate, OrchestratorState
from .orchestrator import WeatherOrchestrator

# Rich has no plain "orange"/"purple" style names matching the catalog keys.
_COLOR_STYLES = {
    "yellow": "yellow",
    "orange": "dark_orange",
    "gray": "grey62",
    "blue": "blue",
    "cyan": "cyan",
    "purple": "magenta",
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Fetch the current, hourly and daily forecast from Open-Meteo."
    )
    parser.add_argument(
        "--default-location",
        action="store_true",
        help="Skip location lookup and use DEFAULT_LATITUDE/DEFAULT_LONGITUDE.",
    )
    parser.add_argument(
        "--hours",
        type=int,
        default=None,
        help="Number of hourly rows to print (overrides HOURLY_MAX_PRINT).",
    )
    return parser.parse_args(argv)


def _styled(text: str, code: int) -> str:
    style = _COLOR_STYLES.get(describe(code).color_key, "yellow")
    return f"[{style}]{text}[/{style}]"


def _print_state(console: Console, state: OrchestratorState, max_hours: int) -> None:
    if state.location is not None:
        loc = state.location
        place = ", ".join(part for part in (loc.name, loc.region, loc.country) if part)
        console.print(
            f"Location: {place} "
            f"({loc.coordinate.latitude:.4f}, {loc.coordinate.longitude:.4f})"
        )

    current = state.current
    if current is not None:
        condition = current.weather[0]
        console.print(
            f"Now: {format_temperature(current.temp)} "
            f"(feels like {format_temperature(current.feels_like)}) "
            f"{_styled(condition.description, condition.code)} | "
            f"humidity {current.humidity}% | pressure {current.pressure} hPa | "
            f"wind {current.wind_speed:g} {wind_direction(current.wind_deg)} | "
            f"sunrise {format_time(current.sunrise)} sunset {format_time(current.sunset)}"
        )

    if state.hourly:
        table = Table(title="Next Hours")
        table.add_column("Time")
        table.add_column("Temp")
        table.add_column("Precip %")
        table.add_column("Wind")
        table.add_column("Conditions", overflow="fold")
        for point in state.hourly[:max_hours]:
            condition = point.weather[0]
            table.add_row(
                format_hourly_time(point.dt),
                format_temperature(point.temp),
                f"{point.pop * 100:.0f}",
                f"{point.wind_speed:g} {wind_direction(point.wind_deg)}",
                _styled(condition.description, condition.code),
            )
        console.print(table)

    if state.daily:
        table = Table(title="7-Day Forecast")
        table.add_column("Day")
        table.add_column("Low")
        table.add_column("High")
        table.add_column("Precip %")
        table.add_column("UV")
        table.add_column("Conditions", overflow="fold")
        for day in state.daily:
            condition = day.weather[0]
            table.add_row(
                format_date(day.dt),
                format_temperature(day.temp.min),
                format_temperature(day.temp.max),
                f"{day.pop * 100:.0f}",
                f"{day.uvi:g}",
                _styled(condition.description, condition.code),
            )
        console.print(table)


async def run_cycle(
    settings: Settings,
    *,
    use_default_location: bool,
    journal: JournalWriter,
    logger: logging.Logger,
) -> OrchestratorState:
    """Build the client stack, run one fetch cycle and return the final state."""
    resolver = LocationResolver(ConfiguredLocationPlatform(settings), logger)
    default_coordinate = Coordinate(
        latitude=settings.default_latitude, longitude=settings.default_longitude
    )

    async with ForecastClient(settings=settings, logger=logger) as forecast_client:
        orchestrator = WeatherOrchestrator(
            resolver,
            forecast_client,
            logger=logger,
            default_coordinate=default_coordinate,
        )
        orchestrator.subscribe(journal.record_state)
        if use_default_location:
            await orchestrator.load_with_default_location()
        else:
            await orchestrator.request_location()
        return orchestrator.state


def main(argv: list[str] | None = None) -> int:
    """Run one fetch cycle and print the result."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    session_id = uuid.uuid4().hex[:12]
    journal: JournalWriter | None = None

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)

    if args.hours is not None and args.hours <= 0:
        logger.error("--hours must be > 0 when provided.")
        return 2

    try:
        journal = JournalWriter(journal_dir=settings.journal_dir, session_id=session_id)
        journal.write_event(
            event_type="startup",
            payload=settings.safe_summary(),
            metadata={"session_id": session_id},
        )
    except JournalError as exc:
        logger.error("Failed to initialize journal: %s", exc)
        return 3

    exit_code = 0
    try:
        state = asyncio.run(
            run_cycle(
                settings,
                use_default_location=args.default_location,
                journal=journal,
                logger=logger,
            )
        )
        if state.error_message:
            exit_code = 4
            console.print(f"[red]{state.error_message}[/red]")
        _print_state(console, state, max_hours=args.hours or settings.hourly_max_print)
    except JournalError as exc:
        exit_code = 3
        logger.error("Journal write failed: %s", exc)
    except Exception as exc:  # pragma: no cover
        exit_code = 99
        logger.exception("Unexpected failure: %s", exc)
        try:
            journal.write_event(
                "run_failure_unhandled",
                payload={"error": str(exc), "type": type(exc).__name__},
                metadata={"session_id": session_id},
            )
        except JournalError:
            logger.error("Failed to write run_failure_unhandled event to journal.")
    finally:
        if journal is not None:
            try:
                journal.write_event(
                    "shutdown",
                    payload={"exit_code": exit_code},
                    metadata={"session_id": session_id},
                )
            except JournalError:
                logger.error("Failed to write shutdown event to journal.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
