"""CLI commands for ranking candidate batches and building feed pages."""

import logging
import sys
import uuid
from datetime import UTC, datetime
from pathlib import Path

import click
import structlog
import yaml

from vibefeed import __version__
from vibefeed.config.constants import COMPONENT_CLI
from vibefeed.config.error_hints import format_validation_error
from vibefeed.config.loader import (
    ConfigLoader,
    ConfigValidationError,
    load_ranking_config,
)
from vibefeed.config.schemas import RankingConfig
from vibefeed.feed import (
    CandidateLoadError,
    FeedBuilder,
    SortMode,
    load_candidates,
)
from vibefeed.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from vibefeed.ranker import RankableItem, TrendingRanker
from vibefeed.renderer import render_feed_page, render_ranking
from vibefeed.settings import get_settings


logger = structlog.get_logger()


def parse_now(value: str | None) -> datetime | None:
    """Parse an ISO-8601 instant; naive values are taken as UTC.

    Args:
        value: ISO-8601 string, or None.

    Returns:
        Timezone-aware datetime, or None when no value was given.

    Raises:
        click.BadParameter: If the value is not ISO-8601.
    """
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        msg = f"'{value}' is not an ISO-8601 timestamp"
        raise click.BadParameter(msg, param_hint="--now") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def _setup(json_logs: bool | None, verbose: bool) -> tuple[str, Path | None]:
    """Configure logging and return the request id and configured config path."""
    settings = get_settings()
    level = logging.DEBUG if verbose else settings.log_level_value()
    use_json = settings.json_logs if json_logs is None else json_logs
    configure_logging(level=level, json_format=use_json)

    request_id = str(uuid.uuid4())
    bind_request_context(request_id)
    return request_id, settings.config_path


def _echo_config_errors(errors: list[dict[str, str]]) -> None:
    click.echo("Configuration validation failed:", err=True)
    for error in errors:
        formatted = format_validation_error(
            location=error["loc"],
            message=error["msg"],
            error_type=error.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)


def _load_config(config_path: Path | None, request_id: str) -> RankingConfig:
    try:
        return load_ranking_config(config_path, run_id=request_id)
    except ConfigValidationError as e:
        _echo_config_errors(e.errors)
        sys.exit(1)
    except (FileNotFoundError, yaml.YAMLError) as e:
        click.echo(f"Error: cannot read configuration: {e}", err=True)
        sys.exit(1)


def _load_candidates(path: Path) -> list[RankableItem]:
    try:
        return load_candidates(path)
    except CandidateLoadError as e:
        click.echo(f"Error: {e}", err=True)
        for detail in e.errors:
            click.echo(f"  - {detail}", err=True)
        sys.exit(1)


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to ranking.yaml (default: $VIBEFEED_CONFIG or built-in defaults).",
)
now_option = click.option(
    "--now",
    "now_value",
    type=str,
    default=None,
    help="Reference instant as ISO-8601 (default: current time).",
)
json_logs_option = click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: $VIBEFEED_JSON_LOGS or true).",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Trending ranking and feed tools for the project showcase."""
    ctx.call_on_close(clear_request_context)


@cli.command()
@click.argument(
    "candidates_path",
    type=click.Path(dir_okay=False, path_type=Path),
)
@config_option
@now_option
@click.option(
    "--trending-only",
    is_flag=True,
    help="Keep only candidates passing the popularity and age thresholds.",
)
@click.option(
    "--min-popularity",
    type=click.IntRange(min=0),
    default=None,
    help="Minimum popularity count (implies --trending-only).",
)
@click.option(
    "--max-age-hours",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Maximum age in hours (implies --trending-only).",
)
@json_logs_option
@verbose_option
def rank(  # noqa: PLR0913
    candidates_path: Path,
    config_path: Path | None,
    now_value: str | None,
    trending_only: bool,
    min_popularity: int | None,
    max_age_hours: float | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Rank every candidate in CANDIDATES_PATH by trending score."""
    now = parse_now(now_value)
    request_id, env_config_path = _setup(json_logs, verbose)
    log = logger.bind(component=COMPONENT_CLI, command="rank")

    config = _load_config(config_path or env_config_path, request_id)
    candidates = _load_candidates(candidates_path)

    ranker = TrendingRanker(config=config, now=now, request_id=request_id)
    if trending_only or min_popularity is not None or max_age_hours is not None:
        result = ranker.trending(
            candidates,
            min_popularity=min_popularity,
            max_age_hours=max_age_hours,
        )
    else:
        result = ranker.rank(candidates)

    click.echo(render_ranking(result), nl=False)
    log.info("rank_command_complete", items_out=result.items_out)


@cli.command()
@click.argument(
    "candidates_path",
    type=click.Path(dir_okay=False, path_type=Path),
)
@config_option
@now_option
@click.option(
    "--sort",
    type=click.Choice([m.value for m in SortMode], case_sensitive=False),
    default=SortMode.RECENT.value,
    show_default=True,
    help="Feed ordering.",
)
@click.option(
    "--page",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="1-based page number.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Items per page (default: configured default_page_size).",
)
@click.option(
    "--total",
    type=click.IntRange(min=0),
    default=None,
    help="Total matching items in storage (default: number of candidates).",
)
@json_logs_option
@verbose_option
def feed(  # noqa: PLR0913
    candidates_path: Path,
    config_path: Path | None,
    now_value: str | None,
    sort: str,
    page: int,
    limit: int | None,
    total: int | None,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Build one feed page from the candidates in CANDIDATES_PATH."""
    now = parse_now(now_value)
    request_id, env_config_path = _setup(json_logs, verbose)
    log = logger.bind(component=COMPONENT_CLI, command="feed")

    config = _load_config(config_path or env_config_path, request_id)
    candidates = _load_candidates(candidates_path)

    builder = FeedBuilder(config=config, now=now, request_id=request_id)
    query = builder.query(sort=sort, page=page, limit=limit)
    feed_page = builder.build(candidates, query, total=total)

    click.echo(render_feed_page(feed_page), nl=False)
    log.info("feed_command_complete", items=len(feed_page.items))


@cli.command()
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    required=True,
    help="Requested page size.",
)
@config_option
def window(limit: int, config_path: Path | None) -> None:
    """Print how many recent candidates to fetch for a trending page."""
    configure_logging(json_format=False)
    config = _load_config(config_path, request_id="window")
    click.echo(str(FeedBuilder(config=config).window(limit)))


@cli.command("validate-config")
@click.argument(
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate_config(config_path: Path) -> None:
    """Validate a ranking.yaml file without ranking anything."""
    run_id = str(uuid.uuid4())
    configure_logging(json_format=False)
    bind_request_context(run_id)

    loader = ConfigLoader(run_id=run_id)
    try:
        config = loader.load(config_path)
    except (ConfigValidationError, FileNotFoundError, yaml.YAMLError):
        _echo_config_errors(loader.validation_errors)
        sys.exit(1)

    click.echo("Configuration is valid!")
    click.echo(f"  Gravity: {config.trending.gravity}")
    click.echo(f"  Age offset (hours): {config.trending.age_offset_hours}")
    click.echo(
        f"  Thresholds: min_popularity={config.thresholds.min_popularity}, "
        f"max_age_hours={config.thresholds.max_age_hours}"
    )
    click.echo(f"  Checksum: {loader.file_checksum}")


def main() -> None:
    """Console script entry point."""
    cli()
