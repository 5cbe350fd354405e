"""Command-line interface for the Dota combat log analyzer."""
import json
import logging
import click

from . import __version__
from .config.config import AppConfig, configure_logging
from .exceptions import CombatLogError
from .models import get_db_engine
from .parser import CombatLogParser
from .repository import SqlMatchRepository
from .service import MatchService

logger = logging.getLogger(__name__)


def _build_service(config: AppConfig) -> MatchService:
    engine = get_db_engine(config.to_dict())
    repository = SqlMatchRepository(engine, batch_size=config.batch_size)
    return MatchService(repository, CombatLogParser(config))


def _echo_json(rows) -> None:
    click.echo(json.dumps(rows, indent=2))


def _run(ctx, operation):
    """Run a service call and turn analyzer errors into CLI errors."""
    try:
        return operation(ctx.obj["service"])
    except CombatLogError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__)
@click.option("--db", "db_path", help="SQLite database file path", default=None)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--progress", is_flag=True, help="Show line parsing progress")
@click.pass_context
def main(ctx, db_path, verbose, progress):
    """Dota combat log analyzer CLI."""
    config = AppConfig.from_env(db_path=db_path)
    if verbose:
        config.log_level = logging.DEBUG
    if progress:
        config.show_progress = True

    configure_logging(config)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["service"] = _build_service(config)


@main.command()
@click.argument("log_file", type=click.File("r", encoding="utf-8"))
@click.pass_context
def ingest(ctx, log_file):
    """Parse a combat log file and store its events as a new match."""
    logger.info(f"Ingesting log file: {log_file.name}")
    match_id = _run(ctx, lambda service: service.ingest(log_file.read()))
    click.echo(match_id)


@main.command()
@click.argument("match_id")
@click.pass_context
def kills(ctx, match_id):
    """Show the number of kills per hero."""
    rows = _run(ctx, lambda service: service.kills(match_id))
    _echo_json([{"hero": row.hero, "kills": row.kills} for row in rows])


@main.command()
@click.argument("match_id")
@click.argument("hero")
@click.pass_context
def items(ctx, match_id, hero):
    """Show the items bought by a hero."""
    rows = _run(ctx, lambda service: service.items(match_id, hero))
    _echo_json([{"item": row.item, "timestamp": row.timestamp} for row in rows])


@main.command()
@click.argument("match_id")
@click.argument("hero")
@click.pass_context
def spells(ctx, match_id, hero):
    """Show how often a hero cast each spell."""
    rows = _run(ctx, lambda service: service.spells(match_id, hero))
    _echo_json([{"spell": row.spell, "casts": row.casts} for row in rows])


@main.command()
@click.argument("match_id")
@click.argument("hero")
@click.pass_context
def damage(ctx, match_id, hero):
    """Show the damage a hero received, grouped by attacker."""
    rows = _run(ctx, lambda service: service.damage(match_id, hero))
    _echo_json([
        {
            "target": row.other_actor,
            "damageInstances": row.damage_instances,
            "totalDamage": row.total_damage,
        }
        for row in rows
    ])


@main.command()
@click.pass_context
def info(ctx):
    """List the matches stored in the database."""
    records = ctx.obj["service"].repository.list_matches()

    if not records:
        click.echo("No matches found in database")
        return

    click.echo(f"Found {len(records)} matches in database:")
    for record in records:
        click.echo(f"  {record.match_id}  {record.created_at:%Y-%m-%d %H:%M:%S}  {record.event_count} events")


if __name__ == "__main__":
    main()
