# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for infobox fact extraction, pattern inspection and logging status

import json as jsonlib
from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from infobox_facts.config import get_config
from infobox_facts.core.models import OUTPUT_THEMES
from infobox_facts.extraction.base import ExtractionError
from infobox_facts.extraction.scanner import InfoboxScanner, ScanStats
from infobox_facts.extraction.stream import CharacterStream
from infobox_facts.persistence import FactDatabase, FanOutFactSink, MemoryFactSink, TsvFactSink
from infobox_facts.schema import PatternTables, load_schema
from infobox_facts.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_pipeline_context,
)
from infobox_facts.utils.rich_tables import (
    create_logging_status_table,
    create_patterns_table,
    create_scan_summary_table,
    print_rich_table,
)

console = Console()


def _run_scan(scanner: InfoboxScanner, input_path: Path, sink, json_output: bool) -> ScanStats:
    """Scan a dump, with a live page counter unless JSON output was requested."""
    with CharacterStream.open(input_path) as stream:
        if json_output:
            return scanner.scan(stream, sink)

        with Progress(SpinnerColumn(), TextColumn("{task.description}"), console=console, transient=True) as progress:
            task = progress.add_task(f"🔎 Scanning {input_path.name}", total=None)

            def on_page(subject: str | None) -> None:
                progress.update(task, description=f"🔎 {subject or '(untitled page)'}")

            return scanner.scan(stream, sink, on_page=on_page)


async def _persist(memory: MemoryFactSink, database_url: str) -> int:
    """Store every collected theme in the fact database."""
    db = FactDatabase(database_url)
    try:
        await db.create_tables()
        saved = 0
        for theme in OUTPUT_THEMES:
            await db.clear(theme)
            saved += await db.save_facts(theme, memory.get(theme))
        return saved
    finally:
        await db.close()


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--schema",
    "-s",
    "schema_paths",
    multiple=True,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Schema fact file (TSV); repeat to combine several",
)
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path), help="Directory for theme files")
@click.option("--database", is_flag=True, help="Also store the extracted facts in the fact database")
@click.pass_context
async def extract(ctx, input_path: Path, schema_paths: tuple[Path, ...], output: Path | None, database: bool):
    """
    🧩 Extract facts from the infoboxes of a wiki dump.

    Writes the raw relation facts, the infobox type facts and their sources
    as one TSV file per theme.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()
    output_dir = output or config.output_dir

    with with_pipeline_context("infobox_extraction", input=str(input_path)) as logger:
        try:
            schema = load_schema(*schema_paths)
            scanner = InfoboxScanner.from_schema(
                schema,
                max_environment_size=config.max_environment_size,
                generic_class=config.generic_entity_class,
            )
            memory = MemoryFactSink()
            with TsvFactSink(output_dir) as tsv:
                sink = FanOutFactSink(tsv, memory) if database else tsv
                stats = _run_scan(scanner, input_path, sink, json_output)
                theme_counts = tsv.counts()
        except (OSError, ExtractionError) as e:
            logger.error("Extraction failed", error=str(e), error_type=type(e).__name__)
            if not json_output:
                console.print(f"[red]❌ {e}[/red]")
            raise click.ClickException(str(e)) from e

        saved = await _persist(memory, config.database_url) if database else None
        logger.info("Extraction complete", output_dir=str(output_dir), saved=saved, **stats.as_dict())

    if json_output:
        click.echo(jsonlib.dumps({"stats": stats.as_dict(), "themes": theme_counts, "saved": saved}))
        return

    print_rich_table(console, create_scan_summary_table(stats.as_dict(), theme_counts))
    console.print(f"[green]📁 Facts written to {output_dir}[/green]")
    if saved is not None:
        console.print(f"[green]💾 {saved} facts saved to the database[/green]")


@click.command()
@click.option(
    "--schema",
    "-s",
    "schema_paths",
    multiple=True,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Schema fact file (TSV); repeat to combine several",
)
@click.option("--limit", type=int, help="Show only the first N attributes")
@click.pass_context
async def patterns(ctx, schema_paths: tuple[Path, ...], limit: int | None):
    """
    🧭 Show which relations each infobox attribute is mapped to.
    """
    try:
        tables = PatternTables.from_schema(load_schema(*schema_paths))
    except (OSError, ExtractionError) as e:
        raise click.ClickException(str(e)) from e

    if ctx.obj["json_output"]:
        click.echo(jsonlib.dumps({name: list(relations) for name, relations in tables.attribute_patterns.items()}))
        return

    print_rich_table(console, create_patterns_table(tables.attribute_patterns, limit))
    console.print(
        f"[cyan]{len(tables.combinations)} combination rules, "
        f"{len(tables.preferred_meanings)} preferred meanings[/cyan]"
    )


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except OSError:
        # Log directory not writable, fall back to stderr
        configure_logging(mode=LoggingMode.PRODUCTION, log_level=log_level or "INFO")


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🧩 Infobox Facts - fact extraction from wiki infoboxes

    Reads the infobox templates of a wiki dump and turns their attributes
    into typed subject-relation-object facts.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(extract)
app.add_command(patterns)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
