# ABOUTME: Rich table builders for the command line: scan summaries, patterns and logging status
# ABOUTME: Every builder returns a Table; print_rich_table handles spacing

from typing import Any

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column key-value table.

    Args:
        title: Table title
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_scan_summary_table(stats: dict[str, int], theme_counts: dict[str, int]) -> Table:
    """Summarize a finished scan: what was seen and what each theme received.

    Args:
        stats: ScanStats.as_dict() of the run
        theme_counts: Facts written per theme name
    """
    data = {
        "📄 Pages": str(stats.get("pages", 0)),
        "🧩 Infoboxes": str(stats.get("templates", 0)),
        "⏭️ Skipped (no title)": str(stats.get("skipped_templates", 0)),
        "🏷️ Type facts": str(stats.get("type_facts", 0)),
        "🔗 Relation facts": str(stats.get("relation_facts", 0)),
        "❓ Values for unknown relations": str(stats.get("unknown_relation_values", 0)),
    }
    for theme, count in sorted(theme_counts.items()):
        data[f"📚 {theme}"] = str(count)

    return create_key_value_table(title="📊 Extraction Summary", data=data, title_style="bold green")


def create_patterns_table(patterns: dict[str, tuple[str, ...]], limit: int | None = None) -> Table:
    """List attribute -> relation patterns, optionally only the first `limit` attributes."""
    table = Table(
        title="[bold cyan]🧭 Infobox Patterns[/bold cyan]",
        box=ROUNDED,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
    )
    table.add_column("Attribute", style="bold blue")
    table.add_column("Relations", style="green")

    names = sorted(patterns)
    for name in names[:limit] if limit else names:
        table.add_row(name, ", ".join(patterns[name]))
    return table


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    # Add log files if they exist
    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing and style.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()  # Add spacing before
    console.print(table)
    console.print()  # Add spacing after
