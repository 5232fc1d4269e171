# ABOUTME: Tests for the rich table builders used by the command line
# ABOUTME: Renders tables into a recording console and checks the visible text

from rich.console import Console

from infobox_facts.utils.rich_tables import (
    create_logging_status_table,
    create_patterns_table,
    create_scan_summary_table,
    print_rich_table,
)


def _render(table) -> str:
    console = Console(record=True, width=120)
    print_rich_table(console, table)
    return console.export_text()


def test_scan_summary_table():
    stats = {
        "pages": 2,
        "templates": 3,
        "skipped_templates": 1,
        "type_facts": 1,
        "relation_facts": 4,
        "unknown_relation_values": 2,
    }
    text = _render(create_scan_summary_table(stats, {"infoboxTypes": 1, "infoboxFactsVeryDirty": 4}))

    assert "Extraction Summary" in text
    assert "Relation facts" in text
    assert "Values for unknown relations" in text
    assert "infoboxFactsVeryDirty" in text


def test_patterns_table_limit():
    patterns = {"born": ("<wasBornOnDate>",), "spouse": ("<hasPartner>", "<isMarriedTo>"), "motto": ("<hasMotto>",)}

    text = _render(create_patterns_table(patterns, limit=2))

    assert "born" in text
    assert "motto" in text
    assert "spouse" not in text


def test_patterns_table_joins_relations():
    text = _render(create_patterns_table({"spouse": ("<hasPartner>", "<isMarriedTo>")}))
    assert "<hasPartner>, <isMarriedTo>" in text


def test_logging_status_table():
    status = {
        "mode": "production",
        "log_directory": None,
        "log_files": {"main": None, "json": None, "errors": None},
        "third_party_suppressed": ["sqlalchemy", "aiosqlite"],
    }
    text = _render(create_logging_status_table(status))

    assert "Logging Configuration" in text
    assert "Production" in text
    assert "sqlalchemy, aiosqlite" in text
