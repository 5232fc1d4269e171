# ABOUTME: Loads schema facts from tab-separated fact files into a SchemaSnapshot
# ABOUTME: Accepts "subject relation object" lines, optionally prefixed by a fact id column

from collections.abc import Iterable, Iterator
from pathlib import Path

from infobox_facts.core.models import Fact
from infobox_facts.extraction.base import SchemaLoadError
from infobox_facts.schema.snapshot import SchemaSnapshot
from infobox_facts.utils.logging import get_logger

logger = get_logger(__name__)


def parse_fact_line(line: str, line_number: int = 0) -> Fact | None:
    """Parse one TSV line into a fact.

    Blank lines and lines starting with '#' yield None.

    Raises:
        SchemaLoadError: If the line has fewer than three columns
    """
    line = line.rstrip("\r\n")
    if not line.strip() or line.lstrip().startswith("#"):
        return None
    columns = line.split("\t")
    if len(columns) == 3:
        subject, relation, obj = columns
    elif len(columns) >= 4:
        subject, relation, obj = columns[1:4]
    else:
        raise SchemaLoadError(f"Line {line_number}: expected at least 3 tab-separated columns, got {len(columns)}")
    subject, relation, obj = subject.strip(), relation.strip(), obj.strip()
    if not subject or not relation or not obj:
        raise SchemaLoadError(f"Line {line_number}: empty fact component")
    return Fact(subject=subject, relation=relation, object=obj)


def iter_facts(lines: Iterable[str]) -> Iterator[Fact]:
    for number, line in enumerate(lines, start=1):
        fact = parse_fact_line(line, number)
        if fact is not None:
            yield fact


def read_fact_file(path: Path) -> list[Fact]:
    """Read all facts of a TSV fact file."""
    with open(path, encoding="utf-8") as handle:
        try:
            facts = list(iter_facts(handle))
        except SchemaLoadError as e:
            raise SchemaLoadError(f"{path}: {e}") from e
    logger.debug("Read fact file", path=str(path), fact_count=len(facts))
    return facts


def load_schema(*paths: Path | str) -> SchemaSnapshot:
    """Build a schema snapshot from one or more TSV fact files, in the given order."""
    facts: list[Fact] = []
    for path in paths:
        facts.extend(read_fact_file(Path(path)))
    snapshot = SchemaSnapshot(facts)
    logger.info("Loaded schema", files=[str(p) for p in paths], fact_count=len(facts))
    return snapshot
