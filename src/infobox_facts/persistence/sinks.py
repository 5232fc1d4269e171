# ABOUTME: Fact sinks that collect facts in memory or append them to per-theme TSV files
# ABOUTME: Both sinks are append-only and keep facts in the order they were produced

from collections import defaultdict
from pathlib import Path
from typing import TextIO

from infobox_facts.core.models import Fact, Theme
from infobox_facts.utils.logging import get_logger

logger = get_logger(__name__)


class MemoryFactSink:
    """Keeps every written fact in a list per theme."""

    def __init__(self) -> None:
        self.facts: dict[str, list[Fact]] = defaultdict(list)
        self.themes: dict[str, Theme] = {}

    def write(self, theme: Theme, fact: Fact) -> None:
        self.themes.setdefault(theme.name, theme)
        self.facts[theme.name].append(fact)

    def get(self, theme: Theme) -> list[Fact]:
        return list(self.facts.get(theme.name, []))

    def triples(self, theme: Theme) -> list[tuple[str, str, str]]:
        return [fact.triple for fact in self.get(theme)]

    def counts(self) -> dict[str, int]:
        return {name: len(facts) for name, facts in self.facts.items()}


class TsvFactSink:
    """Appends facts to "<theme>.tsv" files in a directory, one "id subject relation object" line each.

    Use as a context manager so the files are closed when the scan ends.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)
        self._handles: dict[str, TextIO] = {}
        self._counts: dict[str, int] = defaultdict(int)

    def path_for(self, theme: Theme) -> Path:
        return self.directory / f"{theme.name}.tsv"

    def write(self, theme: Theme, fact: Fact) -> None:
        handle = self._handles.get(theme.name)
        if handle is None:
            self.directory.mkdir(parents=True, exist_ok=True)
            handle = open(self.path_for(theme), "w", encoding="utf-8")
            if theme.description:
                handle.write(f"# {theme.description}\n")
            self._handles[theme.name] = handle
        handle.write(f"{fact.id}\t{fact}\n")
        self._counts[theme.name] += 1

    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def close(self) -> None:
        for name, handle in self._handles.items():
            handle.close()
            logger.debug("Closed theme file", theme=name, fact_count=self._counts[name])
        self._handles.clear()

    def __enter__(self) -> "TsvFactSink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class FanOutFactSink:
    """Writes every fact to several sinks, in the order given."""

    def __init__(self, *sinks) -> None:
        self.sinks = sinks

    def write(self, theme: Theme, fact: Fact) -> None:
        for sink in self.sinks:
            sink.write(theme, fact)
