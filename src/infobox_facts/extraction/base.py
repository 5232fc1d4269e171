# ABOUTME: Protocol interface for fact sinks and the exception types of the extraction layer
# ABOUTME: Sinks receive facts per theme; provenance records are fanned out by write_with_sources

from typing import Protocol

from infobox_facts.core.models import Fact, Theme


class FactSink(Protocol):
    """Append-only destination for extracted facts, one channel per theme."""

    def write(self, theme: Theme, fact: Fact) -> None:
        """Append a fact to the given theme.

        Args:
            theme: Output channel the fact belongs to
            fact: The fact to append
        """
        ...


class ExtractionError(Exception):
    """Raised when infobox fact extraction fails."""

    pass


class SchemaLoadError(ExtractionError):
    """Raised when a schema fact file cannot be parsed."""

    pass


def write_with_sources(sink: FactSink, theme: Theme, fact: Fact, source_theme: Theme) -> None:
    """Write a fact and, if it carries provenance, its source records."""
    sink.write(theme, fact)
    for source_fact in fact.source_facts():
        sink.write(source_theme, source_fact)
