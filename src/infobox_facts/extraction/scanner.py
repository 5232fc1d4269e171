# ABOUTME: Single forward pass over a wiki dump that finds titles and infobox templates
# ABOUTME: Emits type facts for infobox classes and relation facts for matching attributes

from collections.abc import Callable
from dataclasses import dataclass

from infobox_facts.core.models import DIRTY_INFOBOX_FACTS, INFOBOX_SOURCES, INFOBOX_TYPES, Fact, Provenance
from infobox_facts.core.vocabulary import OWL_THING, RDF_TYPE
from infobox_facts.extraction.base import FactSink, write_with_sources
from infobox_facts.extraction.engine import TermExtractionEngine
from infobox_facts.extraction.environment import MAX_ENVIRONMENT_SIZE
from infobox_facts.extraction.infobox import read_infobox
from infobox_facts.extraction.stream import CharacterStream
from infobox_facts.extraction.titles import TitleResolver
from infobox_facts.schema.patterns import PatternTables, lookup_meaning
from infobox_facts.schema.snapshot import SchemaSnapshot
from infobox_facts.utils.logging import get_logger, with_operation_context

logger = get_logger(__name__)

TITLE_MARKER = "<title>"
MARKERS = (TITLE_MARKER, "{{Infobox", "{{ Infobox")


@dataclass(frozen=True, slots=True)
class ScanState:
    """The page the scanner is currently inside of; None before the first usable title."""

    current_subject: str | None = None


@dataclass(slots=True)
class ScanStats:
    pages: int = 0
    templates: int = 0
    skipped_templates: int = 0
    type_facts: int = 0
    relation_facts: int = 0
    unknown_relation_values: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "pages": self.pages,
            "templates": self.templates,
            "skipped_templates": self.skipped_templates,
            "type_facts": self.type_facts,
            "relation_facts": self.relation_facts,
            "unknown_relation_values": self.unknown_relation_values,
        }


class InfoboxScanner:
    """Drives attribute parsing and fact extraction over a character stream."""

    def __init__(
        self,
        schema: SchemaSnapshot,
        tables: PatternTables,
        max_environment_size: int = MAX_ENVIRONMENT_SIZE,
        generic_class: str = OWL_THING,
    ):
        self.schema = schema
        self.tables = tables
        self.max_environment_size = max_environment_size
        self.engine = TermExtractionEngine(schema, tables.preferred_meanings, tables.replacements, generic_class)
        self.titles = TitleResolver(tables.title_replacements)

    @classmethod
    def from_schema(cls, schema: SchemaSnapshot, **kwargs) -> "InfoboxScanner":
        return cls(schema, PatternTables.from_schema(schema), **kwargs)

    @with_operation_context("infobox_scan")
    def scan(
        self,
        stream: CharacterStream,
        sink: FactSink,
        on_page: Callable[[str | None], None] | None = None,
    ) -> ScanStats:
        """Scan the whole stream, writing facts to the sink as they are found.

        Args:
            stream: Dump to scan, read forward only
            sink: Receives relation facts, type facts and their source records
            on_page: Called with the resolved subject after each title

        Returns:
            Counters of what the scan saw and wrote
        """
        state = ScanState()
        stats = ScanStats()
        while True:
            marker = stream.find_ignore_case(*MARKERS)
            if marker == -1:
                logger.info("Reached end of stream", **stats.as_dict())
                return stats
            if MARKERS[marker] == TITLE_MARKER:
                state = ScanState(current_subject=self.titles.resolve(stream))
                stats.pages += 1
                if on_page is not None:
                    on_page(state.current_subject)
                continue
            if state.current_subject is None:
                stats.skipped_templates += 1
                continue
            self.process_template(state.current_subject, stream, sink, stats)

    def process_template(
        self, subject: str, stream: CharacterStream, sink: FactSink, stats: ScanStats | None = None
    ) -> ScanStats:
        """Parse one infobox whose opening marker was just consumed.

        Args:
            subject: Entity of the page the infobox is on
            stream: Positioned right after the template-open marker
            sink: Destination of the facts
            stats: Counters to update, a fresh set if None
        """
        stats = stats if stats is not None else ScanStats()
        stats.templates += 1

        infobox_class = stream.read_to("}", "|").strip()
        infobox_type = lookup_meaning(self.tables.preferred_meanings, infobox_class)
        if infobox_type is not None:
            type_fact = Fact(
                subject=subject,
                relation=RDF_TYPE,
                object=infobox_type,
                provenance=Provenance(entity=subject, technique=f"Preferred meaning of infobox type {infobox_class}"),
            )
            write_with_sources(sink, INFOBOX_TYPES, type_fact, INFOBOX_SOURCES)
            stats.type_facts += 1

        attributes = read_infobox(stream, self.tables.combinations, self.max_environment_size)
        for attribute, values in attributes.items():
            relations = self.tables.attribute_patterns.get(attribute)
            if not relations:
                continue
            for relation in relations:
                if not self.engine.relations.resolve(relation).known:
                    stats.unknown_relation_values += len(values)
                for value in values:
                    for fact in self.engine.extract_facts(subject, value, relation):
                        write_with_sources(sink, DIRTY_INFOBOX_FACTS, fact, INFOBOX_SOURCES)
                        stats.relation_facts += 1

        logger.debug(
            "Processed infobox",
            subject=subject,
            infobox_class=infobox_class,
            attributes=len(attributes),
        )
        return stats
