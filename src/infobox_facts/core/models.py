# ABOUTME: Domain models shared by the extraction pipeline: facts, themes, terms and relations
# ABOUTME: All models are frozen pydantic objects; facts are write-once

import hashlib
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from infobox_facts.core import components
from infobox_facts.core.vocabulary import EXTRACTION_SOURCE, EXTRACTION_TECHNIQUE


class Theme(BaseModel):
    """A named output channel of facts consumed by a downstream stage."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="File-system friendly theme name")
    description: str = Field(default="", description="What the facts in this theme are")

    def __str__(self) -> str:
        return self.name


DIRTY_INFOBOX_FACTS = Theme(
    name="infoboxFactsVeryDirty",
    description="Facts extracted from the Wikipedia infoboxes - still to be redirect-checked and type-checked",
)
INFOBOX_TYPES = Theme(name="infoboxTypes", description="Types extracted from Wikipedia infoboxes")
INFOBOX_SOURCES = Theme(
    name="infoboxSources", description="Source information for the facts extracted from the Wikipedia infoboxes"
)

OUTPUT_THEMES = (DIRTY_INFOBOX_FACTS, INFOBOX_TYPES, INFOBOX_SOURCES)


class Provenance(BaseModel):
    """Where a fact came from: the page entity and the technique note."""

    model_config = ConfigDict(frozen=True)

    entity: str
    technique: str


class Fact(BaseModel):
    """An immutable (subject, relation, object) triple in fact-component syntax."""

    model_config = ConfigDict(frozen=True)

    subject: str
    relation: str
    object: str
    provenance: Provenance | None = None

    @property
    def triple(self) -> tuple[str, str, str]:
        return (self.subject, self.relation, self.object)

    @property
    def id(self) -> str:
        digest = hashlib.sha1("\t".join(self.triple).encode("utf-8")).hexdigest()
        return f"<id_{digest[:16]}>"

    def source_facts(self) -> list["Fact"]:
        """Provenance records describing this fact, empty if it has no provenance."""
        if self.provenance is None:
            return []
        return [
            Fact(subject=self.id, relation=EXTRACTION_SOURCE, object=components.wikipedia_url(self.provenance.entity)),
            Fact(
                subject=self.id,
                relation=EXTRACTION_TECHNIQUE,
                object=components.for_string(self.provenance.technique),
            ),
        ]

    def __str__(self) -> str:
        return "\t".join(self.triple)


class TermKind(str, Enum):
    ENTITY = "entity"
    LITERAL = "literal"


class Term(BaseModel):
    """A candidate object found in an attribute value."""

    model_config = ConfigDict(frozen=True)

    kind: TermKind
    value: str = Field(description="Entity name without brackets, or the literal's plain value")
    datatype: str | None = Field(default=None, description="Literal datatype, None for entities and plain strings")

    @classmethod
    def entity(cls, name: str) -> "Term":
        return cls(kind=TermKind.ENTITY, value=components.strip_brackets(components.for_entity(name)))

    @classmethod
    def literal(cls, value: str, datatype: str | None = None) -> "Term":
        return cls(kind=TermKind.LITERAL, value=value, datatype=datatype)

    @property
    def is_literal(self) -> bool:
        return self.kind is TermKind.LITERAL

    @property
    def text(self) -> str:
        """The form syntax-check patterns are matched against."""
        return self.value

    @property
    def component(self) -> str:
        if self.is_literal:
            return components.for_literal(self.value, self.datatype)
        return f"<{self.value}>"

    def with_datatype(self, datatype: str) -> "Term":
        return self.model_copy(update={"datatype": datatype})


class ExtractionRelation(BaseModel):
    """Everything the extraction engine needs to know about one relation identifier."""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(description="Identifier as declared in the pattern, possibly with the inverse marker")
    relation: str = Field(description="Relation written into facts, inverse marker removed")
    inverse: bool = False
    target_class: str = Field(description="Domain of the relation when inverse, range otherwise")
    functional: bool = False
    syntax_check: str | None = Field(default=None, description="Regex the target's text must fully match")
    known: bool = True


class CombinationRule(BaseModel):
    """Derives a new attribute from literal text and references to other attributes.

    The template "<firstname> <lastname>" with target "fullname" turns
    firstname=Ada, lastname=Lovelace into fullname="Ada Lovelace".
    """

    model_config = ConfigDict(frozen=True)

    template: str
    target: str

    def segments(self) -> list[tuple[str, str | None]]:
        """Split the template into (literal prefix, referenced attribute or None) pairs."""
        result: list[tuple[str, str | None]] = []
        pieces = self.template.split(">")
        # Trailing empty pieces carry no text
        while pieces and not pieces[-1]:
            pieces.pop()
        for piece in pieces:
            scan_to = piece.find("<")
            if scan_to == -1:
                result.append((piece, None))
            else:
                result.append((piece[:scan_to], piece[scan_to + 1 :]))
        return result
