# ABOUTME: Compiles the read-only rule tables of a run from the schema snapshot
# ABOUTME: Attribute patterns, combination rules, replacement rules, preferred meanings, relation metadata

import re
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field

from infobox_facts.core import components
from infobox_facts.core.attributes import normalize_attribute
from infobox_facts.core.models import CombinationRule, ExtractionRelation
from infobox_facts.core.vocabulary import (
    INFOBOX_COMBINE,
    INFOBOX_PATTERN,
    INFOBOX_REPLACE,
    INVERSE_MARKER,
    IS_PREFERRED_MEANING_OF,
    OWL_THING,
    TITLE_REPLACE,
)
from infobox_facts.schema.snapshot import SchemaSnapshot
from infobox_facts.utils.logging import get_logger, with_operation_context

logger = get_logger(__name__)

_REPLACEMENT_TOKEN = re.compile(r"\\(.)|\$(\d+)|\\", re.DOTALL)


@with_operation_context("compile_infobox_patterns")
def compile_attribute_patterns(schema: SchemaSnapshot) -> dict[str, tuple[str, ...]]:
    """Map each normalized infobox attribute to the relations it may be extracted into."""
    patterns: dict[str, set[str]] = defaultdict(set)
    for fact in schema.facts_with_relation(INFOBOX_PATTERN):
        patterns[normalize_attribute(components.as_text(fact.subject))].add(fact.object)
    if not patterns:
        logger.warning("No infobox patterns found")
    return {attribute: tuple(sorted(relations)) for attribute, relations in patterns.items()}


def compile_combination_rules(schema: SchemaSnapshot) -> tuple[CombinationRule, ...]:
    """Combination rules in declaration order."""
    return tuple(
        CombinationRule(template=components.as_text(fact.subject), target=components.as_text(fact.object))
        for fact in schema.facts_with_relation(INFOBOX_COMBINE)
    )


def preferred_meanings(schema: SchemaSnapshot) -> dict[str, str]:
    """Map words to the class they preferably denote; the first declaration wins."""
    meanings: dict[str, str] = {}
    for fact in schema.facts_with_relation(IS_PREFERRED_MEANING_OF):
        meanings.setdefault(components.as_text(fact.object), fact.subject)
    return meanings


def lookup_meaning(meanings: Mapping[str, str], word: str) -> str | None:
    """Resolve a word to its preferred meaning, falling back to the lowercased word."""
    word = word.strip()
    if not word:
        return None
    return meanings.get(word) or meanings.get(word.lower())


def _translate_token(match: re.Match[str]) -> str:
    escaped, group = match.group(1), match.group(2)
    if escaped is not None:
        return escaped.replace("\\", "\\\\")
    if group is not None:
        return f"\\g<{group}>"
    return "\\\\"


def _python_replacement(replacement: str) -> str:
    r"""Translate a schema replacement string into a re.sub template.

    Schema rules refer to groups as $1, and a backslash makes the character
    after it literal, so r"\$" is a dollar sign and r"\." is a dot.
    """
    return _REPLACEMENT_TOKEN.sub(_translate_token, replacement)


@dataclass(frozen=True)
class ReplacementRules:
    """Ordered regex substitutions applied to raw text before extraction."""

    rules: tuple[tuple[re.Pattern[str], str], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]]) -> "ReplacementRules":
        compiled = []
        for pattern, replacement in pairs:
            try:
                regex = re.compile(pattern)
                template = _python_replacement(replacement)
                # Compiles the template, so bad group references fail here
                regex.sub(template, "")
            except re.error as e:
                logger.warning(
                    "Skipping invalid replacement rule", pattern=pattern, replacement=replacement, error=str(e)
                )
                continue
            compiled.append((regex, template))
        return cls(rules=tuple(compiled))

    @classmethod
    def from_schema(cls, schema: SchemaSnapshot, relation: str = INFOBOX_REPLACE) -> "ReplacementRules":
        return cls.from_pairs(
            [
                (components.as_text(fact.subject), components.as_text(fact.object))
                for fact in schema.facts_with_relation(relation)
            ]
        )

    def transform(self, text: str) -> str:
        for pattern, replacement in self.rules:
            text = pattern.sub(replacement, text)
        return text

    def __len__(self) -> int:
        return len(self.rules)


class RelationResolver:
    """Resolves relation identifiers to ExtractionRelation metadata, caching each answer."""

    def __init__(self, schema: SchemaSnapshot, generic_class: str = OWL_THING):
        self.schema = schema
        self.generic_class = generic_class
        self._cache: dict[str, ExtractionRelation] = {}

    def resolve(self, identifier: str) -> ExtractionRelation:
        cached = self._cache.get(identifier)
        if cached is not None:
            return cached

        if identifier.endswith(INVERSE_MARKER):
            inverse = True
            relation = identifier[: -len(INVERSE_MARKER)] + ">"
            target_class = self.schema.domain(relation)
        else:
            inverse = False
            relation = identifier
            target_class = self.schema.range(relation)

        known = target_class is not None
        if target_class is None:
            logger.warning("Unknown relation to extract", relation=relation)
            target_class = self.generic_class

        resolved = ExtractionRelation(
            identifier=identifier,
            relation=relation,
            inverse=inverse,
            target_class=target_class,
            functional=self.schema.is_functional(relation),
            syntax_check=self.schema.type_check_pattern(target_class),
            known=known,
        )
        self._cache[identifier] = resolved
        return resolved


@dataclass(frozen=True)
class PatternTables:
    """All rule tables of one run, compiled once before the scan starts."""

    attribute_patterns: dict[str, tuple[str, ...]] = field(default_factory=dict)
    combinations: tuple[CombinationRule, ...] = ()
    replacements: ReplacementRules = field(default_factory=ReplacementRules)
    title_replacements: ReplacementRules = field(default_factory=ReplacementRules)
    preferred_meanings: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_schema(cls, schema: SchemaSnapshot) -> "PatternTables":
        tables = cls(
            attribute_patterns=compile_attribute_patterns(schema),
            combinations=compile_combination_rules(schema),
            replacements=ReplacementRules.from_schema(schema, INFOBOX_REPLACE),
            title_replacements=ReplacementRules.from_schema(schema, TITLE_REPLACE),
            preferred_meanings=preferred_meanings(schema),
        )
        logger.info(
            "Compiled pattern tables",
            attributes=len(tables.attribute_patterns),
            combinations=len(tables.combinations),
            replacements=len(tables.replacements),
            title_replacements=len(tables.title_replacements),
            preferred_meanings=len(tables.preferred_meanings),
        )
        return tables
