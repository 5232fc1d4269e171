# ABOUTME: Turns one raw infobox value into typed facts under one candidate relation
# ABOUTME: Enforces domain/range, syntax-check patterns, literal datatypes and functional relations

import html
import re
from collections.abc import Mapping

from infobox_facts.core import components
from infobox_facts.core.models import ExtractionRelation, Fact, Provenance, Term
from infobox_facts.core.vocabulary import OWL_THING, XSD_STRING
from infobox_facts.extraction.terms import extract_terms, select_strategy
from infobox_facts.schema.patterns import RelationResolver, ReplacementRules
from infobox_facts.schema.snapshot import SchemaSnapshot
from infobox_facts.utils.logging import get_logger

logger = get_logger(__name__)

SUBJECT_PLACEHOLDER = "$0"
TECHNIQUE_PREFIX = "Infobox extraction: from "


class TermExtractionEngine:
    """Extracts and type-checks facts for one (subject, raw value, relation) at a time.

    The schema snapshot and the rule tables are shared read-only; relation
    metadata is resolved lazily and cached for the lifetime of the engine.
    """

    def __init__(
        self,
        schema: SchemaSnapshot,
        preferred_meanings: Mapping[str, str] | None = None,
        replacements: ReplacementRules | None = None,
        generic_class: str = OWL_THING,
    ):
        self.schema = schema
        self.preferred_meanings = preferred_meanings or {}
        self.replacements = replacements or ReplacementRules()
        self.relations = RelationResolver(schema, generic_class)
        self._syntax_checks: dict[str, re.Pattern[str] | None] = {}

    def clean(self, subject: str, raw_value: str) -> str:
        """Decode character references, apply replacement rules and fill in the subject."""
        value = self.replacements.transform(html.unescape(raw_value))
        value = value.replace(SUBJECT_PLACEHOLDER, components.strip_brackets(subject))
        return value.strip()

    def extract_facts(self, subject: str, raw_value: str, relation_id: str) -> list[Fact]:
        """Extract all facts a raw value yields for one relation.

        Args:
            subject: Entity the infobox belongs to, e.g. "<Ada_Lovelace>"
            raw_value: Attribute value as read from the infobox
            relation_id: Relation identifier, possibly carrying the inverse marker

        Returns:
            Facts in order of their terms' appearance; at most one for functional relations
        """
        value = self.clean(subject, raw_value)
        if not value:
            return []

        relation = self.relations.resolve(relation_id)
        strategy = select_strategy(relation.target_class, self.schema)
        candidates = extract_terms(strategy, value, relation.target_class, self.preferred_meanings)

        provenance = Provenance(entity=subject, technique=TECHNIQUE_PREFIX + value)
        facts: list[Fact] = []
        for candidate in candidates:
            accepted = self._check(subject, candidate, relation)
            if accepted is None:
                continue
            if relation.inverse:
                fact = Fact(
                    subject=accepted.component, relation=relation.relation, object=subject, provenance=provenance
                )
            else:
                fact = Fact(
                    subject=subject, relation=relation.relation, object=accepted.component, provenance=provenance
                )
            facts.append(fact)
            if relation.functional:
                break
        return facts

    def _check(self, subject: str, candidate: Term, relation: ExtractionRelation) -> Term | None:
        """Return the candidate ready to be written, or None if it fails a check."""
        syntax_check = self._syntax_check(relation.syntax_check)
        if syntax_check is not None and not syntax_check.fullmatch(candidate.text):
            logger.info(
                "Extraction does not match syntax check",
                term=candidate.component,
                subject=subject,
                relation=relation.relation,
                pattern=relation.syntax_check,
            )
            return None

        if not candidate.is_literal:
            return candidate

        target = relation.target_class
        if candidate.datatype is None:
            compatible = target == XSD_STRING
        else:
            compatible = self.schema.is_subclass_of(candidate.datatype, target)
        if not compatible:
            logger.debug(
                "Extraction does not match typecheck",
                term=candidate.component,
                subject=subject,
                relation=relation.relation,
                target_class=target,
            )
            return None
        return candidate.with_datatype(target)

    def _syntax_check(self, pattern: str | None) -> re.Pattern[str] | None:
        if pattern is None:
            return None
        if pattern not in self._syntax_checks:
            try:
                self._syntax_checks[pattern] = re.compile(pattern)
            except re.error as e:
                logger.warning("Ignoring invalid syntax check pattern", pattern=pattern, error=str(e))
                self._syntax_checks[pattern] = None
        return self._syntax_checks[pattern]
