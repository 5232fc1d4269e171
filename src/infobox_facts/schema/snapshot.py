# ABOUTME: Immutable, indexed snapshot of the schema facts the infobox stage queries
# ABOUTME: Answers domain/range, subclass, functional-relation and type-check-pattern lookups

from collections import defaultdict
from collections.abc import Iterable
from types import MappingProxyType

from infobox_facts.core import components
from infobox_facts.core.models import Fact
from infobox_facts.core.vocabulary import (
    BUILTIN_DATATYPE_HIERARCHY,
    HAS_TYPE_CHECK_PATTERN,
    RDF_TYPE,
    RDFS_DOMAIN,
    RDFS_RANGE,
    RDFS_SUBCLASS_OF,
    YAGO_FUNCTION,
)


class SchemaSnapshot:
    """Read-only view over a collection of schema facts.

    The snapshot is built once before a scan and passed explicitly to every
    component that needs it. Facts keep their declaration order, which makes
    rule tables compiled from it deterministic.
    """

    def __init__(self, facts: Iterable[Fact]):
        builtin = [
            Fact(subject=sub, relation=RDFS_SUBCLASS_OF, object=sup) for sub, sup in BUILTIN_DATATYPE_HIERARCHY
        ]
        all_facts = tuple(builtin) + tuple(facts)

        by_relation: dict[str, list[Fact]] = defaultdict(list)
        by_subject: dict[tuple[str, str], list[str]] = defaultdict(list)
        for fact in all_facts:
            by_relation[fact.relation].append(fact)
            by_subject[(fact.subject, fact.relation)].append(fact.object)

        self._facts = all_facts
        self._by_relation = MappingProxyType({key: tuple(value) for key, value in by_relation.items()})
        self._by_subject = MappingProxyType({key: tuple(value) for key, value in by_subject.items()})
        self._superclass_cache: dict[str, frozenset[str]] = {}

    def __len__(self) -> int:
        return len(self._facts)

    def __iter__(self):
        return iter(self._facts)

    def objects(self, subject: str, relation: str) -> tuple[str, ...]:
        return self._by_subject.get((subject, relation), ())

    def first_object(self, subject: str, relation: str) -> str | None:
        objects = self.objects(subject, relation)
        return objects[0] if objects else None

    def facts_with_relation(self, relation: str) -> tuple[Fact, ...]:
        return self._by_relation.get(relation, ())

    def contains(self, subject: str, relation: str, obj: str) -> bool:
        return obj in self.objects(subject, relation)

    def domain(self, relation: str) -> str | None:
        return self.first_object(relation, RDFS_DOMAIN)

    def range(self, relation: str) -> str | None:
        return self.first_object(relation, RDFS_RANGE)

    def is_functional(self, relation: str) -> bool:
        return self.contains(relation, RDF_TYPE, YAGO_FUNCTION)

    def type_check_pattern(self, cls: str) -> str | None:
        """Regex the text of any term of the given class must match, if declared."""
        pattern = self.first_object(cls, HAS_TYPE_CHECK_PATTERN)
        return components.as_text(pattern) if pattern is not None else None

    def superclasses(self, cls: str) -> frozenset[str]:
        """All classes the given class is a (reflexive, transitive) subclass of."""
        cached = self._superclass_cache.get(cls)
        if cached is not None:
            return cached
        seen = {cls}
        pending = [cls]
        while pending:
            current = pending.pop()
            for parent in self.objects(current, RDFS_SUBCLASS_OF):
                if parent not in seen:
                    seen.add(parent)
                    pending.append(parent)
        result = frozenset(seen)
        self._superclass_cache[cls] = result
        return result

    def is_subclass_of(self, sub: str, sup: str) -> bool:
        return sup in self.superclasses(sub)
