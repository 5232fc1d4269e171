# ABOUTME: Shared fixtures: a small schema covering every kind of target class the engine handles
# ABOUTME: Available as parsed snapshot, compiled pattern tables, or a TSV file on disk

import pytest

from infobox_facts.schema.loader import iter_facts
from infobox_facts.schema.patterns import PatternTables
from infobox_facts.schema.snapshot import SchemaSnapshot

SCHEMA_FACTS = [
    ("<wasBornOnDate>", "rdfs:range", "xsd:date"),
    ("<wasBornOnDate>", "rdf:type", "<yagoFunction>"),
    ("<wasBornIn>", "rdfs:range", "<yagoGeoEntity>"),
    ("<wasBornIn>", "rdf:type", "<yagoFunction>"),
    ("<isCitizenOf>", "rdfs:range", "<wordnet_country>"),
    ("<created>", "rdfs:domain", "<wordnet_person>"),
    ("<created>", "rdfs:range", "<wordnet_artifact>"),
    ("<hasPopulation>", "rdfs:range", "xsd:nonNegativeInteger"),
    ("<hasMotto>", "rdfs:range", "xsd:string"),
    ("<hasISBN>", "rdfs:range", "<yagoISBN>"),
    ("<yagoISBN>", "rdfs:subClassOf", "xsd:string"),
    ("<yagoISBN>", "<_hasTypeCheckPattern>", r'"\d{13}"'),
    ("rdf:type", "rdfs:range", "rdfs:Class"),
    ('"born"', "<_infoboxPattern>", "<wasBornOnDate>"),
    ('"birth_date"', "<_infoboxPattern>", "<wasBornOnDate>"),
    ('"birth_place"', "<_infoboxPattern>", "<wasBornIn>"),
    ('"nationality"', "<_infoboxPattern>", "<isCitizenOf>"),
    ('"known_for"', "<_infoboxPattern>", "<created->"),
    ('"motto"', "<_infoboxPattern>", "<hasMotto>"),
    ('"full name"', "<_infoboxPattern>", "<hasMotto>"),
    ('"<firstname> <lastname>"', "<_infoboxCombine>", '"fullname"'),
    ("<wordnet_person>", "<isPreferredMeaningOf>", '"person"'),
    ("<wordnet_scientist>", "<isPreferredMeaningOf>", '"scientist"'),
]

SCHEMA_TSV = "".join("\t".join(fact) + "\n" for fact in SCHEMA_FACTS)


@pytest.fixture
def schema() -> SchemaSnapshot:
    return SchemaSnapshot(iter_facts(SCHEMA_TSV.splitlines()))


@pytest.fixture
def tables(schema: SchemaSnapshot) -> PatternTables:
    return PatternTables.from_schema(schema)


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.tsv"
    path.write_text("# infobox test schema\n" + SCHEMA_TSV, encoding="utf-8")
    return path
