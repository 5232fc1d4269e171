# ABOUTME: Tests for the term extraction and type-check engine
# ABOUTME: Covers functional relations, datatype checks, syntax checks, inverse relations and cleaning

import pytest

from infobox_facts.extraction.engine import TermExtractionEngine
from infobox_facts.schema.patterns import ReplacementRules, preferred_meanings

ADA = "<Ada_Lovelace>"


@pytest.fixture
def engine(schema) -> TermExtractionEngine:
    return TermExtractionEngine(schema, preferred_meanings(schema))


class TestExtractFacts:
    def test_functional_relation_yields_one_fact(self, engine):
        facts = engine.extract_facts(ADA, "10 December 1815, or maybe 1816, or 1817", "<wasBornOnDate>")
        assert [fact.triple for fact in facts] == [(ADA, "<wasBornOnDate>", '"1815-12-10"^^xsd:date')]

    def test_functional_relation_takes_first_article_link(self, engine):
        facts = engine.extract_facts(ADA, "[[File:Map.png]] [[London]] [[Paris]] [[Rome]]", "<wasBornIn>")
        assert [fact.object for fact in facts] == ["<London>"]

    def test_non_functional_relation_yields_all(self, engine):
        facts = engine.extract_facts(ADA, "[[United Kingdom]]<br>[[Ireland]]", "<isCitizenOf>")
        assert [fact.object for fact in facts] == ["<United_Kingdom>", "<Ireland>"]

    def test_datatype_mismatch_is_discarded_others_kept(self, engine):
        facts = engine.extract_facts(ADA, "-5 or 300 or 2.5", "<hasPopulation>")
        assert [fact.object for fact in facts] == ['"300"^^xsd:nonNegativeInteger']

    def test_accepted_literal_is_stamped_with_target_class(self, engine):
        facts = engine.extract_facts(ADA, "Poetical science", "<hasMotto>")
        assert [fact.object for fact in facts] == ['"Poetical science"^^xsd:string']

    def test_syntax_check_must_match_whole_term(self, engine):
        facts = engine.extract_facts(ADA, "9780131103627<br>978-0131103627", "<hasISBN>")
        assert [fact.object for fact in facts] == ['"9780131103627"^^<yagoISBN>']

    def test_inverse_relation_swaps_subject_and_object(self, engine):
        facts = engine.extract_facts("<Analytical_Engine>", "[[Charles Babbage]]", "<created->")
        assert [fact.triple for fact in facts] == [("<Charles_Babbage>", "<created>", "<Analytical_Engine>")]

    def test_unknown_relation_falls_back_to_entity_links(self, engine):
        facts = engine.extract_facts(ADA, "[[Mathematics]]", "<hasMystery>")
        assert [fact.triple for fact in facts] == [(ADA, "<hasMystery>", "<Mathematics>")]

    def test_class_relation_uses_preferred_meanings(self, engine):
        facts = engine.extract_facts(ADA, "[[Scientist]]", "rdf:type")
        assert [fact.object for fact in facts] == ["<wordnet_scientist>"]

    @pytest.mark.parametrize("raw_value", ["", "   ", "<!-- nothing -->"])
    def test_empty_values_yield_nothing(self, engine, raw_value):
        assert engine.extract_facts(ADA, raw_value, "<hasMotto>") == []

    def test_facts_carry_provenance(self, engine):
        (fact,) = engine.extract_facts(ADA, "1815", "<wasBornOnDate>")
        assert fact.provenance is not None
        assert fact.provenance.entity == ADA
        assert fact.provenance.technique == "Infobox extraction: from 1815"


class TestClean:
    def test_decodes_character_references(self, engine):
        assert engine.clean(ADA, "AT&amp;T&nbsp;") == "AT&T"

    def test_subject_placeholder(self, engine):
        assert engine.clean(ADA, "$0 (mathematician)") == "Ada_Lovelace (mathematician)"

    def test_replacement_rules_run_before_extraction(self, schema):
        engine = TermExtractionEngine(schema, replacements=ReplacementRules.from_pairs([(r"(\d+) BC", "$1")]))
        facts = engine.extract_facts("<Julius_Caesar>", "100 BC", "<wasBornOnDate>")
        assert [fact.object for fact in facts] == ['"0100-##-##"^^xsd:date']

    def test_backslash_in_replacement_is_literal(self, schema):
        engine = TermExtractionEngine(schema, replacements=ReplacementRules.from_pairs([("x", r"\d"), ("ci", r"c\.")]))
        facts = engine.extract_facts(ADA, "Poetical science", "<hasMotto>")
        assert [fact.object for fact in facts] == ['"Poetical sc.ence"^^xsd:string']
