# ABOUTME: Tests for strategy selection and the individual term extraction strategies
# ABOUTME: Each strategy is exercised on typical infobox markup

import pytest

from infobox_facts.core.models import Term
from infobox_facts.extraction.terms import (
    TermStrategy,
    extract_terms,
    format_date,
    plain_text,
    select_strategy,
    wiki_link_targets,
)


class TestSelectStrategy:
    @pytest.mark.parametrize(
        ("target", "strategy"),
        [
            ("rdfs:Class", TermStrategy.CLASS_NAME),
            ("xsd:date", TermStrategy.DATE),
            ("xsd:nonNegativeInteger", TermStrategy.NUMBER),
            ("xsd:decimal", TermStrategy.NUMBER),
            ("xsd:string", TermStrategy.STRING),
            ("<yagoISBN>", TermStrategy.STRING),
            ("<wordnet_country>", TermStrategy.ENTITY_LINK),
            ("owl:Thing", TermStrategy.ENTITY_LINK),
        ],
    )
    def test_strategy_by_target_class(self, schema, target, strategy):
        assert select_strategy(target, schema) is strategy


class TestMarkupHelpers:
    def test_plain_text(self):
        assert plain_text("'''[[Ada Lovelace|Ada]]''' {{citation needed}} <small>x</small>") == "Ada x"

    def test_wiki_link_targets_skip_namespaces(self):
        text = "[[London]], [[File:Ada.jpg|thumb]], [[Paris#History|City of Light]]"
        assert wiki_link_targets(text) == [("London", "London"), ("Paris", "City of Light")]


class TestEntityLinks:
    def test_links_become_capitalized_entities(self):
        terms = extract_terms(TermStrategy.ENTITY_LINK, "[[london]] and [[New York City|NYC]]", "<yagoGeoEntity>")
        assert [term.component for term in terms] == ["<London>", "<New_York_City>"]

    def test_plain_text_yields_nothing(self):
        assert extract_terms(TermStrategy.ENTITY_LINK, "London", "<yagoGeoEntity>") == []

    def test_links_in_references_are_ignored(self):
        text = "[[England]]<ref>[[Some Book]]</ref>"
        assert [t.value for t in extract_terms(TermStrategy.ENTITY_LINK, text, "owl:Thing")] == ["England"]


class TestClassNames:
    def test_words_resolved_through_preferred_meanings(self):
        meanings = {"scientist": "<wordnet_scientist>", "person": "<wordnet_person>"}
        terms = extract_terms(TermStrategy.CLASS_NAME, "[[Scientist]], person, poet", "rdfs:Class", meanings)
        assert [term.component for term in terms] == ["<wordnet_scientist>", "<wordnet_person>"]


class TestStrings:
    def test_untyped_for_plain_strings(self):
        terms = extract_terms(TermStrategy.STRING, "''Veni''<br/>vidi", "xsd:string")
        assert terms == [Term.literal("Veni"), Term.literal("vidi")]

    def test_typed_for_string_subclasses(self):
        terms = extract_terms(TermStrategy.STRING, "978-0131103627", "<yagoISBN>")
        assert terms == [Term.literal("978-0131103627", "<yagoISBN>")]


class TestNumbers:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("8,908,081", [("8908081", "xsd:nonNegativeInteger")]),
            ("-40", [("-40", "xsd:integer")]),
            ("about 12.5 km", [("12.5", "xsd:decimal")]),
            ("42 (2011)", [("42", "xsd:nonNegativeInteger"), ("2011", "xsd:nonNegativeInteger")]),
            ("no digits", []),
        ],
    )
    def test_numbers(self, text, expected):
        terms = extract_terms(TermStrategy.NUMBER, text, "xsd:decimal")
        assert [(term.value, term.datatype) for term in terms] == expected


class TestDates:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{{birth date|1815|12|10}}", ["1815-12-10"]),
            ("{{Birth date and age|df=yes|1952|3|11}}", ["1952-03-11"]),
            ("1815-12-10", ["1815-12-10"]),
            ("10 December 1815", ["1815-12-10"]),
            ("December 10, 1815", ["1815-12-10"]),
            ("December 1815", ["1815-12-##"]),
            ("1815", ["1815-##-##"]),
            ("c. 1815 – 1852", ["1815-##-##", "1852-##-##"]),
            ("sometime", []),
        ],
    )
    def test_dates(self, text, expected):
        terms = extract_terms(TermStrategy.DATE, text, "xsd:date")
        assert [term.value for term in terms] == expected
        assert all(term.datatype == "xsd:date" for term in terms)

    def test_dates_keep_order_of_appearance(self):
        terms = extract_terms(TermStrategy.DATE, "1852, or 10 December 1815", "xsd:date")
        assert [term.value for term in terms] == ["1852-##-##", "1815-12-10"]

    @pytest.mark.parametrize(
        ("parts", "expected"),
        [
            (("1815", "12", "10"), "1815-12-10"),
            (("1815", "3", None), "1815-03-##"),
            (("476", None, None), "0476-##-##"),
            (("1815", "13", "1"), None),
            (("1815", "2", "32"), None),
        ],
    )
    def test_format_date(self, parts, expected):
        assert format_date(*parts) == expected
