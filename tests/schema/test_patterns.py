# ABOUTME: Tests for compiling rule tables from the schema
# ABOUTME: Covers attribute patterns, combinations, replacements, preferred meanings and relation metadata

from infobox_facts.core.models import CombinationRule, Fact
from infobox_facts.schema.patterns import (
    RelationResolver,
    ReplacementRules,
    compile_attribute_patterns,
    compile_combination_rules,
    lookup_meaning,
    preferred_meanings,
)
from infobox_facts.schema.snapshot import SchemaSnapshot


class TestAttributePatterns:
    def test_keys_are_normalized(self, schema):
        patterns = compile_attribute_patterns(schema)
        assert patterns["birthplace"] == ("<wasBornIn>",)
        assert patterns["knownfor"] == ("<created->",)
        assert "birth_place" not in patterns

    def test_several_relations_are_sorted(self):
        schema = SchemaSnapshot(
            [
                Fact(subject='"spouse"', relation="<_infoboxPattern>", object="<isMarriedTo>"),
                Fact(subject='"Spouse_1"', relation="<_infoboxPattern>", object="<hasPartner>"),
            ]
        )
        assert compile_attribute_patterns(schema) == {"spouse": ("<hasPartner>", "<isMarriedTo>")}

    def test_no_patterns(self):
        assert compile_attribute_patterns(SchemaSnapshot([])) == {}


class TestCombinationRules:
    def test_rules_in_declaration_order(self):
        schema = SchemaSnapshot(
            [
                Fact(subject='"<a> <b>"', relation="<_infoboxCombine>", object='"ab"'),
                Fact(subject='"<c>"', relation="<_infoboxCombine>", object='"c2"'),
            ]
        )
        assert compile_combination_rules(schema) == (
            CombinationRule(template="<a> <b>", target="ab"),
            CombinationRule(template="<c>", target="c2"),
        )


class TestPreferredMeanings:
    def test_first_declaration_wins(self):
        schema = SchemaSnapshot(
            [
                Fact(subject="<wordnet_city>", relation="<isPreferredMeaningOf>", object='"city"'),
                Fact(subject="<wordnet_town>", relation="<isPreferredMeaningOf>", object='"city"'),
            ]
        )
        assert preferred_meanings(schema) == {"city": "<wordnet_city>"}

    def test_lookup_falls_back_to_lowercase(self, schema):
        meanings = preferred_meanings(schema)
        assert lookup_meaning(meanings, "person") == "<wordnet_person>"
        assert lookup_meaning(meanings, " Person ") == "<wordnet_person>"
        assert lookup_meaning(meanings, "officeholder") is None
        assert lookup_meaning(meanings, "  ") is None


class TestReplacementRules:
    def test_rules_apply_in_order(self):
        rules = ReplacementRules.from_pairs([("colour", "color"), ("color", "hue")])
        assert rules.transform("colour and color") == "hue and hue"
        assert len(rules) == 2

    def test_group_references(self):
        rules = ReplacementRules.from_pairs([(r"(\d+) BC", "-$1")])
        assert rules.transform("born 44 BC") == "born -44"

    def test_escaped_dollar(self):
        rules = ReplacementRules.from_pairs([("USD", r"\$")])
        assert rules.transform("100 USD") == "100 $"

    def test_backslash_makes_next_character_literal(self):
        rules = ReplacementRules.from_pairs([("x", r"\d"), (r"\s*,\s*", r"\.\\")])
        assert rules.transform("x , y") == "d.\\y"

    def test_whole_match_reference(self):
        rules = ReplacementRules.from_pairs([(r"\d+", r"[$0]")])
        assert rules.transform("born 1815") == "born [1815]"

    def test_invalid_group_reference_is_skipped(self):
        rules = ReplacementRules.from_pairs([("(a)", "$2"), ("b", "c")])
        assert len(rules) == 1
        assert rules.transform("ab") == "ac"

    def test_invalid_pattern_is_skipped(self):
        rules = ReplacementRules.from_pairs([("(", "x"), ("a", "b")])
        assert len(rules) == 1
        assert rules.transform("a(") == "b("

    def test_from_schema(self):
        schema = SchemaSnapshot([Fact(subject='"&nbsp;"', relation="<_infoboxReplace>", object='" "')])
        assert ReplacementRules.from_schema(schema).transform("a&nbsp;b") == "a b"


class TestRelationResolver:
    def test_plain_relation_targets_range(self, schema):
        relation = RelationResolver(schema).resolve("<wasBornOnDate>")
        assert relation.relation == "<wasBornOnDate>"
        assert relation.target_class == "xsd:date"
        assert relation.functional
        assert not relation.inverse
        assert relation.known

    def test_inverse_relation_targets_domain(self, schema):
        relation = RelationResolver(schema).resolve("<created->")
        assert relation.relation == "<created>"
        assert relation.inverse
        assert relation.target_class == "<wordnet_person>"

    def test_syntax_check_of_target_class(self, schema):
        assert RelationResolver(schema).resolve("<hasISBN>").syntax_check == r"\d{13}"

    def test_unknown_relation_uses_generic_class(self, schema):
        relation = RelationResolver(schema).resolve("<hasMystery>")
        assert relation.target_class == "owl:Thing"
        assert not relation.known

        custom = RelationResolver(schema, generic_class="<yagoLegalActorGeo>").resolve("<hasMystery>")
        assert custom.target_class == "<yagoLegalActorGeo>"

    def test_resolution_is_cached(self, schema):
        resolver = RelationResolver(schema)
        assert resolver.resolve("<isCitizenOf>") is resolver.resolve("<isCitizenOf>")


class TestPatternTables:
    def test_from_schema(self, tables):
        assert tables.attribute_patterns["born"] == ("<wasBornOnDate>",)
        assert tables.combinations == (CombinationRule(template="<firstname> <lastname>", target="fullname"),)
        assert tables.preferred_meanings["scientist"] == "<wordnet_scientist>"
        assert len(tables.replacements) == 0
        assert len(tables.title_replacements) == 0
