# ABOUTME: Term extraction strategies that turn a cleaned attribute value into candidate terms
# ABOUTME: Strategy selection is a tagged dispatch keyed by the target class of the relation

import re
from collections.abc import Callable, Mapping
from enum import Enum

from infobox_facts.core.models import Term
from infobox_facts.core.vocabulary import (
    RDFS_CLASS,
    XSD_DATE,
    XSD_DECIMAL,
    XSD_INTEGER,
    XSD_NON_NEGATIVE_INTEGER,
    XSD_STRING,
)
from infobox_facts.schema.patterns import lookup_meaning
from infobox_facts.schema.snapshot import SchemaSnapshot


class TermStrategy(str, Enum):
    """How candidate terms are read from a value; one variant per kind of target class."""

    CLASS_NAME = "class_name"
    NUMBER = "number"
    DATE = "date"
    STRING = "string"
    ENTITY_LINK = "entity_link"


def select_strategy(target_class: str, schema: SchemaSnapshot) -> TermStrategy:
    if target_class == RDFS_CLASS:
        return TermStrategy.CLASS_NAME
    if schema.is_subclass_of(target_class, XSD_DATE):
        return TermStrategy.DATE
    if schema.is_subclass_of(target_class, XSD_DECIMAL):
        return TermStrategy.NUMBER
    if schema.is_subclass_of(target_class, XSD_STRING):
        return TermStrategy.STRING
    return TermStrategy.ENTITY_LINK


# --- Markup helpers -------------------------------------------------------------------

_WIKI_LINK = re.compile(r"\[\[([^\[\]|]*)(?:\|([^\[\]]*))?\]\]")
_TEMPLATE = re.compile(r"\{\{[^{}]*\}\}")
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_REFERENCE = re.compile(r"<ref[^>/]*/>|<ref[^>]*>.*?</ref>", re.DOTALL | re.IGNORECASE)
_LINE_BREAK = re.compile(r"<br\s*/?>|\n", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[^>]+>")
_EMPHASIS = re.compile(r"'{2,}")
_WHITESPACE = re.compile(r"\s+")
_LIST_SEPARATOR = re.compile(r"<br\s*/?>|[\n,;]", re.IGNORECASE)


def strip_noise(text: str) -> str:
    """Remove comments and references, which never hold extractable terms."""
    return _REFERENCE.sub("", _COMMENT.sub("", text))


def plain_text(text: str) -> str:
    """Render wiki markup as plain text: links become their labels, templates and tags vanish."""
    text = _WIKI_LINK.sub(lambda m: m.group(2) if m.group(2) is not None else m.group(1), text)
    # Templates may nest; remove innermost first
    previous = None
    while previous != text:
        previous = text
        text = _TEMPLATE.sub("", text)
    text = _HTML_TAG.sub("", text)
    text = _EMPHASIS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def wiki_link_targets(text: str) -> list[tuple[str, str]]:
    """(target, label) of every article link; links into other namespaces are skipped."""
    links = []
    for match in _WIKI_LINK.finditer(text):
        target = match.group(1).split("#", 1)[0].strip()
        if not target or ":" in target:
            continue
        label = match.group(2).strip() if match.group(2) is not None else target
        links.append((target, label))
    return links


# --- Strategies -----------------------------------------------------------------------


def extract_entity_links(text: str, target_class: str, meanings: Mapping[str, str]) -> list[Term]:
    terms: list[Term] = []
    for target, _label in wiki_link_targets(strip_noise(text)):
        terms.append(Term.entity(target[0].upper() + target[1:]))
    return terms


def extract_class_names(text: str, target_class: str, meanings: Mapping[str, str]) -> list[Term]:
    text = strip_noise(text)
    words: list[str] = []
    for target, label in wiki_link_targets(text):
        words.extend((target, label))
    words.extend(_LIST_SEPARATOR.split(text))

    terms: list[Term] = []
    seen: set[str] = set()
    for word in words:
        meaning = lookup_meaning(meanings, plain_text(word))
        if meaning is None or meaning in seen:
            continue
        seen.add(meaning)
        terms.append(Term.entity(meaning))
    return terms


def extract_strings(text: str, target_class: str, meanings: Mapping[str, str]) -> list[Term]:
    # Plain strings stay untyped; subtypes of string carry the target as datatype
    datatype = None if target_class == XSD_STRING else target_class
    terms: list[Term] = []
    for line in _LINE_BREAK.split(strip_noise(text)):
        value = plain_text(line)
        if value:
            terms.append(Term.literal(value, datatype))
    return terms


_NUMBER = re.compile(r"(?<![\w.])([-+−]?)(\d{1,3}(?:,\d{3})+|\d+)(\.\d+)?(?![\w-])")


def extract_numbers(text: str, target_class: str, meanings: Mapping[str, str]) -> list[Term]:
    terms: list[Term] = []
    for match in _NUMBER.finditer(plain_text(strip_noise(text))):
        sign, digits, fraction = match.group(1), match.group(2).replace(",", ""), match.group(3)
        negative = sign in ("-", "−")
        value = ("-" if negative else "") + digits + (fraction or "")
        if fraction:
            datatype = XSD_DECIMAL
        elif negative:
            datatype = XSD_INTEGER
        else:
            datatype = XSD_NON_NEGATIVE_INTEGER
        terms.append(Term.literal(value, datatype))
    return terms


_MONTHS = {
    name: index
    for index, name in enumerate(
        [
            "january",
            "february",
            "march",
            "april",
            "may",
            "june",
            "july",
            "august",
            "september",
            "october",
            "november",
            "december",
        ],
        start=1,
    )
}
_MONTH = r"(" + "|".join(_MONTHS) + r")"

# Highest priority first; later patterns only match text not already claimed
_DATE_PATTERNS: list[tuple[re.Pattern[str], Callable[[re.Match[str]], tuple[str, str | None, str | None]]]] = [
    (
        re.compile(r"\{\{[^{}|]*date[^{}|]*\|(?:[^{}|=]*=[^{}|]*\|)*\s*(\d{1,4})\s*\|\s*(\d{1,2})\s*\|\s*(\d{1,2})\s*[|}]",
                   re.IGNORECASE),
        lambda m: (m.group(1), m.group(2), m.group(3)),
    ),
    (
        re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b"),
        lambda m: (m.group(1), m.group(2), m.group(3)),
    ),
    (
        re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)?\s+" + _MONTH + r",?\s+(\d{1,4})\b", re.IGNORECASE),
        lambda m: (m.group(3), str(_MONTHS[m.group(2).lower()]), m.group(1)),
    ),
    (
        re.compile(r"\b" + _MONTH + r"\s+(\d{1,2})(?:st|nd|rd|th)?,?\s+(\d{1,4})\b", re.IGNORECASE),
        lambda m: (m.group(3), str(_MONTHS[m.group(1).lower()]), m.group(2)),
    ),
    (
        re.compile(r"\b" + _MONTH + r",?\s+(\d{1,4})\b", re.IGNORECASE),
        lambda m: (m.group(2), str(_MONTHS[m.group(1).lower()]), None),
    ),
    (
        re.compile(r"(?<![\w-])(\d{3,4})(?![\w-])"),
        lambda m: (m.group(1), None, None),
    ),
]


def format_date(year: str, month: str | None, day: str | None) -> str | None:
    """Render a date with '#' for unknown digits, e.g. 1815-12-##; None if out of range."""
    if month is not None and not 1 <= int(month) <= 12:
        return None
    if day is not None and not 1 <= int(day) <= 31:
        return None
    return "-".join(
        [
            year.zfill(4),
            month.zfill(2) if month is not None else "##",
            day.zfill(2) if day is not None else "##",
        ]
    )


def extract_dates(text: str, target_class: str, meanings: Mapping[str, str]) -> list[Term]:
    text = strip_noise(text)
    claimed: list[tuple[int, int, str]] = []
    for pattern, parts in _DATE_PATTERNS:
        for match in pattern.finditer(text):
            start, end = match.span()
            if any(start < taken_end and taken_start < end for taken_start, taken_end, _ in claimed):
                continue
            value = format_date(*parts(match))
            if value is not None:
                claimed.append((start, end, value))
    return [Term.literal(value, XSD_DATE) for _, _, value in sorted(claimed)]


TermExtractor = Callable[[str, str, Mapping[str, str]], list[Term]]

EXTRACTORS: dict[TermStrategy, TermExtractor] = {
    TermStrategy.CLASS_NAME: extract_class_names,
    TermStrategy.NUMBER: extract_numbers,
    TermStrategy.DATE: extract_dates,
    TermStrategy.STRING: extract_strings,
    TermStrategy.ENTITY_LINK: extract_entity_links,
}


def extract_terms(
    strategy: TermStrategy, text: str, target_class: str, meanings: Mapping[str, str] | None = None
) -> list[Term]:
    """Run a strategy over a cleaned value and return its candidates in order of appearance."""
    return EXTRACTORS[strategy](text, target_class, meanings or {})
