# ABOUTME: Helpers for the textual fact-component syntax (entities, literals, datatypes)
# ABOUTME: Entities look like <Ada_Lovelace>, literals like "1815-##-##"^^xsd:date

import re

from infobox_facts.core.vocabulary import WIKIPEDIA_URL

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_UNESCAPES = {escaped[1]: char for char, escaped in _ESCAPES.items()}
_SPECIAL = re.compile(r'[\\"\n\r\t]')
_ESCAPED = re.compile(r'\\([\\"nrt])')


def is_literal(component: str) -> bool:
    """Check whether a component is a (possibly typed) literal."""
    return component.startswith('"')


def is_entity(component: str) -> bool:
    return component.startswith("<") and component.endswith(">")


def strip_brackets(component: str) -> str:
    """Remove the angle brackets of an entity, leave anything else untouched."""
    if is_entity(component):
        return component[1:-1]
    return component


def for_entity(name: str) -> str:
    """Build an entity component from a free-text name or wiki title.

    Examples:
        "Ada Lovelace" -> "<Ada_Lovelace>"
        "<Ada_Lovelace>" -> "<Ada_Lovelace>"
    """
    name = name.strip()
    if is_entity(name):
        return name
    return "<" + name.replace(" ", "_") + ">"


def for_string(text: str) -> str:
    """Build an untyped literal, escaping quotes, backslashes and line breaks."""
    escaped = _SPECIAL.sub(lambda match: _ESCAPES[match.group()], text)
    return f'"{escaped}"'


def for_literal(value: str, datatype: str | None = None) -> str:
    literal = for_string(value)
    return f"{literal}^^{datatype}" if datatype else literal


def literal_and_datatype(component: str) -> tuple[str, str | None]:
    """Split a literal component into its unescaped value and datatype.

    Raises:
        ValueError: If the component is not a literal
    """
    if not is_literal(component):
        raise ValueError(f"Not a literal: {component}")
    closing = component.rfind('"')
    if closing <= 0:
        raise ValueError(f"Unterminated literal: {component}")
    value = _ESCAPED.sub(lambda match: _UNESCAPES[match.group(1)], component[1:closing])
    suffix = component[closing + 1 :]
    datatype = suffix[2:] if suffix.startswith("^^") and len(suffix) > 2 else None
    return value, datatype


def as_text(component: str) -> str:
    """Plain text form of a component: literal value, or entity name without brackets."""
    if is_literal(component):
        return literal_and_datatype(component)[0]
    return strip_brackets(component)


def wikipedia_url(entity: str) -> str:
    """Source URL of the Wikipedia page an entity was extracted from."""
    return f"<{WIKIPEDIA_URL}{strip_brackets(entity)}>"
