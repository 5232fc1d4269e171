# ABOUTME: Parses the body of one infobox template into a normalized multi-valued attribute map
# ABOUTME: Applies combination rules that derive new attributes from the parsed ones

from collections.abc import Iterable, Iterator

from infobox_facts.core.attributes import normalize_attribute
from infobox_facts.core.models import CombinationRule
from infobox_facts.extraction.environment import MAX_ENVIRONMENT_SIZE, Terminator, read_environment
from infobox_facts.extraction.stream import CharacterStream
from infobox_facts.utils.logging import get_logger

logger = get_logger(__name__)


class AttributeMap:
    """Normalized attribute name -> set of raw values of one template instance."""

    def __init__(self) -> None:
        self._values: dict[str, set[str]] = {}

    def add(self, name: str, value: str) -> None:
        """Add a value under an already-normalized attribute name."""
        self._values.setdefault(name, set()).add(value)

    def values(self, name: str) -> list[str]:
        """Values of an attribute in lexicographic order."""
        return sorted(self._values.get(name, ()))

    def first(self, name: str) -> str | None:
        """Lexicographically first value of an attribute, None if absent."""
        values = self._values.get(name)
        return min(values) if values else None

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for name in sorted(self._values):
            yield name, self.values(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __repr__(self) -> str:
        return f"AttributeMap({dict(self.items())!r})"


def combine(rule: CombinationRule, attributes: AttributeMap) -> str | None:
    """Build the derived value of a combination rule, None if a reference is unresolved."""
    parts: list[str] = []
    for literal, reference in rule.segments():
        parts.append(literal)
        if reference is None:
            continue
        value = attributes.first(normalize_attribute(reference))
        if value is None:
            return None
        parts.append(value)
    return "".join(parts)


def apply_combinations(attributes: AttributeMap, combinations: Iterable[CombinationRule]) -> None:
    for rule in combinations:
        value = combine(rule, attributes)
        if value is None:
            continue
        attributes.add(normalize_attribute(rule.target), value)


def read_infobox(
    stream: CharacterStream,
    combinations: Iterable[CombinationRule] = (),
    limit: int = MAX_ENVIRONMENT_SIZE,
) -> AttributeMap:
    """Read "name = value" fields up to the end of the template.

    The stream must be positioned after the template's class name. Reading
    stops at an attribute with an empty name, or after a value that ended the
    template (closing brace, end of stream, or size overflow).
    """
    attributes = AttributeMap()
    while True:
        name = normalize_attribute(stream.read_to("=", "}"))
        if not name:
            break
        buffer: list[str] = []
        terminator = read_environment(stream, buffer, limit)
        attributes.add(name, "".join(buffer).strip())
        if terminator is Terminator.OVERFLOW:
            logger.debug("Infobox value exceeded size limit", attribute=name, limit=limit)
        if terminator.ends_template:
            break
    apply_combinations(attributes, combinations)
    return attributes
