# ABOUTME: Resolves the page title following a <title> marker into the subject entity
# ABOUTME: Title replacement rules can rewrite titles or blank them out to skip a page

import html

from infobox_facts.core import components
from infobox_facts.extraction.stream import CharacterStream
from infobox_facts.schema.patterns import ReplacementRules


class TitleResolver:
    """Reads "Some Title</title>" from the stream and returns "<Some_Title>"."""

    def __init__(self, replacements: ReplacementRules | None = None):
        self.replacements = replacements or ReplacementRules()

    def resolve_text(self, title: str) -> str | None:
        title = self.replacements.transform(html.unescape(title)).strip()
        if not title:
            return None
        return components.for_entity(title)

    def resolve(self, stream: CharacterStream) -> str | None:
        """Consume the title up to its closing tag.

        Returns:
            The subject entity, or None if the title is blank or blanked out by a rule
        """
        title = stream.read_to("<")
        return self.resolve_text(title)
