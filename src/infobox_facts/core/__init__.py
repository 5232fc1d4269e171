# ABOUTME: Domain models and vocabulary shared by every layer
# ABOUTME: Facts, themes, candidate terms, relation metadata and combination rules

"""
Core Layer: The objects the pipeline passes around

This layer holds:
- Fact, Provenance and Theme (the output of a run)
- Term (a candidate object found in an attribute value)
- ExtractionRelation and CombinationRule (compiled schema data)
- Component syntax helpers, attribute-name normalization and vocabulary constants
"""

from .models import (
    DIRTY_INFOBOX_FACTS,
    INFOBOX_SOURCES,
    INFOBOX_TYPES,
    OUTPUT_THEMES,
    CombinationRule,
    ExtractionRelation,
    Fact,
    Provenance,
    Term,
    TermKind,
    Theme,
)

__all__ = [
    "DIRTY_INFOBOX_FACTS",
    "INFOBOX_SOURCES",
    "INFOBOX_TYPES",
    "OUTPUT_THEMES",
    "CombinationRule",
    "ExtractionRelation",
    "Fact",
    "Provenance",
    "Term",
    "TermKind",
    "Theme",
]
