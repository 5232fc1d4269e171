# ABOUTME: Schema store and the rule tables compiled from it
# ABOUTME: Snapshots are immutable and built once before a scan

"""
Schema Layer: What the extraction engine checks facts against

This layer handles:
- Loading TSV fact files into an immutable SchemaSnapshot
- Compiling attribute patterns, combination rules, replacement rules and preferred meanings
- Resolving relation identifiers to domain/range/functional metadata
"""

from .loader import load_schema
from .patterns import PatternTables, RelationResolver, ReplacementRules
from .snapshot import SchemaSnapshot

__all__ = [
    "PatternTables",
    "RelationResolver",
    "ReplacementRules",
    "SchemaSnapshot",
    "load_schema",
]
