# ABOUTME: Output sinks and database persistence for extracted facts
# ABOUTME: Pipeline Stage 2: facts -> theme files and SQLite tables

"""
Persistence Layer: Where facts go once extracted

This layer handles:
- In-memory and TSV theme sinks written during a scan
- SQLModel tables and the async database manager

Data Flow: extraction/ facts -> Sinks -> Files / Database
"""

from .manager import FactDatabase
from .models import StoredFact
from .sinks import FanOutFactSink, MemoryFactSink, TsvFactSink

__all__ = [
    "FactDatabase",
    "FanOutFactSink",
    "MemoryFactSink",
    "StoredFact",
    "TsvFactSink",
]
