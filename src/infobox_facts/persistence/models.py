# ABOUTME: SQLModel table for persisted facts, one row per fact and theme
# ABOUTME: Rows keep the fact components verbatim so they round-trip into Fact objects

from __future__ import annotations

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel

from infobox_facts.core.models import Fact


def utcnow() -> datetime:
    """Returns the current UTC timestamp."""

    return datetime.now(UTC)


class StoredFact(SQLModel, table=True):
    """A fact written by an extraction run."""

    __tablename__ = "fact"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    fact_id: str = Field(index=True, description="Stable hash identifier of the triple")
    theme: str = Field(index=True, description="Output theme the fact belongs to")
    subject: str = Field(index=True, description="Subject component")
    relation: str = Field(index=True, description="Relation component")
    object: str = Field(description="Object component, entity or literal")
    created_at: datetime = Field(default_factory=utcnow, description="Timestamp when the fact was stored")

    @classmethod
    def from_fact(cls, theme: str, fact: Fact) -> StoredFact:
        return cls(fact_id=fact.id, theme=theme, subject=fact.subject, relation=fact.relation, object=fact.object)

    def to_fact(self) -> Fact:
        return Fact(subject=self.subject, relation=self.relation, object=self.object)
