"""Data models for resource references."""

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """A named external corpus (e.g. a codebase) that answers can draw on."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique resource identifier")


class ParsedQuery(BaseModel):
    """A question with its inline @mentions extracted."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(description="Question text with mentions removed")
    resources: list[str] = Field(
        default_factory=list,
        description="Mentioned resource names in order of appearance"
    )
