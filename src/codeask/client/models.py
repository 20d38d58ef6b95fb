"""Request and configuration models exchanged with the answer server."""

from pydantic import BaseModel, ConfigDict, Field


class ModelConfig(BaseModel):
    """Provider and model the server answers with."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    provider: str = Field(default="", description="Inference provider name")
    model: str = Field(default="", description="Model identifier")

    def __str__(self) -> str:
        if not self.provider:
            return self.model or "unknown"
        return f"{self.provider}/{self.model}"


class QuestionRequest(BaseModel):
    """Body of a streaming question request."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(description="Question text with mentions removed")
    resources: list[str] = Field(description="Resources to search")
    quiet: bool = Field(default=True, description="Suppress server-side progress output")
