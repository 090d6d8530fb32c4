from pydantic import BaseModel, ConfigDict, Field


class CompletionRequest(BaseModel):
    """Body sent to the completion endpoint."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(description="The user's latest message")


class CompletionReply(BaseModel):
    """Body returned by the completion endpoint.

    Exactly one of ``response`` or ``error`` is expected. Extra fields
    (provider, model) are accepted and ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    response: str | None = Field(default=None, description="Assistant reply text")
    error: str | None = Field(default=None, description="Provider-reported failure")
