"""Pydantic models for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ....core.domain import Response


class QueryRequest(BaseModel):
    """Request model for asking a question.

    ``query`` is optional here so a missing or blank query reaches the
    handler and gets the structured 400 body instead of a 422.
    """

    query: str | None = Field(
        None,
        description="Question about the Ministry of Finance",
        json_schema_extra={"example": "Where is the ministry located?"},
    )


class SourceModel(BaseModel):
    """A cited source."""

    title: str = Field(..., description="Source title")
    url: str = Field(..., description="Source URL")
    category: str | None = Field(None, description="Document category")


class OptionModel(BaseModel):
    """A suggested follow-up action."""

    label: str = Field(..., description="Button text")
    action: str = Field(..., description="external, contact, info, document or location")
    payload: str = Field(..., description="URL for external actions, otherwise a query")


class Timings(BaseModel):
    """Server-side timing of the request."""

    total_ms: int = Field(..., description="Total handling time in milliseconds")


class AskResponse(BaseModel):
    """Response model for an answered query."""

    summary: str = Field(..., description="Answer text")
    sources: list[SourceModel] = Field(default_factory=list, description="Cited sources")
    guardrail_status: Literal["ok", "not_found", "error"] = Field(
        ..., description="Whether the answer is grounded in retrieved content"
    )
    options: list[OptionModel] = Field(default_factory=list, description="Follow-up options")
    intent: str | None = Field(None, description="Classified intent")
    confidence: float | None = Field(None, ge=0, le=1, description="Classification confidence")
    timings: Timings | None = Field(None, description="Request timings")

    @classmethod
    def from_response(cls, response: Response, total_ms: int) -> "AskResponse":
        return cls(**response.to_dict(), timings=Timings(total_ms=total_ms))


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    content_store: str = Field(..., description="Content store status")
    documents: int | None = Field(None, description="Active documents in the store")
    excerpts: int | None = Field(None, description="Excerpts in the store")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., MOF_VAL_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "EmptyQueryError", "code": "MOF_VAL_002", "message": "..."},
            "location": {"class": "<module>", "method": "ask", ...},
            "guardrail_status": "error"
        }
    """

    error: ErrorDetail = Field(..., description="Error details including type, code, and message")
    location: ErrorLocation | None = Field(None, description="Source location of the error")
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
    summary: str | None = Field(None, description="User-facing apology")
    guardrail_status: Literal["error"] = "error"
