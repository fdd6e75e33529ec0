"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AuditRequest(BaseModel):
    """Request body for ``POST /api/audit``."""

    model_config = ConfigDict(populate_by_name=True)

    github_url: str | None = Field(default=None, alias="githubUrl")
    provider: str | None = "default"
    custom_api_key: str | None = Field(default=None, alias="customApiKey", repr=False)

    @field_validator("github_url")
    @classmethod
    def _strip(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


class AuditResponse(BaseModel):
    """Successful response from ``POST /api/audit``."""

    report: str


class ProviderDescription(BaseModel):
    """One entry of ``GET /api/providers``."""

    id: str
    label: str
    requires_api_key: bool = Field(serialization_alias="requiresApiKey")


class TextResponse(BaseModel):
    """Successful response from ``GET /api/gemini``."""

    text: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    error: str
