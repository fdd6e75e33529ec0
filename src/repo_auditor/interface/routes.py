"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from repo_auditor.domain.exceptions import ProviderError
from repo_auditor.interface.dependencies import get_dispatcher, get_use_case
from repo_auditor.interface.error_handlers import error_json
from repo_auditor.interface.schemas import (
    AuditRequest,
    AuditResponse,
    ErrorResponse,
    ProviderDescription,
    TextResponse,
)
from repo_auditor.services.audit_repo import AuditRepoUseCase
from repo_auditor.services.provider_dispatcher import PROVIDER_CATALOGUE, ProviderDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
health_router = APIRouter()

CHECK_PROMPT = "return a max length text possible"


@router.post(
    "/audit",
    response_model=AuditResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Bad URL or no auditable files"},
        500: {"model": ErrorResponse, "description": "Provider error or missing API key"},
    },
)
async def audit(
    body: AuditRequest,
    use_case: AuditRepoUseCase = Depends(get_use_case),
) -> AuditResponse:
    """Audit the Rust sources of a public GitHub repository."""
    report = await use_case.execute(body.github_url, body.provider, body.custom_api_key)
    return AuditResponse(report=report.text)


@router.get("/providers", response_model=list[ProviderDescription])
async def providers() -> list[ProviderDescription]:
    """List the selectable providers."""
    return [
        ProviderDescription(id=p.id.value, label=p.label, requires_api_key=p.requires_api_key)
        for p in PROVIDER_CATALOGUE
    ]


@router.get(
    "/gemini",
    response_model=TextResponse,
    responses={500: {"model": ErrorResponse}},
)
async def check_default_provider(
    dispatcher: ProviderDispatcher = Depends(get_dispatcher),
) -> TextResponse | JSONResponse:
    """Check that the default provider answers a plain prompt."""
    try:
        text = await dispatcher.ask_default(CHECK_PROMPT)
    except ProviderError as exc:
        logger.warning("Default provider check failed: %s", exc)
        return error_json(500, "Failed to fetch AI response")
    return TextResponse(text=text)


@health_router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    """Liveness check; touches neither GitHub nor any provider."""
    return {"status": "ok"}
