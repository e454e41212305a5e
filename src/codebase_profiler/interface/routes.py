"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from codebase_profiler.interface.dependencies import get_use_case
from codebase_profiler.interface.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from codebase_profiler.services.analyze_codebase import AnalyzeCodebaseUseCase
from codebase_profiler.services.insights import language_summary, recommended_tools

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Malformed file list or too many files"},
    },
)
def analyze(
    body: AnalyzeRequest,
    use_case: AnalyzeCodebaseUseCase = Depends(get_use_case),
) -> AnalyzeResponse:
    """Profile the submitted files."""
    result = use_case.execute([f.model_dump() for f in body.files])
    payload = asdict(result)
    if not body.include_file_analyses:
        payload["file_analyses"] = []
    return AnalyzeResponse(
        **payload,
        summary=language_summary(result),
        recommended_tools=recommended_tools(result),
    )
