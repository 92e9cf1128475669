"""Text diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from proofdiff.models.diff import CompareRequest, DiffComparison, DiffRequest, DiffSegment
from proofdiff.services.config_manager import ConfigManager
from proofdiff.services.diff_generator import DiffGenerator
from proofdiff.services.errors import InputTooLongError

router = APIRouter()


def get_diff_generator() -> DiffGenerator:
    """Diff generator built from the current config"""
    return DiffGenerator.from_config(ConfigManager.get_instance().get_config())


@router.post("", response_model=list[DiffSegment])
async def generate_diff(request: DiffRequest) -> list[DiffSegment]:
    """Align the candidate text against the reference text"""
    try:
        return get_diff_generator().generate_diff(
            request.reference,
            request.candidate,
            collapse=request.collapse,
        )
    except InputTooLongError as e:
        raise HTTPException(status_code=413, detail=str(e))


@router.post("/compare", response_model=DiffComparison)
async def compare_texts(request: CompareRequest) -> DiffComparison:
    """Side-by-side comparison with change stats"""
    try:
        return get_diff_generator().generate_comparison(request.left, request.right)
    except InputTooLongError as e:
        raise HTTPException(status_code=413, detail=str(e))
