"""Dataset utilization recommendation endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from oda.application.schemas import (
    FullUtilizationRequest,
    SingleUtilizationRequest,
    UtilizationTextResponse,
)
from oda.application.services import UtilizationService
from oda.infrastructure.dependencies import get_utilization_service

router = APIRouter(prefix="/data-utilization", tags=["Data Utilization"])


@router.post("/full")
async def full_recommendations(
    data: FullUtilizationRequest,
    service: UtilizationService = Depends(get_utilization_service),
) -> dict[str, Any]:
    """Dashboard payload with every recommendation section."""
    result = await service.get_full_utilization_recommendations(data.data_info.file_name)
    if "error" in result:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result["error"])
    return result


@router.post("/single", response_model=list[str])
async def single_recommendation(
    data: SingleUtilizationRequest,
    service: UtilizationService = Depends(get_utilization_service),
) -> list[str]:
    """Recommendations answering the user's own question about a dataset."""
    return await service.get_single_utilization_recommendation(
        data.data_info.file_name, data.analysis_type
    )


@router.get("/{file_data_name}", response_model=UtilizationTextResponse)
async def text_recommendations(
    file_data_name: str,
    service: UtilizationService = Depends(get_utilization_service),
) -> UtilizationTextResponse:
    """Formatted recommendation text for the chat window."""
    text = await service.get_utilization_recommendations(file_data_name)
    return UtilizationTextResponse(file_data_name=file_data_name, recommendations=text)
