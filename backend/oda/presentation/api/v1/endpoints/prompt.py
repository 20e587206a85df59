"""Chat prompt endpoints — dataset search and detail lookup."""

from fastapi import APIRouter, Depends

from oda.application.schemas import DetailRequest, PromptRequest, PromptResponse
from oda.application.services import PromptService
from oda.infrastructure.dependencies import get_prompt_service

router = APIRouter(prefix="/prompt", tags=["Prompt"])


@router.post("", response_model=PromptResponse)
async def process_prompt(
    data: PromptRequest,
    service: PromptService = Depends(get_prompt_service),
) -> PromptResponse:
    """Answer a chat prompt with dataset names or one dataset's details."""
    return PromptResponse(results=await service.process_prompt(data.prompt))


@router.post("/details", response_model=PromptResponse)
async def get_details(
    data: DetailRequest,
    service: PromptService = Depends(get_prompt_service),
) -> PromptResponse:
    """Detail report for a file name picked from a result list."""
    return PromptResponse(results=[await service.lookup_details(data.file_data_name.strip())])
