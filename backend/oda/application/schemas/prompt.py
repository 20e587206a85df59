"""Pydantic schemas for the chat prompt API."""

from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """A chat prompt: a search request or a detail request."""

    prompt: str = Field(..., min_length=1, description="Free-text prompt, e.g. '서울 교통 데이터 5개'")


class DetailRequest(BaseModel):
    """Direct detail lookup by (approximate) file name."""

    file_data_name: str = Field(..., min_length=1, alias="fileDataName")

    model_config = {"populate_by_name": True}


class PromptResponse(BaseModel):
    """Lines to show in the chat window."""

    results: list[str]
