"""Pydantic schemas for dataset utilization recommendations.

Field aliases keep the camelCase body shape the chat UI sends.
"""

from pydantic import BaseModel, Field


class DataInfo(BaseModel):
    """The dataset the user selected in the chat UI."""

    file_name: str = Field(..., min_length=1, alias="fileName")

    model_config = {"populate_by_name": True}


class FullUtilizationRequest(BaseModel):
    data_info: DataInfo = Field(..., alias="dataInfo")

    model_config = {"populate_by_name": True}


class SingleUtilizationRequest(BaseModel):
    """``analysisType`` carries the user's own question about the dataset."""

    data_info: DataInfo = Field(..., alias="dataInfo")
    analysis_type: str = Field(..., min_length=1, alias="analysisType")

    model_config = {"populate_by_name": True}


class UtilizationTextResponse(BaseModel):
    file_data_name: str
    recommendations: str
