"""Pydantic schemas for progress updates and lookups."""
from pydantic import BaseModel, ConfigDict, Field


class ProgressUpdateSchema(BaseModel):
    document: str = Field(min_length=1)
    progress: str = Field(min_length=1)
    percentage: float = Field(allow_inf_nan=False)  # finite, but no 0..100 check
    device: str = Field(min_length=1)
    device_id: str = Field(min_length=1)


class ProgressOutSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    progress: str
    percentage: float
    device: str
    device_id: str
    timestamp: int


class StatusSchema(BaseModel):
    status: str
