"""
Program Schemas - Pydantic models for program data validation and serialization.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

def _strip_name(value):
    return value.strip() if isinstance(value, str) else value

class ProgramCreate(BaseModel):
    """
    Program Creation Schema

    Fields:
    - name: Program name (required, not blank)
    - description: Optional description
    """
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return _strip_name(value)

class ProgramUpdate(BaseModel):
    """Program Update Schema - only supplied fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return _strip_name(value)

class CreatorSummary(BaseModel):
    id: str
    full_name: str

    class Config:
        from_attributes = True

class ProgramSummary(BaseModel):
    """Program columns without the joined creator, as embedded in enrollments."""
    id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    created_by_id: str

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class ProgramResponse(ProgramSummary):
    """
    Program Response Schema

    Fields:
    - id, name, description, created_at, created_by_id
    - created_by: Creator summary {id, full_name}
    """
    created_by: Optional[CreatorSummary] = None

class ProgramEnvelope(BaseModel):
    message: str
    data: ProgramResponse

class ProgramListResponse(BaseModel):
    message: str
    data: List[ProgramResponse]

class MessageResponse(BaseModel):
    message: str
