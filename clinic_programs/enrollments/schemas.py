"""
Enrollment Schemas - Pydantic models for enrollment data validation and serialization.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel
from .models import EnrollmentStatus
from ..clients.schemas import ClientResponse
from ..programs.schemas import CreatorSummary, ProgramSummary

class EnrollmentCreate(BaseModel):
    """
    Enrollment Creation Schema

    Fields:
    - client_id: Client to enroll
    - program_id: Program to enroll into
    - status: Initial status, ACTIVE when omitted
    - notes: Optional free text

    Blank ids are rejected by the service with a validation error.
    """
    client_id: Optional[str] = None
    program_id: Optional[str] = None
    status: Optional[EnrollmentStatus] = None
    notes: Optional[str] = None

class EnrollmentStatusUpdate(BaseModel):
    """Status change request; ``status`` is required."""
    status: Optional[EnrollmentStatus] = None

class EnrollmentResponse(BaseModel):
    """
    Enrollment Response Schema

    Includes the joined client, program and enrolling user.
    """
    id: str
    client_id: str
    program_id: str
    enrolled_by_id: str
    enrollment_date: datetime
    status: EnrollmentStatus
    notes: Optional[str] = None
    client: Optional[ClientResponse] = None
    program: Optional[ProgramSummary] = None
    enrolled_by: Optional[CreatorSummary] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class EnrollmentEnvelope(BaseModel):
    message: str
    enrollment: EnrollmentResponse

class EnrollmentListResponse(BaseModel):
    message: str
    enrollments: List[EnrollmentResponse]