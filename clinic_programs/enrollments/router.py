"""
Enrollment Router - API endpoints for enrolling clients in programs.
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..auth.dependencies import get_current_identity, require_doctor
from ..auth.models import User
from ..auth.schemas import TokenIdentity
from ..clients.repository import ClientRepository
from ..programs.repository import ProgramRepository
from ..programs.schemas import MessageResponse
from .models import Enrollment
from .repository import EnrollmentRepository
from .schemas import (
    EnrollmentCreate,
    EnrollmentEnvelope,
    EnrollmentListResponse,
    EnrollmentResponse,
    EnrollmentStatusUpdate,
)
from .service import EnrollmentService

router = APIRouter()

def get_enrollment_service(db: Session = Depends(get_db)) -> EnrollmentService:
    """Build the enrollment service and its repositories for the current request."""
    return EnrollmentService(
        EnrollmentRepository(db),
        ClientRepository(db),
        ProgramRepository(db),
        raise_on_empty=settings.strict_empty_enrollment_lists,
    )

def _as_list(message: str, enrollments: List[Enrollment]) -> EnrollmentListResponse:
    return EnrollmentListResponse(
        message=message,
        enrollments=[EnrollmentResponse.model_validate(enrollment) for enrollment in enrollments],
    )

@router.post("/enroll", response_model=EnrollmentEnvelope, status_code=status.HTTP_201_CREATED)
async def enroll_client(
    enrollment_data: EnrollmentCreate,
    current_user: User = Depends(require_doctor),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    """
    Enroll a client in a program (doctors only).
    """
    enrollment = enrollment_service.enroll(enrollment_data, current_user.id)
    return EnrollmentEnvelope(
        message="Client enrolled successfully",
        enrollment=EnrollmentResponse.model_validate(enrollment),
    )

@router.get("/client/{client_id}", response_model=EnrollmentListResponse)
async def get_client_enrollments(
    client_id: str,
    identity: TokenIdentity = Depends(get_current_identity),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    """
    List a client's enrollments.
    """
    enrollments = enrollment_service.list_by_client(client_id)
    return _as_list("Client enrollments retrieved successfully", enrollments)

@router.get("/program/{program_id}", response_model=EnrollmentListResponse)
async def get_program_enrollments(
    program_id: str,
    identity: TokenIdentity = Depends(get_current_identity),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    """
    List the enrollments of a program.
    """
    enrollments = enrollment_service.list_by_program(program_id)
    return _as_list("Program enrollments retrieved successfully", enrollments)

@router.put("/update/{enrollment_id}", response_model=EnrollmentEnvelope)
@router.patch("/enrollments/{enrollment_id}", response_model=EnrollmentEnvelope)
async def update_enrollment_status(
    enrollment_id: str,
    status_update: EnrollmentStatusUpdate,
    current_user: User = Depends(require_doctor),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    """
    Change an enrollment's status (doctors only).
    """
    enrollment = enrollment_service.update_status(enrollment_id, status_update.status)
    return EnrollmentEnvelope(
        message="Enrollment status updated successfully",
        enrollment=EnrollmentResponse.model_validate(enrollment),
    )

@router.delete("/enrollments/{enrollment_id}", response_model=MessageResponse)
async def delete_enrollment(
    enrollment_id: str,
    current_user: User = Depends(require_doctor),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    """
    Delete an enrollment (doctors only).
    """
    enrollment_service.delete(enrollment_id)
    return MessageResponse(message="Enrollment deleted successfully")

@router.get("/all", response_model=EnrollmentListResponse)
async def get_all_enrollments(
    current_user: User = Depends(require_doctor),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
):
    """
    List every enrollment (doctors only).
    """
    enrollments = enrollment_service.list_all()
    return _as_list("All enrollments retrieved successfully", enrollments)
