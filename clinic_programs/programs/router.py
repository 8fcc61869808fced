"""
Program Router - API endpoints for the Program Catalog.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.dependencies import get_current_identity, require_doctor_or_admin
from ..auth.models import User
from ..auth.schemas import TokenIdentity
from .repository import ProgramRepository
from .schemas import (
    MessageResponse,
    ProgramCreate,
    ProgramEnvelope,
    ProgramListResponse,
    ProgramResponse,
    ProgramUpdate,
)
from .service import ProgramService

router = APIRouter()

def get_program_service(db: Session = Depends(get_db)) -> ProgramService:
    """Build the program service for the current request."""
    return ProgramService(ProgramRepository(db))

@router.post("/create", response_model=ProgramEnvelope, status_code=status.HTTP_201_CREATED)
async def create_program(
    program_data: ProgramCreate,
    current_user: User = Depends(require_doctor_or_admin),
    program_service: ProgramService = Depends(get_program_service),
):
    """
    Create a program (doctors and admins).
    """
    program = program_service.create_program(program_data, current_user.id)
    return ProgramEnvelope(message="Program created successfully", data=ProgramResponse.model_validate(program))

@router.put("/update/{program_id}", response_model=ProgramEnvelope)
async def update_program(
    program_id: str,
    update_data: ProgramUpdate,
    current_user: User = Depends(require_doctor_or_admin),
    program_service: ProgramService = Depends(get_program_service),
):
    """
    Update a program's name or description.
    """
    program = program_service.update_program(program_id, update_data)
    return ProgramEnvelope(message="Program updated successfully", data=ProgramResponse.model_validate(program))

@router.delete("/delete/{program_id}", response_model=MessageResponse)
async def delete_program(
    program_id: str,
    current_user: User = Depends(require_doctor_or_admin),
    program_service: ProgramService = Depends(get_program_service),
):
    """
    Delete a program that has no enrollments.
    """
    program_service.delete_program(program_id)
    return MessageResponse(message="Program deleted successfully")

@router.get("/all", response_model=ProgramListResponse)
async def list_programs(
    identity: TokenIdentity = Depends(get_current_identity),
    program_service: ProgramService = Depends(get_program_service),
):
    """
    List all programs, newest first.
    """
    programs = program_service.list_programs()
    return ProgramListResponse(
        message="Programs retrieved successfully",
        data=[ProgramResponse.model_validate(program) for program in programs],
    )

@router.get("/{program_id}", response_model=ProgramEnvelope)
async def get_program(
    program_id: str,
    identity: TokenIdentity = Depends(get_current_identity),
    program_service: ProgramService = Depends(get_program_service),
):
    """
    Get a program by ID.
    """
    program = program_service.get_program(program_id)
    return ProgramEnvelope(message="Program retrieved successfully", data=ProgramResponse.model_validate(program))
