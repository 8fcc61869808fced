"""
Program Service - Business logic for the Program Catalog.
"""
from typing import List
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import ConflictException, InternalServerException, NotFoundException, ValidationException
from .models import Program
from .repository import ProgramRepository
from .schemas import ProgramCreate, ProgramUpdate

# Set up logging
logger = logging.getLogger(__name__)


class ProgramService:
    """Program Catalog operations over a program repository."""

    def __init__(self, programs: ProgramRepository):
        self.programs = programs

    def create_program(self, program_data: ProgramCreate, created_by_id: str) -> Program:
        """
        Create a program.

        Args:
            program_data: Validated name and description
            created_by_id: ID of the creating user

        Returns:
            Program: Created program with its creator loaded
        """
        program = Program(
            name=program_data.name,
            description=program_data.description,
            created_by_id=created_by_id,
        )
        try:
            program = self.programs.add(program)
        except SQLAlchemyError:
            raise InternalServerException("Failed to create program")
        logger.info(f"Program {program.id} '{program.name}' created by user {created_by_id}")
        return program

    def list_programs(self) -> List[Program]:
        """All programs, most recent first."""
        return self.programs.list_all()

    def get_program(self, program_id: str) -> Program:
        """
        Get a program by ID.

        Raises:
            NotFoundException: If the program does not exist
        """
        program = self.programs.get(program_id)
        if not program:
            raise NotFoundException("Program not found")
        return program

    def update_program(self, program_id: str, update_data: ProgramUpdate) -> Program:
        """
        Update a program's name and/or description.

        Raises:
            NotFoundException: If the program does not exist
            ValidationException: If the name is explicitly cleared
        """
        program = self.get_program(program_id)

        changes = update_data.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] is None:
            raise ValidationException("Program name cannot be empty")
        for field, value in changes.items():
            setattr(program, field, value)

        try:
            program = self.programs.save(program)
        except SQLAlchemyError:
            raise InternalServerException("Failed to update program")
        logger.info(f"Program {program_id} updated fields: {sorted(changes)}")
        return program

    def delete_program(self, program_id: str) -> None:
        """
        Delete a program that has no enrollments.

        Raises:
            NotFoundException: If the program does not exist
            ConflictException: If clients are still enrolled in the program
        """
        program = self.get_program(program_id)

        enrolled = self.programs.count_enrollments(program_id)
        if enrolled:
            logger.warning(f"Refusing to delete program {program_id} with {enrolled} enrollment(s)")
            raise ConflictException(
                f"Program has {enrolled} enrollment(s); delete them before deleting the program"
            )

        try:
            self.programs.delete(program)
        except SQLAlchemyError:
            raise InternalServerException("Failed to delete program")
        logger.info(f"Program {program_id} deleted")
