"""
Enrollment Service - the enrollment lifecycle.

Enrolling validates both references and the one-enrollment-per-program rule
before writing. The rule is also a unique constraint in the database, so a
concurrent duplicate that slips past the read check is reported the same way.
Status changes are unrestricted: any status may follow any other.
"""
from typing import List, Optional, Union
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..clients.repository import ClientRepository
from ..exceptions import (
    ConflictException,
    InternalServerException,
    NotFoundException,
    ValidationException,
)
from ..programs.repository import ProgramRepository
from .models import Enrollment, EnrollmentStatus
from .repository import EnrollmentRepository
from .schemas import EnrollmentCreate

# Set up logging
logger = logging.getLogger(__name__)

ALREADY_ENROLLED = "Client is already enrolled in this program"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def parse_status(status: Union[EnrollmentStatus, str, None]) -> EnrollmentStatus:
    """
    Coerce a status value to ``EnrollmentStatus``.

    Raises:
        ValidationException: If the status is missing or not a known value
    """
    if isinstance(status, EnrollmentStatus):
        return status
    if _is_blank(status):
        raise ValidationException("Status is required")
    try:
        return EnrollmentStatus(str(status).strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in EnrollmentStatus)
        raise ValidationException(f"Invalid status '{status}'. Allowed values: {allowed}")


class EnrollmentService:
    """
    Enrollment Engine operations.

    Args:
        enrollments: Enrollment repository
        clients: Client repository used for reference checks
        programs: Program repository used for reference checks
        raise_on_empty: Report an empty program listing or an empty store as
            not-found instead of returning an empty list
    """

    def __init__(
        self,
        enrollments: EnrollmentRepository,
        clients: ClientRepository,
        programs: ProgramRepository,
        raise_on_empty: bool = False,
    ):
        self.enrollments = enrollments
        self.clients = clients
        self.programs = programs
        self.raise_on_empty = raise_on_empty

    def enroll(self, enrollment_data: EnrollmentCreate, enrolled_by_id: str) -> Enrollment:
        """
        Enroll a client in a program.

        Args:
            enrollment_data: client_id, program_id, optional status and notes
            enrolled_by_id: ID of the user performing the enrollment

        Returns:
            Enrollment: Created enrollment with client and program loaded

        Raises:
            ValidationException: If client_id or program_id is missing
            NotFoundException: If the client or the program does not exist
            ConflictException: If the client is already enrolled in the program
        """
        client_id = enrollment_data.client_id
        program_id = enrollment_data.program_id
        if _is_blank(client_id) or _is_blank(program_id):
            raise ValidationException("client_id and program_id are required")

        if not self.clients.exists(client_id):
            raise NotFoundException("Client does not exist")

        if not self.programs.exists(program_id):
            raise NotFoundException("Program does not exist")

        if self.enrollments.find_by_client_and_program(client_id, program_id):
            logger.warning(f"Client {client_id} already enrolled in program {program_id}")
            raise ConflictException(ALREADY_ENROLLED)

        enrollment = Enrollment(
            client_id=client_id,
            program_id=program_id,
            enrolled_by_id=enrolled_by_id,
            status=enrollment_data.status or EnrollmentStatus.ACTIVE,
            notes=enrollment_data.notes,
        )
        try:
            enrollment = self.enrollments.add(enrollment)
        except IntegrityError:
            logger.warning(f"Unique constraint rejected duplicate enrollment of {client_id} in {program_id}")
            raise ConflictException(ALREADY_ENROLLED)
        except SQLAlchemyError:
            raise InternalServerException("Failed to enroll client")

        logger.info(
            f"Client {client_id} enrolled in program {program_id} "
            f"as {enrollment.status.value} by user {enrolled_by_id}"
        )
        return enrollment

    def list_by_client(self, client_id: str) -> List[Enrollment]:
        """
        All enrollments of a client. An empty list is a valid result.

        Raises:
            ValidationException: If client_id is blank
        """
        if _is_blank(client_id):
            raise ValidationException("client_id is required")
        return self.enrollments.list_by_client(client_id)

    def list_by_program(self, program_id: str) -> List[Enrollment]:
        """
        All enrollments in a program.

        Raises:
            ValidationException: If program_id is blank
            NotFoundException: If there are none and ``raise_on_empty`` is set
        """
        if _is_blank(program_id):
            raise ValidationException("program_id is required")
        enrollments = self.enrollments.list_by_program(program_id)
        if not enrollments and self.raise_on_empty:
            raise NotFoundException("No enrollments found")
        return enrollments

    def update_status(
        self,
        enrollment_id: str,
        status: Union[EnrollmentStatus, str, None],
    ) -> Enrollment:
        """
        Set an enrollment's status. Setting the current status again is a no-op.

        Raises:
            ValidationException: If an argument is missing or the status is unknown
            NotFoundException: If the enrollment does not exist
        """
        if _is_blank(enrollment_id):
            raise ValidationException("Enrollment id is required")
        new_status = parse_status(status)

        enrollment = self.enrollments.get(enrollment_id)
        if not enrollment:
            raise NotFoundException("Enrollment not found")

        previous = enrollment.status
        enrollment.status = new_status
        try:
            enrollment = self.enrollments.save(enrollment)
        except SQLAlchemyError:
            raise InternalServerException("Failed to update enrollment status")

        logger.info(f"Enrollment {enrollment_id} status {previous.value} -> {new_status.value}")
        return enrollment

    def delete(self, enrollment_id: str) -> None:
        """
        Hard-delete an enrollment.

        Raises:
            NotFoundException: If the enrollment does not exist
        """
        enrollment = None if _is_blank(enrollment_id) else self.enrollments.get(enrollment_id)
        if not enrollment:
            raise NotFoundException("Enrollment not found")

        try:
            self.enrollments.delete(enrollment)
        except SQLAlchemyError:
            raise InternalServerException("Failed to delete enrollment")
        logger.info(f"Enrollment {enrollment_id} deleted")

    def list_all(self) -> List[Enrollment]:
        """
        Every enrollment with client, program and enrolling user.

        Raises:
            NotFoundException: If there are none and ``raise_on_empty`` is set
        """
        enrollments = self.enrollments.list_all()
        if not enrollments and self.raise_on_empty:
            raise NotFoundException("No enrollments found")
        return enrollments
