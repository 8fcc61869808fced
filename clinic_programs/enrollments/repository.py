"""
Enrollment repository - persistence access for the Enrollment Engine.
"""
from typing import List, Optional
from sqlalchemy.orm import joinedload

from ..core.repository import SqlRepository
from .models import Enrollment


class EnrollmentRepository(SqlRepository):
    """Repository for enrollment rows and their joined client/program/user."""

    def _query(self):
        return self.db.query(Enrollment).options(
            joinedload(Enrollment.client),
            joinedload(Enrollment.program),
            joinedload(Enrollment.enrolled_by),
        )

    def add(self, enrollment: Enrollment) -> Enrollment:
        """
        Persist a new enrollment.

        Raises:
            IntegrityError: If (client_id, program_id) is already taken (after rollback)
        """
        self.db.add(enrollment)
        return self._commit(enrollment)

    def get(self, enrollment_id: str) -> Optional[Enrollment]:
        return self._query().filter(Enrollment.id == enrollment_id).first()

    def find_by_client_and_program(self, client_id: str, program_id: str) -> Optional[Enrollment]:
        return (
            self.db.query(Enrollment)
            .filter(Enrollment.client_id == client_id, Enrollment.program_id == program_id)
            .first()
        )

    def list_by_client(self, client_id: str) -> List[Enrollment]:
        return (
            self._query()
            .filter(Enrollment.client_id == client_id)
            .order_by(Enrollment.enrollment_date.desc(), Enrollment.id)
            .all()
        )

    def list_by_program(self, program_id: str) -> List[Enrollment]:
        return (
            self._query()
            .filter(Enrollment.program_id == program_id)
            .order_by(Enrollment.enrollment_date.desc(), Enrollment.id)
            .all()
        )

    def list_all(self) -> List[Enrollment]:
        return self._query().order_by(Enrollment.enrollment_date.desc(), Enrollment.id).all()

    def save(self, enrollment: Enrollment) -> Enrollment:
        return self._commit(enrollment)

    def delete(self, enrollment: Enrollment) -> None:
        self.db.delete(enrollment)
        self._commit()
