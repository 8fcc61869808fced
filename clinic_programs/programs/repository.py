"""
Program repository - persistence access for the Program Catalog.
"""
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import joinedload

from ..core.repository import SqlRepository
from ..enrollments.models import Enrollment
from .models import Program


class ProgramRepository(SqlRepository):
    """Repository for program CRUD."""

    def add(self, program: Program) -> Program:
        self.db.add(program)
        return self._commit(program)

    def get(self, program_id: str) -> Optional[Program]:
        return (
            self.db.query(Program)
            .options(joinedload(Program.created_by))
            .filter(Program.id == program_id)
            .first()
        )

    def exists(self, program_id: str) -> bool:
        return self.db.query(Program.id).filter(Program.id == program_id).first() is not None

    def list_all(self) -> List[Program]:
        """All programs with their creator, newest first."""
        return (
            self.db.query(Program)
            .options(joinedload(Program.created_by))
            .order_by(Program.created_at.desc(), Program.id)
            .all()
        )

    def count_enrollments(self, program_id: str) -> int:
        return (
            self.db.query(func.count(Enrollment.id))
            .filter(Enrollment.program_id == program_id)
            .scalar()
        )

    def save(self, program: Program) -> Program:
        return self._commit(program)

    def delete(self, program: Program) -> None:
        self.db.delete(program)
        self._commit()
