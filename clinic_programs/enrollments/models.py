"""
Enrollment Model - Links a client to a program with a status.
"""
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base
from ..auth.models import generate_uuid, utcnow

class EnrollmentStatus(str, enum.Enum):
    """
    Enrollment lifecycle states.

    Any state may follow any other; ACTIVE is the initial state.
    """
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    DROPPED = "DROPPED"

class Enrollment(Base):
    """
    Enrollment Model

    Fields:
    - id: Primary key for the enrollment
    - client_id: Enrolled client
    - program_id: Program the client is enrolled in
    - enrolled_by_id: User who created the enrollment
    - enrollment_date: When the enrollment was created
    - status: ACTIVE, COMPLETED or DROPPED
    - notes: Optional free text

    A client can hold at most one enrollment per program.
    """
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("client_id", "program_id", name="uq_enrollment_client_program"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    program_id = Column(String(36), ForeignKey("programs.id"), nullable=False, index=True)
    enrolled_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    enrollment_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(Enum(EnrollmentStatus), nullable=False, default=EnrollmentStatus.ACTIVE)
    notes = Column(Text, nullable=True)

    # Relationships
    client = relationship("Client", back_populates="enrollments")
    program = relationship("Program", back_populates="enrollments")
    enrolled_by = relationship("User", back_populates="enrollments")

    def __repr__(self):
        """String representation of the Enrollment model"""
        return f"<Enrollment(id={self.id}, client_id={self.client_id}, program_id={self.program_id}, status={self.status})>"
