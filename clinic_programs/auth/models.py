"""
User Model - Stores the doctors and administrators who operate the system.
"""
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Enum
from sqlalchemy.orm import relationship
from ..database import Base


def generate_uuid() -> str:
    """Primary keys are UUID4 strings."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    """
    Enumeration for user roles.

    Roles:
    - DOCTOR: Registers clients, manages programs and enrollments
    - ADMIN: Manages programs
    """
    DOCTOR = "DOCTOR"
    ADMIN = "ADMIN"


class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - email: Unique email address used to log in
    - password_hash: bcrypt hash (never store raw passwords)
    - full_name: User's complete name
    - role: DOCTOR or ADMIN
    - created_at: Timestamp when user was created
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.DOCTOR)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    programs = relationship("Program", back_populates="created_by")
    clients = relationship("Client", back_populates="registered_by")
    enrollments = relationship("Enrollment", back_populates="enrolled_by")

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"
