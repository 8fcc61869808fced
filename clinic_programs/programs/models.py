"""
Program Model - Stores clinical program definitions.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from ..database import Base
from ..auth.models import generate_uuid, utcnow

class Program(Base):
    """
    Program Model - A named clinical program clients can be enrolled into

    Fields:
    - id: Primary key for the program
    - name: Program name
    - description: Optional description
    - created_at: When the program was created
    - created_by_id: User who created the program
    """
    __tablename__ = "programs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    # Relationships
    created_by = relationship("User", back_populates="programs")
    enrollments = relationship("Enrollment", back_populates="program")

    def __repr__(self):
        """String representation of the Program model"""
        return f"<Program(id={self.id}, name='{self.name}')>"
