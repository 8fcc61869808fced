"""
Client Model - Stores patient demographic and medical information.
"""
import enum
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, JSON, Enum, Text
from sqlalchemy.orm import relationship
from ..database import Base
from ..auth.models import generate_uuid, utcnow

class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"

class Client(Base):
    """
    Client Model - Stores patient records

    Fields:
    - id: Primary key for the client
    - first_name / last_name: Client's name
    - date_of_birth: Client's date of birth
    - gender: MALE, FEMALE or OTHER
    - street, city, state, postal_code: Address (optional)
    - phone, email: Contact details (optional)
    - medical_history: Free-text medical history (optional)
    - allergies: Ordered list of allergy names
    - registration_date: When the client was registered
    - registered_by_id: User who registered the client
    """
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    first_name = Column(String, nullable=False, index=True)
    last_name = Column(String, nullable=False, index=True)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(Enum(Gender), nullable=False)
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    medical_history = Column(Text, nullable=True)
    allergies = Column(JSON, nullable=False, default=list)
    registration_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    registered_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)

    # Relationships
    registered_by = relationship("User", back_populates="clients")
    enrollments = relationship("Enrollment", back_populates="client")

    def __repr__(self):
        """String representation of the Client model"""
        return f"<Client(id={self.id}, name='{self.first_name} {self.last_name}')>"
