"""
Client Schemas - Pydantic models for client data validation and serialization.
"""
from typing import List, Optional
from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field, field_validator
from .models import Gender

def _clean_allergies(value):
    # Anything but a list is left for List[str] validation to reject
    if not isinstance(value, list):
        return value
    return [
        item.strip() if isinstance(item, str) else item
        for item in value
        if not (isinstance(item, str) and not item.strip())
    ]

def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value

class ClientBase(BaseModel):
    """
    Fields shared by create and response schemas.

    Fields:
    - first_name / last_name: at least 2 characters
    - date_of_birth: ISO date
    - gender: MALE, FEMALE or OTHER
    - street, city, state, postal_code, phone, email, medical_history: optional
    - allergies: list of allergy names, blanks dropped
    """
    first_name: str = Field(..., min_length=2)
    last_name: str = Field(..., min_length=2)
    date_of_birth: date
    gender: Gender
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    medical_history: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)

class ClientCreate(ClientBase):
    """Client Registration Schema"""

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        return _blank_to_none(value)

    @field_validator("allergies", mode="before")
    @classmethod
    def clean_allergies(cls, value):
        return _clean_allergies(value) or []

class ClientUpdate(BaseModel):
    """
    Client Update Schema - every field optional; only supplied fields change.
    """
    first_name: Optional[str] = Field(None, min_length=2)
    last_name: Optional[str] = Field(None, min_length=2)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    medical_history: Optional[str] = None
    allergies: Optional[List[str]] = None

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        return _blank_to_none(value)

    @field_validator("allergies", mode="before")
    @classmethod
    def clean_allergies(cls, value):
        return _clean_allergies(value)

class ClientResponse(ClientBase):
    """Client as returned by the API."""
    id: str
    # Stored emails are returned as-is
    email: Optional[str] = None
    registration_date: datetime
    registered_by_id: str

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class ClientSearchFilters(BaseModel):
    """Optional equality filters for the paginated client list."""
    gender: Optional[Gender] = None
    registered_by_id: Optional[str] = None

class ClientEnvelope(BaseModel):
    message: str
    client: ClientResponse

class ClientPage(BaseModel):
    """
    Client Page - one page of clients plus pagination details

    Fields:
    - clients: Clients on this page
    - total: Total number of matching clients
    - page: Current page number
    - page_size: Number of clients per page
    - total_pages: Total number of pages
    """
    clients: List[ClientResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

class ClientListResponse(BaseModel):
    message: str
    data: ClientPage

class ClientSearchResponse(BaseModel):
    message: str
    clients: List[ClientResponse]
