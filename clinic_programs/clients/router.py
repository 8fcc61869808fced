"""
Client Router - API endpoints for the Client Registry.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.dependencies import get_current_identity, require_doctor
from ..auth.models import User
from ..auth.schemas import TokenIdentity
from ..core.pagination import PageParams
from .models import Gender
from .repository import ClientRepository
from .schemas import (
    ClientCreate,
    ClientEnvelope,
    ClientListResponse,
    ClientPage,
    ClientResponse,
    ClientSearchFilters,
    ClientSearchResponse,
    ClientUpdate,
)
from .service import ClientService

router = APIRouter()

def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Build the client service for the current request."""
    return ClientService(ClientRepository(db))

@router.post("/register", response_model=ClientEnvelope, status_code=status.HTTP_201_CREATED)
async def register_client(
    client_data: ClientCreate,
    current_user: User = Depends(require_doctor),
    client_service: ClientService = Depends(get_client_service),
):
    """
    Register a new client (doctors only).
    """
    client = client_service.register_client(client_data, current_user.id)
    return ClientEnvelope(message="Client registered successfully", client=ClientResponse.model_validate(client))

@router.get("/all", response_model=ClientListResponse)
async def list_clients(
    page_params: PageParams = Depends(),
    gender: Optional[Gender] = Query(None, description="Filter by gender"),
    registered_by_id: Optional[str] = Query(None, description="Filter by registering user"),
    identity: TokenIdentity = Depends(get_current_identity),
    client_service: ClientService = Depends(get_client_service),
):
    """
    Get a paginated list of clients.
    """
    filters = ClientSearchFilters(gender=gender, registered_by_id=registered_by_id)
    result = client_service.list_clients(filters, page_params.page, page_params.page_size)
    return ClientListResponse(message="Clients fetched successfully", data=ClientPage.model_validate(result, from_attributes=True))

@router.get("/search", response_model=ClientSearchResponse)
async def search_clients(
    query: str = Query("", description="Text matched against name, phone and email"),
    identity: TokenIdentity = Depends(get_current_identity),
    client_service: ClientService = Depends(get_client_service),
):
    """
    Search clients by name, phone or email.
    """
    clients = client_service.search_clients(query)
    return ClientSearchResponse(
        message="Clients search completed",
        clients=[ClientResponse.model_validate(client) for client in clients],
    )

@router.get("/{client_id}", response_model=ClientEnvelope)
async def get_client(
    client_id: str,
    identity: TokenIdentity = Depends(get_current_identity),
    client_service: ClientService = Depends(get_client_service),
):
    """
    Get a client by ID.
    """
    client = client_service.get_client(client_id)
    return ClientEnvelope(message="Client fetched successfully", client=ClientResponse.model_validate(client))

@router.put("/update/{client_id}", response_model=ClientEnvelope)
async def update_client(
    client_id: str,
    update_data: ClientUpdate,
    current_user: User = Depends(require_doctor),
    client_service: ClientService = Depends(get_client_service),
):
    """
    Update a client's details (doctors only).
    """
    client = client_service.update_client(client_id, update_data)
    return ClientEnvelope(message="Client updated successfully", client=ClientResponse.model_validate(client))
